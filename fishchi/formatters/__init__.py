"""
fishchi/formatters/__init__.py

Citation formatters package.
"""

from .base import (
    BaseFormatter,
    FormatterBackend,
    register_formatter,
    get_formatter,
    format_citation,
    resolve_template,
    get_available_styles,
    is_style_supported,
    entry_texts,
)
from .apa import APAFormatter
from .mla import MLAFormatter
from .chicago import ChicagoFormatter
from .harvard import HarvardFormatter
from .vancouver import VancouverFormatter

__all__ = [
    'BaseFormatter',
    'FormatterBackend',
    'register_formatter',
    'get_formatter',
    'format_citation',
    'resolve_template',
    'get_available_styles',
    'is_style_supported',
    'entry_texts',
    'APAFormatter',
    'MLAFormatter',
    'ChicagoFormatter',
    'HarvardFormatter',
    'VancouverFormatter',
]
