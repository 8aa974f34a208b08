"""
fishchi/engines/__init__.py

External metadata sources.
"""

from .doi import (
    extract_doi,
    fetch_crossref_by_doi,
)

__all__ = [
    'extract_doi',
    'fetch_crossref_by_doi',
]
