"""
fishchi/localizer.py

English -> Persian connector substitutions for rendered citations.

Formatters emit English connectors ("and", "et al.", "pp.") regardless of
locale; this pass replaces them after rendering. Matching is anchored on
word boundaries so "and" inside "Anderson" or "p." inside "pp." are left
alone. Pure and total: any string in, a string out.
"""

import re
from typing import List, Optional, Pattern, Tuple

from .config import PERSIAN_LOCALIZATIONS, PERSIAN_DIGITS, PERSIAN_NUMERALS

_COLLAPSE_PATTERNS: List[Tuple[Pattern, str]] = [
    (re.compile(r',?\s*\bet\s+al\b\.?', re.IGNORECASE), ' و همکاران'),
    # a spaced "&" or "&amp;"; "R&D" stays
    (re.compile(r'\s+&(?:amp;)?\s+'), ' و '),
    (re.compile(r',\s+and\b', re.IGNORECASE), ' and'),
]

_TABLE: List[Tuple[Pattern, str]] = [
    (re.compile(rf'(?<!\w){pattern}(?!\w)', re.IGNORECASE), replacement)
    for pattern, replacement in PERSIAN_LOCALIZATIONS
]

_LINK_RE = re.compile(r'((?:https?://|www\.|doi:)[^\s<>"]+)', re.IGNORECASE)

_TO_PERSIAN_DIGITS = str.maketrans('0123456789', PERSIAN_DIGITS)


def to_persian_numerals(text: str) -> str:
    """Convert ASCII digits to Persian digits."""
    return text.translate(_TO_PERSIAN_DIGITS)


def _localize_words(text: str, persian_numerals: bool) -> str:
    for pattern, replacement in _COLLAPSE_PATTERNS:
        text = pattern.sub(replacement, text)

    for pattern, replacement in _TABLE:
        text = pattern.sub(replacement, text)

    if persian_numerals:
        text = to_persian_numerals(text)
    return text


def localize(text: str, persian_numerals: Optional[bool] = None) -> str:
    """
    Replace English connectors with their Persian equivalents.

    Links (http(s)://, www., doi:) are copied through unchanged.

    Args:
        text: Rendered citation or bibliography markup
        persian_numerals: Also convert digits; defaults to the
            FISHCHI_PERSIAN_NUMERALS setting

    Returns:
        Localized text. Empty or non-string input gives an empty string.
    """
    if not isinstance(text, str) or not text:
        return ''

    if persian_numerals is None:
        persian_numerals = PERSIAN_NUMERALS

    # odd indices are links
    parts = _LINK_RE.split(text)
    return ''.join(
        part if i % 2 else _localize_words(part, persian_numerals)
        for i, part in enumerate(parts)
    )
