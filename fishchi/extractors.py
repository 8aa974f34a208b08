"""
fishchi/extractors.py

Positional field extraction for free-form citations.
These use regex and pattern matching to pull metadata out of raw text.

Every step is independent and fail-soft: a field that cannot be recovered
stays None and the rest of the record is still filled in.
"""

import re
from typing import Optional, Tuple

from .models import (
    Author,
    BibliographicRecord,
    CitationStyle,
    LanguageTag,
    SourceType,
    is_plausible_year,
)
from .config import (
    PERSIAN_DIGITS,
    ARABIC_INDIC_DIGITS,
    MAX_VENUE_LENGTH,
    MIN_TITLE_LENGTH,
    PUBLISHER_HINTS,
    THESIS_HINTS,
)
from .detectors import is_persian
from . import names
from .logging_utils import get_logger

logger = get_logger(__name__.split('.')[-1])


# =============================================================================
# PATTERNS
# =============================================================================

_DIGIT_TABLE = str.maketrans(PERSIAN_DIGITS + ARABIC_INDIC_DIGITS, '0123456789' * 2)

_LEADING_NUMBER_RE = re.compile(r'^\s*(?:\[\d+\]|\d+\.(?=\s))\s*')
_WHITESPACE_RE = re.compile(r'\s+')

# Author segment boundaries
_PAREN_YEAR_RE = re.compile(r'\s*\(\d{4}[a-z]?\)')
_DOT_PAREN_RE = re.compile(r'\.\s*\(')
_BARE_YEAR_RE = re.compile(r'(?:[,،]\s*|\s+)(?=\d{4}[a-z]?\s*[,،])')
_INITIAL_FOLLOW_RE = re.compile(r'\s*(?:[A-Z]\.|[,;&(\-]|$)')

# Year: not part of a DOI, URL, or page range
_YEAR_RE = re.compile(r'(?<![\d/.\-])\(?(\d{4})[a-z]?\)?(?=\s*[.,;:؛،)]|\s*$)')
_TRAILING_YEAR_RE = re.compile(r'[\s,.;:؛،]*\(?\d{4}[a-z]?\)?[\s,.;:؛،]*$')

_LEAD_PUNCT = ' \t\n.,:;،؛'
_ABBREVIATIONS = frozenset(['vol', 'vols', 'no', 'nos', 'pp', 'p', 'ed', 'eds', 'ch', 'iss'])
_WORD_BEFORE_RE = re.compile(r'(\w+)$')
# ", vol. 3" / ", pp. 1-9" ends an unquoted title
_TITLE_LABEL_RE = re.compile(r'[,،]\s*(?:vol|no|pp?)\.\s*\d', re.IGNORECASE)
_QUOTES = {'"': '"', '“': '”', '«': '»'}

_VOLUME_PATTERNS = [
    re.compile(r'(\d+)\s*\(\s*(\d{1,3})\s*\)'),
    re.compile(r'\bvol\.\s*(\d+),?\s*no\.\s*(\d+)', re.IGNORECASE),
    re.compile(r'(\d+),\s*no\.\s*(\d+)', re.IGNORECASE),
    re.compile(r'(?:دوره|جلد)\s*(\d+)[،,]?\s*شماره\s*(\d+)'),
    re.compile(r'\bvol\.\s*(\d+)()', re.IGNORECASE),
]

_PAGE_PATTERNS = [
    re.compile(r'\bpp\.\s*(\d+\s*[-–—]\s*\d+)', re.IGNORECASE),
    re.compile(r'(?<![\d/.])(\d+\s*[-–—]\s*\d+)(?![\d/])'),
    re.compile(r'\bp\.\s*(\d+)', re.IGNORECASE),
]

_DOI_RE = re.compile(r'(?:\bdoi:\s*|doi\.org/)(10\.\d{4,9}/[^\s,;]+)', re.IGNORECASE)
_ISBN_RE = re.compile(r'\bisbn[:\s]*([0-9Xx][0-9Xx\-]{8,})', re.IGNORECASE)
_URL_RE = re.compile(r'https?://[^\s,]+', re.IGNORECASE)


# =============================================================================
# HELPERS
# =============================================================================

def normalize_digits(text: str) -> str:
    """Convert Persian and Arabic-Indic digits to ASCII."""
    return text.translate(_DIGIT_TABLE)


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = _WHITESPACE_RE.sub(' ', text).strip(_LEAD_PUNCT + '"“”«»')
    return text or None


def _is_initial_dot(text: str, i: int) -> bool:
    """A '.' closing a single uppercase letter that is followed by more name material."""
    if i < 1 or not text[i - 1].isupper():
        return False
    if i >= 2 and text[i - 2].isalpha():
        return False
    return bool(_INITIAL_FOLLOW_RE.match(text, i + 1))


def _is_abbreviation_dot(text: str, i: int) -> bool:
    """A '.' closing a label such as "vol." or "pp."."""
    m = _WORD_BEFORE_RE.search(text, 0, i)
    if not m:
        return False
    word = m.group(1)
    # a lone capital is an initial
    if len(word) == 1 and word.isupper():
        return False
    return word.lower() in _ABBREVIATIONS


def _next_terminator(text: str, start: int, skip_initials: bool = False) -> Optional[int]:
    """Index of the next sentence-terminating period at or after start."""
    i = text.find('.', start)
    while i != -1:
        at_end = i + 1 >= len(text) or text[i + 1].isspace()
        if at_end and not _is_abbreviation_dot(text, i) and not (skip_initials and _is_initial_dot(text, i)):
            return i
        i = text.find('.', i + 1)
    return None


# =============================================================================
# FIELD EXTRACTORS
# =============================================================================

def find_author_end(text: str) -> Optional[int]:
    """
    End index of the author segment.

    Earliest of: a parenthesized year (or ". ("), an unparenthesized
    ", YYYY," / " YYYY,", and the first sentence-terminating period.
    """
    candidates = []

    m = _PAREN_YEAR_RE.search(text)
    if m:
        candidates.append(m.start())
    m = _DOT_PAREN_RE.search(text)
    if m:
        candidates.append(m.start() + 1)
    m = _BARE_YEAR_RE.search(text)
    if m:
        candidates.append(m.start())
    terminator = _next_terminator(text, 0, skip_initials=True)
    if terminator is not None:
        candidates.append(terminator)

    candidates = [c for c in candidates if c > 0]
    return min(candidates) if candidates else None


def extract_authors(segment: str) -> list:
    """Hand the author segment to the name segmenter."""
    segment = segment.strip(' ,;:')
    if not segment:
        return []
    language = LanguageTag.PERSIAN if is_persian(segment) else LanguageTag.ENGLISH
    return names.segment(segment, language)


def find_year(text: str) -> Tuple[Optional[int], Optional[re.Match]]:
    """First plausible year marker, with its match for positional use."""
    for m in _YEAR_RE.finditer(text):
        year = int(m.group(1))
        if is_plausible_year(year):
            return year, m
    return None, None


def extract_year(text: str) -> Optional[int]:
    year, _ = find_year(normalize_digits(text))
    return year


def extract_title(text: str, start: int) -> Tuple[Optional[str], int]:
    """
    Title starting at ``start``, and the index where it ends.

    Quoted titles are taken whole. Otherwise the title runs to the next
    sentence terminator or ", vol." style label; a too-short candidate
    falls back to the next segment.
    """
    while start < len(text) and text[start] in _LEAD_PUNCT:
        start += 1
    if start >= len(text):
        return None, start

    opener = text[start]
    if opener in _QUOTES:
        close = text.find(_QUOTES[opener], start + 1)
        if close != -1:
            return _clean(text[start + 1:close]), close + 1

    end = _next_terminator(text, start)
    if end is None:
        end = len(text)
    label = _TITLE_LABEL_RE.search(text, start, end)
    if label:
        end = label.start()
    title = _clean(text[start:end])

    if title is None or len(title) < MIN_TITLE_LENGTH:
        next_start = end + 1
        next_end = _next_terminator(text, next_start)
        if next_end is None:
            next_end = len(text)
        candidate = _clean(text[next_start:next_end])
        if candidate and (title is None or len(candidate) > len(title)):
            return candidate, next_end

    return title, end


def find_volume_issue(text: str, start: int) -> Tuple[Optional[str], Optional[str], Optional[int]]:
    """Earliest volume/issue token after ``start``; returns (volume, issue, position)."""
    best = None
    for pattern in _VOLUME_PATTERNS:
        m = pattern.search(text, start)
        if m and (best is None or m.start() < best.start()):
            best = m
    if best is None:
        return None, None, None
    return best.group(1), (best.group(2) or None), best.start()


def extract_venue(text: str, start: int, end: int) -> Optional[str]:
    """Last sentence segment between the title and the volume token."""
    chunk = _TRAILING_YEAR_RE.sub('', text[start:end])
    segments = [s for s in re.split(r'\.\s+', chunk) if s.strip(_LEAD_PUNCT)]
    if not segments:
        return None
    venue = _clean(segments[-1])
    if venue and len(venue) > MAX_VENUE_LENGTH:
        logger.debug("[Extract] Venue candidate too long (%d chars), dropped", len(venue))
        return None
    return venue


def extract_pages(text: str) -> Optional[str]:
    """Page range or single page, searched after identifiers are removed."""
    stripped = _URL_RE.sub(' ', text)
    stripped = _DOI_RE.sub(' ', stripped)
    stripped = _ISBN_RE.sub(' ', stripped)
    for pattern in _PAGE_PATTERNS:
        m = pattern.search(stripped)
        if m:
            return re.sub(r'\s*[–—-]\s*', '-', m.group(1))
    return None


def extract_doi(text: str) -> Optional[str]:
    m = _DOI_RE.search(text)
    return m.group(1).rstrip('.') if m else None


def extract_isbn(text: str) -> Optional[str]:
    m = _ISBN_RE.search(text)
    return m.group(1).rstrip('-') if m else None


def extract_url(text: str) -> Optional[str]:
    m = _URL_RE.search(text)
    return m.group(0).rstrip('.') if m else None


def extract_publisher(text: str, start: int) -> Optional[str]:
    """The segment after the title, when it reads like a publisher."""
    end = _next_terminator(text, start + 1)
    segment = _clean(_TRAILING_YEAR_RE.sub('', text[start:end if end is not None else len(text)]))
    if not segment:
        return None
    lower = segment.lower()
    if not any(hint in lower for hint in PUBLISHER_HINTS):
        return None
    # "City: Publisher"
    if ':' in segment:
        segment = segment.rsplit(':', 1)[1].strip()
    return segment or None


def infer_source_type(text: str, isbn: Optional[str], url: Optional[str], venue: Optional[str]) -> SourceType:
    lower = text.lower()
    if isbn or re.search(r'\bbook\b', lower):
        return SourceType.BOOK
    if any(hint in lower for hint in THESIS_HINTS):
        return SourceType.THESIS
    if url and not venue:
        return SourceType.WEBSITE
    return SourceType.ARTICLE


# =============================================================================
# MAIN EXTRACTOR
# =============================================================================

def _attempt(step: str, func, *args):
    """Run one extraction step; a failure leaves the field empty."""
    try:
        return func(*args)
    except (ValueError, IndexError, AttributeError, TypeError) as e:
        logger.debug("[Extract] %s failed: %s", step, e)
        return None


def extract(raw: str, style: CitationStyle = CitationStyle.UNKNOWN,
            language: LanguageTag = LanguageTag.ENGLISH) -> BibliographicRecord:
    """
    Extract a structured record from one raw citation.

    Args:
        raw: Citation text (any style, Persian or English)
        style: Detected style; extraction is positional and works for all
        language: Language tag stored on the record

    Returns:
        BibliographicRecord with every recoverable field filled in
    """
    text = _WHITESPACE_RE.sub(' ', normalize_digits(raw or '')).strip()
    text = _LEADING_NUMBER_RE.sub('', text)

    # Authors
    author_end = _attempt('authors', find_author_end, text)
    authors = []
    if author_end is not None:
        authors = _attempt('authors', extract_authors, text[:author_end]) or []

    # Year
    year, year_match = find_year(text)

    # Title: right after the year marker when it directly follows the authors
    title_start = author_end or 0
    if year_match is not None and year_match.start() >= title_start:
        between = text[title_start:year_match.start()]
        if not between.strip(_LEAD_PUNCT):
            title_start = year_match.end()
    title, title_end = _attempt('title', extract_title, text, title_start) or (None, title_start)

    # Volume, issue, venue
    volume, issue, volume_pos = _attempt('volume', find_volume_issue, text, title_end) or (None, None, None)
    venue = None
    if volume_pos is not None:
        venue = _attempt('venue', extract_venue, text, title_end, volume_pos)

    # Identifiers
    doi = _attempt('doi', extract_doi, text)
    isbn = _attempt('isbn', extract_isbn, text)
    url = _attempt('url', extract_url, text)

    pages = _attempt('pages', extract_pages, text[title_end:])

    publisher = None
    if venue is None:
        publisher = _attempt('publisher', extract_publisher, text, title_end)

    source_type = infer_source_type(text, isbn, url, venue)

    return BibliographicRecord(
        title=title,
        authors=[a for a in authors if isinstance(a, Author)],
        year=year,
        venue=venue,
        volume=volume,
        issue=issue,
        pages=pages,
        publisher=publisher,
        doi=doi,
        isbn=isbn,
        url=url,
        language=LanguageTag.from_string(language),
        source_type=source_type,
    )
