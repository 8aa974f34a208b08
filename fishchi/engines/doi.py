"""
fishchi/engines/doi.py

DOI extraction and direct Crossref lookup.

Importing a source by DOI skips parsing altogether: the metadata comes
straight from Crossref's works API and is normalized to a
BibliographicRecord. This is the only network call in the package.
"""

import re
from typing import Any, Dict, Optional

import requests

from ..models import Author, BibliographicRecord, LanguageTag, SourceType, is_plausible_year
from ..config import CROSSREF_WORKS_URL, DEFAULT_HEADERS, DEFAULT_TIMEOUT
from ..errors import DoiLookupError
from ..logging_utils import get_logger

logger = get_logger('doi')

_DOI_RE = re.compile(r'\b(10\.\d{4,9}/[^\s"<>]+)', re.IGNORECASE)


def extract_doi(text: str) -> str:
    """
    Extract a DOI from free text or a URL.

    Examples:
        doi:10.1234/jet.2024.001 → 10.1234/jet.2024.001
        https://doi.org/10.1038/nature12373 → 10.1038/nature12373
        https://onlinelibrary.wiley.com/doi/full/10.1002/abc.123 → 10.1002/abc.123

    Returns:
        The DOI string, or empty string if not found
    """
    if not text:
        return ''

    # DOI in query string
    match = re.search(r'[?&]doi=(10\.\d{4,9}/[^\s&?#]+)', text, re.IGNORECASE)
    if match:
        return match.group(1).rstrip('.,;:)')

    # doi.org links, /doi/ paths, doi: prefixes and bare DOIs
    match = _DOI_RE.search(text)
    if match:
        return match.group(1).split('?')[0].split('#')[0].rstrip('.,;:)')

    return ''


def _request_crossref(doi: str) -> Dict[str, Any]:
    """
    Raw Crossref 'message' object for a DOI.

    Raises:
        DoiLookupError: network failure, non-200 status or empty payload
    """
    url = f"{CROSSREF_WORKS_URL}{doi}"
    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=DEFAULT_TIMEOUT)
    except requests.RequestException as e:
        raise DoiLookupError("Crossref request failed", detail=doi, cause=e) from e

    if response.status_code != 200:
        raise DoiLookupError(
            f"Crossref returned {response.status_code}",
            detail=doi,
        )

    try:
        data = response.json().get('message') or {}
    except ValueError as e:
        raise DoiLookupError("Crossref returned invalid JSON", detail=doi, cause=e) from e

    if not data:
        raise DoiLookupError("Crossref returned no metadata", detail=doi)
    return data


def fetch_crossref_by_doi(doi: str) -> Optional[BibliographicRecord]:
    """
    Fetch metadata directly from Crossref using a DOI.

    Args:
        doi: The DOI to look up (a doi.org URL is accepted too)

    Returns:
        BibliographicRecord, or None if the lookup failed
    """
    doi = extract_doi(doi) or (doi or '').strip()
    if not doi:
        return None

    logger.info("[Crossref DOI] Fetching: %s", doi)
    try:
        data = _request_crossref(doi)
    except DoiLookupError as e:
        logger.warning("[Crossref DOI] %s: %s", e.message, e.detail)
        return None

    record = _normalize_crossref(data, doi)
    logger.info("[Crossref DOI] Found: %s", (record.title or 'Unknown')[:50])
    return record


def _first(value) -> Optional[str]:
    if isinstance(value, list):
        value = value[0] if value else None
    if value in (None, ''):
        return None
    return str(value)


def _normalize_crossref(data: Dict[str, Any], doi: str) -> BibliographicRecord:
    """
    Normalize Crossref API response to a BibliographicRecord.

    Crossref sources are recorded as English.
    """
    authors = []
    for author in data.get('author', []):
        given = (author.get('given') or '').strip()
        family = (author.get('family') or '').strip()
        if family:
            authors.append(Author(firstname=given, lastname=family))

    year = None
    for key in ('issued', 'published', 'created'):
        try:
            year = int(data[key]['date-parts'][0][0])
            break
        except (KeyError, IndexError, TypeError, ValueError):
            continue
    if not is_plausible_year(year):
        year = None

    crossref_type = data.get('type', 'journal-article')
    if crossref_type in ('book', 'monograph', 'edited-book', 'book-chapter'):
        source_type = SourceType.BOOK
    elif crossref_type == 'dissertation':
        source_type = SourceType.THESIS
    elif crossref_type == 'journal-article':
        source_type = SourceType.ARTICLE
    else:
        source_type = SourceType.OTHER

    found_doi = data.get('DOI') or doi

    return BibliographicRecord(
        id=found_doi,
        title=_first(data.get('title')),
        authors=authors,
        year=year,
        venue=_first(data.get('container-title')),
        volume=_first(data.get('volume')),
        issue=_first(data.get('issue')),
        pages=_first(data.get('page')),
        publisher=_first(data.get('publisher')),
        doi=found_doi,
        isbn=_first(data.get('ISBN')),
        url=data.get('URL') or f"https://doi.org/{found_doi}",
        language=LanguageTag.ENGLISH,
        source_type=source_type,
    )
