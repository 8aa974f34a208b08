"""
fishchi/service.py

Orchestration used by the HTTP adapter: formatting a citation point plus
its reference list, and converting a document's citations to a new style.

This is the primary public API for the render direction.
"""

from typing import Any, Dict, List, Optional, Sequence

from .models import BibliographicRecord, CitationStyle
from .config import LOCALE_ENGLISH, LANGUAGE_AUTO
from .formatters import resolve_template
from .renderer import (
    BibliographyRenderer,
    CitationRenderer,
    OrderLike,
    VancouverOrder,
    as_order,
    resolve_language,
)
from .errors import InvalidInputError
from .logging_utils import get_logger

logger = get_logger(__name__.split('.')[-1])

__all__ = ['format_citations', 'convert_citation_style', 'resolve_language']


def format_citations(records: Sequence[BibliographicRecord], style=CitationStyle.APA,
                     cited_ids=None, lang=LOCALE_ENGLISH, order: OrderLike = None,
                     backend=None) -> Dict[str, str]:
    """
    In-text citation for the cited records plus the full reference list.

    Both renders share one Vancouver session, so numbers assigned to ids
    missing from the order agree between the two.
    """
    records = list(records or [])
    session = as_order(order, records)
    in_text = CitationRenderer(backend).render_in_text(records, style, cited_ids, lang, session)
    bibliography = BibliographyRenderer(backend).render_bibliography(records, style, lang, session)
    return {'in_text': in_text, 'bibliography': bibliography}


def convert_citation_style(records: Sequence[BibliographicRecord], new_style,
                           source_ids: Optional[Sequence] = None, lang=LANGUAGE_AUTO,
                           current_style=None, backend=None) -> Dict[str, Any]:
    """
    Re-render every citation of a document in a new style.

    Args:
        records: The document's records
        new_style: Target style name or CitationStyle
        source_ids: Citation order of the document (defaults to record order)
        lang: Language hint; 'auto' resolves by Persian majority
        current_style: Style the document uses now, if known

    Returns:
        Dict with per-source in-text citations, the bibliography and
        success/error counts

    Raises:
        InvalidInputError: no records, or the new style equals the current one
    """
    records = list(records or [])
    if not records:
        raise InvalidInputError("No sources to convert")

    template = resolve_template(new_style)
    if current_style and resolve_template(current_style) == template:
        raise InvalidInputError("Current and new styles are the same")

    if not source_ids:
        source_ids = [r.id for r in records]
    source_ids = [str(sid) for sid in source_ids]

    # Fresh numbering for this document, in citation order
    session = VancouverOrder(source_ids)
    known = {str(r.id) for r in records}
    locale = resolve_language(lang, records)

    citation_renderer = CitationRenderer(backend)
    converted: List[Dict[str, Any]] = []
    for source_id in source_ids:
        if source_id not in known:
            logger.warning("[Convert] Source %r not found", source_id)
            converted.append({'source_id': source_id, 'in_text': '[Error]', 'error': 'Source not found'})
            continue
        in_text = citation_renderer.render_in_text(records, template, [source_id], locale, session)
        converted.append({'source_id': source_id, 'in_text': in_text})

    bibliography = BibliographyRenderer(backend).render_bibliography(records, template, locale, session)

    errors = sum(1 for c in converted if 'error' in c)
    logger.info("[Convert] %d citations converted to %s (%d errors)",
                len(converted), template, errors)

    return {
        'converted_citations': converted,
        'bibliography': bibliography,
        'new_style': template,
        'language': locale,
        'total_converted': len(converted),
        'success_count': len(converted) - errors,
        'error_count': errors,
    }
