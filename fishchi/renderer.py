"""
fishchi/renderer.py

Render-direction entry points:
1. In-text citations (CitationRenderer)
2. Reference lists (BibliographyRenderer)

Both delegate entry formatting to a backend (FormatterBackend by default),
localize Persian output, and never raise: a failure degrades to a
deterministic fallback string.

Vancouver numbering comes from an explicit VancouverOrder, one per render
session. Nothing here keeps numbering state between unrelated documents.
"""

import re
import threading
from html import escape
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .models import BibliographicRecord, CitationStyle, LanguageTag
from .config import LOCALE_PERSIAN, LOCALE_ENGLISH, LANGUAGE_AUTO, SECTION_HEADINGS
from .formatters import FormatterBackend, resolve_template, entry_texts
from .localizer import localize
from .logging_utils import get_logger, log_exception

logger = get_logger(__name__.split('.')[-1])

VANCOUVER = CitationStyle.VANCOUVER.template
EMPTY_BIBLIOGRAPHY = '<div>No sources to format</div>'

_LEADING_NUMBER_RE = re.compile(r'^\s*(?:\[\d+\]|\d+\.)\s*')
_TAG_RE = re.compile(r'<[^>]+>')


# =============================================================================
# VANCOUVER ORDER
# =============================================================================

class VancouverOrder:
    """
    Record id -> 1-based citation number for one document.

    Built from the document order of first appearance. Ids that are not in
    the order get the next unused number the first time they are asked
    for, and keep it for the rest of the session.
    """

    def __init__(self, ids: Optional[Iterable] = None):
        self._lock = threading.Lock()
        self._numbers: Dict[str, int] = {}
        self._counter = 0
        if ids:
            self.extend(ids)

    def _assign(self, key: str) -> int:
        number = self._numbers.get(key)
        if number is None:
            self._counter += 1
            number = self._numbers[key] = self._counter
        return number

    def extend(self, ids: Iterable) -> None:
        """Append ids in order; ids already numbered keep their number."""
        with self._lock:
            for record_id in ids:
                self._assign(str(record_id))

    def position(self, record_id) -> Optional[int]:
        """Number of an id, or None if it has not been numbered."""
        with self._lock:
            return self._numbers.get(str(record_id))

    def number_for(self, record_id) -> int:
        """Number of an id, assigning the next unused one if needed."""
        key = str(record_id)
        with self._lock:
            if key not in self._numbers:
                logger.warning("[Vancouver] Id %r missing from citation order, assigning %d",
                               key, self._counter + 1)
            return self._assign(key)

    def reset(self, ids: Optional[Iterable] = None) -> None:
        with self._lock:
            self._numbers.clear()
            self._counter = 0
        if ids:
            self.extend(ids)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._numbers)

    def __contains__(self, record_id) -> bool:
        with self._lock:
            return str(record_id) in self._numbers

    def __len__(self) -> int:
        with self._lock:
            return len(self._numbers)

    def __repr__(self):
        return f"VancouverOrder({self.snapshot()!r})"


OrderLike = Union[VancouverOrder, Sequence, None]


def as_order(order: OrderLike, records: Sequence[BibliographicRecord]) -> VancouverOrder:
    """Accept a VancouverOrder or an id list; None means record order."""
    if isinstance(order, VancouverOrder):
        return order
    if order is None:
        return VancouverOrder(r.id for r in records)
    return VancouverOrder(order)


# =============================================================================
# HELPERS
# =============================================================================

def resolve_language(hint, records: Sequence[BibliographicRecord] = ()) -> str:
    """
    Locale for a language hint.

    'auto' (or no hint) is Persian only when Persian records are a strict
    majority.
    """
    if isinstance(hint, LanguageTag):
        return hint.locale
    if hint is None or str(hint).strip().lower() in ('', LANGUAGE_AUTO):
        persian = sum(1 for r in records if r.is_persian)
        return LOCALE_PERSIAN if records and persian * 2 > len(records) else LOCALE_ENGLISH
    return LanguageTag.from_string(hint).locale


def _direction(locale: str):
    return ('rtl', 'right') if locale == LOCALE_PERSIAN else ('ltr', 'left')


def strip_tags(html: str) -> str:
    return _TAG_RE.sub('', html or '').strip()


def fallback_entry(record: BibliographicRecord) -> str:
    author = record.first_author_lastname or 'Unknown'
    year = record.year or 'n.d.'
    title = record.title or 'Untitled'
    return escape(f"{author}. ({year}). {title}.", quote=False)


def fallback_in_text(record: Optional[BibliographicRecord], vancouver: bool) -> str:
    if vancouver:
        return '[1]'
    if record is None:
        return '(Unknown, n.d.)'
    return f"({record.first_author_lastname or 'Unknown'}, {record.year or 'n.d.'})"


# =============================================================================
# IN-TEXT CITATIONS
# =============================================================================

class CitationRenderer:
    """Renders the in-text marker for one citation point."""

    def __init__(self, backend=None):
        self.backend = backend or FormatterBackend()

    @staticmethod
    def select(records: Sequence[BibliographicRecord], cited_ids=None) -> List[BibliographicRecord]:
        """Cited records in cited-id order; the first record when nothing is cited."""
        if not cited_ids:
            return list(records[:1])
        by_id = {}
        for r in records:
            by_id.setdefault(str(r.id), r)
        selected = []
        seen = set()
        for record_id in cited_ids:
            key = str(record_id)
            if key in by_id and key not in seen:
                seen.add(key)
                selected.append(by_id[key])
        return selected

    def render_in_text(self, records: Sequence[BibliographicRecord], style=CitationStyle.APA,
                       cited_ids=None, language=LOCALE_ENGLISH, order: OrderLike = None) -> str:
        """
        In-text citation for the cited records.

        Args:
            records: Candidate records (caller-assigned ids)
            style: CitationStyle or any style alias
            cited_ids: Ids cited at this point, in citation order
            language: 'fa-IR', 'en-US', 'auto' or a LanguageTag
            order: VancouverOrder or the document's ordered id list

        Returns:
            "(Smith, 2024)" / "[1,3]" style string; "(?)" / "[?]" when no
            cited id matches a record
        """
        records = list(records or [])
        template = resolve_template(style)
        vancouver = template == VANCOUVER
        selected = []
        try:
            selected = self.select(records, cited_ids)
            if not selected:
                return '[?]' if vancouver else '(?)'

            if vancouver:
                session = as_order(order, records)
                numbers = sorted({session.number_for(r.id) for r in selected})
                return f"[{','.join(str(n) for n in numbers)}]"

            locale = resolve_language(language, selected)
            text = self.backend.citation(selected, template, locale)
            if locale == LOCALE_PERSIAN:
                text = localize(text)
            return text.strip()
        except Exception as e:
            log_exception("[Render] In-text citation failed", e, logger)
            return fallback_in_text(selected[0] if selected else (records[0] if records else None), vancouver)


# =============================================================================
# BIBLIOGRAPHY
# =============================================================================

class BibliographyRenderer:
    """
    Renders a reference list.

    Vancouver lists are rendered entry by entry in citation order, each in
    its own language. Other styles are split into a Persian and an English
    section, each sorted by title and rendered as one batch.
    """

    def __init__(self, backend=None):
        self.backend = backend or FormatterBackend()

    def render_bibliography(self, records: Sequence[BibliographicRecord], style=CitationStyle.APA,
                            language=LANGUAGE_AUTO, order: OrderLike = None) -> str:
        records = list(records or [])
        if not records:
            return EMPTY_BIBLIOGRAPHY

        template = resolve_template(style)
        if template == VANCOUVER:
            return self._render_vancouver(records, template, order)
        return self._render_sections(records, template, language)

    # -------------------------------------------------------------------------

    def _render_entry(self, record: BibliographicRecord, template: str, locale: str) -> str:
        """One record rendered alone; falls back instead of raising."""
        try:
            html = self.backend.bibliography([record], template, locale)
            texts = entry_texts(html)
            return texts[0] if texts else strip_tags(html)
        except Exception as e:
            log_exception(f"[Render] Entry {record.id!r} failed, using fallback", e, logger)
            return fallback_entry(record)

    def _render_vancouver(self, records: List[BibliographicRecord], template: str,
                          order: OrderLike) -> str:
        session = as_order(order, records)

        def sort_key(item):
            index, record = item
            position = session.position(record.id)
            return (position is None, position or 0, index)

        lines = []
        for _, record in sorted(enumerate(records), key=sort_key):
            locale = record.language.locale
            entry = self._render_entry(record, template, locale)
            if record.is_persian:
                entry = localize(entry)
            entry = _LEADING_NUMBER_RE.sub('', entry, count=1)
            number = session.number_for(record.id)
            direction, align = _direction(locale)
            lines.append(
                f'  <div class="csl-entry" dir="{direction}" '
                f'style="direction: {direction}; text-align: {align};">{number}. {entry}</div>'
            )

        body = "\n".join(lines)
        return f'<div class="vancouver-bib">\n{body}\n</div>'

    def _render_batch(self, bucket: List[BibliographicRecord], template: str, locale: str) -> str:
        try:
            return self.backend.bibliography(bucket, template, locale)
        except Exception as e:
            log_exception("[Render] Batch failed, rendering per record", e, logger)
        entries = [self._render_entry(r, template, locale) for r in bucket]
        body = "\n".join(f'  <div class="csl-entry">{entry}</div>' for entry in entries)
        return f'<div class="csl-bib-body" lang="{locale}">\n{body}\n</div>'

    def _render_sections(self, records: List[BibliographicRecord], template: str, language) -> str:
        resolved = resolve_language(language, records)

        def title_key(record):
            return str(record.title or '').casefold()

        persian = sorted((r for r in records if r.is_persian), key=title_key)
        english = sorted((r for r in records if not r.is_persian), key=title_key)

        sections = [(LOCALE_PERSIAN, persian), (LOCALE_ENGLISH, english)]
        if resolved == LOCALE_ENGLISH:
            sections.reverse()

        parts = []
        for locale, bucket in sections:
            if not bucket:
                continue
            html = self._render_batch(bucket, template, locale)
            if locale == LOCALE_PERSIAN:
                html = localize(html)
            direction, align = _direction(locale)
            parts.append(
                f'<div class="bib-section" lang="{locale}" dir="{direction}" '
                f'style="direction: {direction}; text-align: {align};">\n'
                f'<h3>{SECTION_HEADINGS[locale]}</h3>\n{html}\n</div>'
            )

        return "\n".join(parts)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def render_in_text(records, style=CitationStyle.APA, cited_ids=None,
                   language=LOCALE_ENGLISH, order: OrderLike = None) -> str:
    return CitationRenderer().render_in_text(records, style, cited_ids, language, order)


def render_bibliography(records, style=CitationStyle.APA, language=LANGUAGE_AUTO,
                        order: OrderLike = None) -> str:
    return BibliographyRenderer().render_bibliography(records, style, language, order)
