"""
fishchi/formatters/base.py

Base citation formatter, style registry and the rendering backend the
renderers talk to.
"""

import re
from dataclasses import replace
from html import escape
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Type

from ..models import Author, BibliographicRecord, CitationStyle, SourceType, normalize_style_name
from ..config import STYLE_ALIASES, AVAILABLE_TEMPLATES, LOCALE_ENGLISH
from ..errors import RenderError
from ..logging_utils import get_logger

logger = get_logger('formatters')


class BaseFormatter(ABC):
    """
    Abstract base class for citation formatters.

    Each style (APA, MLA, etc.) implements this interface.
    Subclasses must implement the article and book entry formats and the
    in-text citation cluster; theses and web pages have defaults.
    """

    style: CitationStyle = CitationStyle.APA
    numbered: bool = False
    et_al_min: int = 3

    def format(self, record: BibliographicRecord) -> str:
        """
        Main entry point - routes to source-type-specific formatter.

        Raises:
            RenderError: the record has neither a title nor authors
        """
        if not record.title and not record.authors:
            raise RenderError(
                "Record has nothing to render",
                detail=f"id={record.id!r}",
            )

        formatters = {
            SourceType.ARTICLE: self.format_article,
            SourceType.BOOK: self.format_book,
            SourceType.THESIS: self.format_thesis,
            SourceType.WEBSITE: self.format_website,
        }
        formatter = formatters.get(record.source_type, self.format_generic)
        return formatter(record)

    # =========================================================================
    # ABSTRACT METHODS - Must be implemented by each style
    # =========================================================================

    @abstractmethod
    def format_article(self, r: BibliographicRecord) -> str:
        """Format a journal article reference."""
        pass

    @abstractmethod
    def format_book(self, r: BibliographicRecord) -> str:
        """Format a book reference."""
        pass

    @abstractmethod
    def format_in_text(self, records: Sequence[BibliographicRecord]) -> str:
        """Format one in-text citation covering all given records."""
        pass

    def format_thesis(self, r: BibliographicRecord) -> str:
        """Format a thesis. Default: same as book."""
        return self.format_book(r)

    def format_website(self, r: BibliographicRecord) -> str:
        """Format a web page. Default: same as article."""
        return self.format_article(r)

    def format_generic(self, r: BibliographicRecord) -> str:
        """Fallback for other source types."""
        if r.venue:
            return self.format_article(r)
        return self.format_book(r)

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    @staticmethod
    def initials(firstname: str, spaced: bool = True) -> str:
        """'John Ronald' -> 'J. R.'; already-dotted initials are kept."""
        letters = [p[0] for p in re.split(r'[\s.\-]+', firstname or '') if p]
        if not letters:
            return ""
        sep = " " if spaced else ""
        return sep.join(f"{letter}." for letter in letters)

    @classmethod
    def format_authors(cls, authors: List[Author], style: str = 'default', max_authors: int = 20) -> str:
        """
        Format author list according to style conventions.

        Args:
            authors: Author values in citation order
            style: One of 'default', 'apa', 'mla', 'harvard', 'vancouver'
            max_authors: Maximum authors before et al.

        Returns:
            Formatted author string
        """
        if not authors:
            return ""

        if style == 'apa':
            # APA: Last, F. I., Last, F. I., & Last, F. I.
            formatted = [
                f"{a.lastname}, {cls.initials(a.firstname)}".rstrip(', ')
                for a in authors[:max_authors]
            ]
            if len(authors) > max_authors:
                last = authors[-1]
                return ", ".join(formatted[:max_authors - 1]) + ", ... " + \
                    f"{last.lastname}, {cls.initials(last.firstname)}".rstrip(', ')
            if len(formatted) > 1:
                return ", ".join(formatted[:-1]) + ", & " + formatted[-1]
            return formatted[0]

        if style == 'mla':
            # MLA: Last, First, and First Last / Last, First, et al.
            first = authors[0]
            lead = f"{first.lastname}, {first.firstname}".rstrip(', ')
            if len(authors) == 1:
                return lead
            if len(authors) == 2:
                return f"{lead}, and {authors[1].full_name}"
            return f"{lead}, et al."

        if style == 'harvard':
            # Harvard: Last, F. and Last, F. / Last, F., Last, F. and Last, F.
            formatted = [
                f"{a.lastname}, {cls.initials(a.firstname, spaced=False)}".rstrip(', ')
                for a in authors
            ]
            if len(formatted) == 1:
                return formatted[0]
            return ", ".join(formatted[:-1]) + " and " + formatted[-1]

        if style == 'vancouver':
            # Vancouver: Last FI, Last FI, et al. (after six)
            formatted = [
                f"{a.lastname} {cls.initials(a.firstname, spaced=False).replace('.', '')}".strip()
                for a in authors[:6]
            ]
            text = ", ".join(formatted)
            if len(authors) > 6:
                text += ", et al"
            return text

        # default/chicago: Last, First, First Last, and First Last
        first = authors[0]
        lead = f"{first.lastname}, {first.firstname}".rstrip(', ')
        if len(authors) == 1:
            return lead
        if len(authors) > 10:
            return ", ".join([lead] + [a.full_name for a in authors[1:7]]) + ", et al."
        rest = [a.full_name for a in authors[1:]]
        if len(rest) == 1:
            return f"{lead}, and {rest[0]}"
        return ", ".join([lead] + rest[:-1]) + ", and " + rest[-1]

    @classmethod
    def in_text_names(cls, authors: List[Author], connector: str = "and", min_et_al: int = 3) -> str:
        """Surname form for in-text citations: Smith / Smith and Doe / Smith et al."""
        if not authors:
            return ""
        if len(authors) >= min_et_al:
            return f"{authors[0].lastname} et al."
        surnames = [a.lastname for a in authors]
        if len(surnames) <= 2:
            return f" {connector} ".join(surnames)
        return ", ".join(surnames[:-1]) + f" {connector} " + surnames[-1]

    @staticmethod
    def short_title(r: BibliographicRecord, words: int = 4) -> str:
        title = (r.title or "").split(':')[0]
        return " ".join(title.split()[:words])

    @staticmethod
    def year_or_nd(r: BibliographicRecord) -> str:
        return str(r.year) if r.year else "n.d."

    @staticmethod
    def doi_url(r: BibliographicRecord) -> str:
        if not r.doi:
            return ""
        return r.doi if r.doi.startswith('http') else f"https://doi.org/{r.doi}"

    @staticmethod
    def end_with_period(text: str) -> str:
        text = text.rstrip()
        if not text or text[-1] in '.?!':
            return text
        return text + "."

    @staticmethod
    def italicize(text: str) -> str:
        """Wrap text in <i> tags for italics (Word-compatible)."""
        return f"<i>{text}</i>" if text else ""

    @staticmethod
    def quote(text: str) -> str:
        """Wrap text in quotation marks."""
        return f'"{text}"' if text else ""


# =============================================================================
# FORMATTER REGISTRY
# =============================================================================

_formatters: Dict[str, Type[BaseFormatter]] = {}


def _registry_key(style) -> str:
    if isinstance(style, CitationStyle):
        return style.template
    return str(style).lower().strip()


def register_formatter(style):
    """
    Decorator to register a formatter class.

    Can be used with CitationStyle enum or string:
        @register_formatter(CitationStyle.APA)
        @register_formatter('apa 7')
        class APAFormatter: ...
    """
    def decorator(cls):
        _formatters[_registry_key(style)] = cls
        return cls
    return decorator


def resolve_template(style) -> str:
    """
    Template name for a style enum or alias.

    Unrecognized names fall back to APA with a warning.
    """
    if isinstance(style, CitationStyle):
        return style.template
    key = _registry_key(style or '')
    if key in _formatters:
        return _formatters[key].style.template
    if key not in STYLE_ALIASES:
        logger.warning("[Styles] Unrecognized style %r, using APA", style)
    return normalize_style_name(key)


def get_formatter(style) -> BaseFormatter:
    """
    Get formatter instance for a style.

    Accepts CitationStyle enum, a template name or any alias
    (e.g. 'harvard', 'Chicago Manual of Style'). Unknown styles get APA.
    """
    key = _registry_key(style) if style else ''
    formatter_cls = _formatters.get(key) or _formatters.get(resolve_template(style))
    if formatter_cls is None:
        formatter_cls = _formatters[_registry_key(CitationStyle.APA)]
    return formatter_cls()


def format_citation(record: BibliographicRecord, style=CitationStyle.APA) -> str:
    """
    Format one reference entry using the specified style.

    Args:
        record: BibliographicRecord to format
        style: Citation style to use (CitationStyle enum or string)

    Returns:
        Formatted reference string (may contain <i> markup)
    """
    return get_formatter(style).format(record)


def get_available_styles() -> List[str]:
    return list(AVAILABLE_TEMPLATES)


def is_style_supported(name) -> bool:
    """Check a style name against the alias table (case-insensitive)."""
    if isinstance(name, CitationStyle):
        return name is not CitationStyle.UNKNOWN
    if not name:
        return False
    return str(name).lower().strip() in STYLE_ALIASES


# =============================================================================
# RENDERING BACKEND
# =============================================================================

_TEXT_FIELDS = ('title', 'venue', 'volume', 'issue', 'pages', 'publisher', 'doi', 'isbn', 'url')


def escape_record(record: BibliographicRecord) -> BibliographicRecord:
    """Copy of a record whose text fields and author names are HTML-escaped."""
    changes = {}
    for name in _TEXT_FIELDS:
        value = getattr(record, name)
        if value:
            changes[name] = escape(str(value), quote=False)
    changes['authors'] = [
        Author(escape(str(a.firstname), quote=False), escape(str(a.lastname), quote=False))
        for a in record.authors
    ]
    return replace(record, **changes)


class FormatterBackend:
    """
    Rendering collaborator used by the citation and bibliography renderers.

    ``citation`` returns a plain-text in-text cluster; ``bibliography``
    returns an HTML fragment with one ``csl-entry`` div per record, record
    text escaped. Both raise RenderError when a record cannot be rendered.
    """

    def citation(self, records: Sequence[BibliographicRecord], template: str,
                 lang: str = LOCALE_ENGLISH) -> str:
        formatter = get_formatter(template)
        return formatter.format_in_text(list(records))

    def bibliography(self, records: Sequence[BibliographicRecord], template: str,
                     lang: str = LOCALE_ENGLISH) -> str:
        formatter = get_formatter(template)
        entries = []
        for i, record in enumerate(records, 1):
            text = formatter.format(escape_record(record))
            if formatter.numbered:
                text = f"{i}. {text}"
            entries.append(f'  <div class="csl-entry">{text}</div>')
        body = "\n".join(entries)
        return f'<div class="csl-bib-body" lang="{lang}">\n{body}\n</div>'


_ENTRY_RE = re.compile(r'<div class="csl-entry">(.*?)</div>', re.DOTALL)


def entry_texts(html: str) -> List[str]:
    """Inner markup of every csl-entry in a bibliography fragment."""
    return [m.group(1).strip() for m in _ENTRY_RE.finditer(html or '')]
