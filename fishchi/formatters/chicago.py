"""
fishchi/formatters/chicago.py

Chicago Manual of Style (17th Edition) formatter, notes-bibliography
variant for reference lists.

Uses <i> tags for italics (Word-compatible).
"""

from typing import Sequence

from .base import BaseFormatter, register_formatter
from ..models import BibliographicRecord, CitationStyle


@register_formatter(CitationStyle.CHICAGO)
@register_formatter('chicago')
@register_formatter('chicago manual of style')
@register_formatter('cms')
class ChicagoFormatter(BaseFormatter):
    """
    Chicago bibliography formatter.

    Format patterns:
    - Article: Last, First, and First Last. "Title." Journal 15, no. 3 (2024): 123-45.
    - Book: Last, First. Title. Publisher, Year.
    - Thesis: Last, First. "Title." PhD diss., Institution, Year.

    In-text (author-date): (Author Year), (Author and Author Year)
    """

    style = CitationStyle.CHICAGO

    def _author_block(self, r: BibliographicRecord) -> str:
        if not r.authors:
            return ""
        return self.end_with_period(self.format_authors(r.authors, 'chicago'))

    def format_article(self, r: BibliographicRecord) -> str:
        """
        Chicago journal article format:
        Last, First. "Title." Journal Name 15, no. 3 (2024): 123-145. https://doi.org/xxx.
        """
        parts = [self._author_block(r)]

        if r.title:
            parts.append(self.quote(self.end_with_period(r.title)))

        journal_str = self.italicize(r.venue) if r.venue else ""
        if r.volume:
            journal_str = f"{journal_str} {r.volume}".strip()
        if r.issue:
            journal_str += f", no. {r.issue}"
        if r.year:
            journal_str = f"{journal_str} ({r.year})".strip()
        if r.pages:
            journal_str += f": {r.pages}" if journal_str else r.pages
        if journal_str:
            parts.append(journal_str + ".")

        if r.doi:
            parts.append(self.doi_url(r) + ".")
        elif r.url:
            parts.append(r.url + ".")

        return " ".join(filter(None, parts))

    def format_book(self, r: BibliographicRecord) -> str:
        """
        Chicago book format:
        Last, First. Title of Book. Publisher, Year.
        """
        parts = [self._author_block(r)]

        if r.title:
            parts.append(self.end_with_period(self.italicize(r.title)))

        pub = [p for p in (r.publisher, str(r.year) if r.year else None) if p]
        if pub:
            parts.append(", ".join(pub) + ".")

        return " ".join(filter(None, parts))

    def format_thesis(self, r: BibliographicRecord) -> str:
        parts = [self._author_block(r)]
        if r.title:
            parts.append(self.quote(self.end_with_period(r.title)))
        tail = ["PhD diss."]
        tail += [p for p in (r.publisher, str(r.year) if r.year else None) if p]
        parts.append(", ".join(tail) + ".")
        return " ".join(filter(None, parts))

    def format_website(self, r: BibliographicRecord) -> str:
        parts = [self._author_block(r)]
        if r.title:
            parts.append(self.quote(self.end_with_period(r.title)))
        if r.venue:
            parts.append(self.end_with_period(r.venue))
        if r.year:
            parts.append(f"{r.year}.")
        if r.url:
            parts.append(r.url + ".")
        return " ".join(filter(None, parts))

    def format_in_text(self, records: Sequence[BibliographicRecord]) -> str:
        cites = []
        for r in records:
            names = self.in_text_names(r.authors, min_et_al=4) or self.quote(self.short_title(r))
            cites.append(f"{names} {self.year_or_nd(r)}")
        return f"({'; '.join(cites)})"
