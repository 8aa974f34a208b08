"""
fishchi/formatters/harvard.py

Harvard (Cite Them Right) citation formatter.
"""

from typing import Sequence

from .base import BaseFormatter, register_formatter
from ..models import BibliographicRecord, CitationStyle


@register_formatter(CitationStyle.HARVARD)
@register_formatter('harvard')
@register_formatter('harvard1')
class HarvardFormatter(BaseFormatter):
    """
    Harvard formatter.

    Format patterns:
    - Article: Last, F. and Last, F. (Year) 'Title', Journal, 15(3), pp. 123-145. doi:xxx.
    - Book: Last, F. (Year) Title. Publisher.
    - Website: Last, F. (Year) Title. Available at: URL.

    In-text: (Author, Year), (Author and Author, Year), (Author et al., Year)
    """

    style = CitationStyle.HARVARD

    def _lead(self, r: BibliographicRecord) -> str:
        authors = self.format_authors(r.authors, 'harvard')
        return f"{authors} ({self.year_or_nd(r)})".strip()

    def format_article(self, r: BibliographicRecord) -> str:
        head = self._lead(r)
        if r.title:
            head += f" '{r.title}'"

        container = []
        if r.venue:
            container.append(self.italicize(r.venue))
        if r.volume:
            container.append(f"{r.volume}({r.issue})" if r.issue else r.volume)
        if r.pages:
            prefix = "pp." if '-' in r.pages else "p."
            container.append(f"{prefix} {r.pages}")

        text = ", ".join([head] + container) + "."
        if r.doi:
            text += f" doi:{r.doi}."
        elif r.url:
            text += f" Available at: {r.url}."
        return text

    def format_book(self, r: BibliographicRecord) -> str:
        parts = [self._lead(r)]
        if r.title:
            parts.append(self.end_with_period(self.italicize(r.title)))
        if r.publisher:
            parts.append(self.end_with_period(r.publisher))
        return " ".join(filter(None, parts))

    def format_thesis(self, r: BibliographicRecord) -> str:
        parts = [self._lead(r)]
        if r.title:
            parts.append(self.end_with_period(self.italicize(r.title)))
        parts.append("PhD thesis.")
        if r.publisher:
            parts.append(self.end_with_period(r.publisher))
        return " ".join(filter(None, parts))

    def format_website(self, r: BibliographicRecord) -> str:
        parts = [self._lead(r)]
        if r.title:
            parts.append(self.end_with_period(self.italicize(r.title)))
        if r.url:
            parts.append(f"Available at: {r.url}.")
        return " ".join(filter(None, parts))

    def format_in_text(self, records: Sequence[BibliographicRecord]) -> str:
        cites = []
        for r in records:
            names = self.in_text_names(r.authors, min_et_al=4) or self.italicize(self.short_title(r))
            cites.append(f"{names}, {self.year_or_nd(r)}")
        return f"({'; '.join(cites)})"
