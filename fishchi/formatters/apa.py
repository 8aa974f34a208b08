"""
fishchi/formatters/apa.py

APA 7th Edition citation formatter.
Common in psychology, education, and social sciences.

Uses <i> tags for italics (Word-compatible).
"""

from typing import Sequence

from .base import BaseFormatter, register_formatter
from ..models import BibliographicRecord, CitationStyle


@register_formatter(CitationStyle.APA)
@register_formatter('apa 7')
@register_formatter('apa7')
class APAFormatter(BaseFormatter):
    """
    APA 7th Edition formatter.

    Format patterns:
    - Article: Author, A. A., & Author, B. B. (Year). Title. Journal, Vol(Issue), pages. DOI
    - Book: Author, A. A. (Year). Title. Publisher.
    - Thesis: Author, A. A. (Year). Title [Doctoral dissertation]. Publisher.
    - Website: Author, A. A. (Year). Title. Site. URL

    In-text: (Author, Year), (Author & Author, Year), (Author et al., Year)
    """

    style = CitationStyle.APA

    def _lead(self, r: BibliographicRecord) -> list:
        parts = []
        if r.authors:
            parts.append(self.end_with_period(self.format_authors(r.authors, 'apa')))
        parts.append(f"({self.year_or_nd(r)}).")
        return parts

    def format_article(self, r: BibliographicRecord) -> str:
        """
        APA journal article format:
        Author, A. A., & Author, B. B. (Year). Title of article. Journal Name, Vol(Issue), pages. https://doi.org/xxx
        """
        parts = self._lead(r)

        # Title (sentence case, no quotes, no italics)
        if r.title:
            parts.append(self.end_with_period(r.title))

        # Journal in italics with volume
        journal_str = self.italicize(r.venue) if r.venue else ""
        if r.volume:
            journal_str += f", {self.italicize(r.volume)}" if journal_str else self.italicize(r.volume)
            if r.issue:
                journal_str += f"({r.issue})"
        if r.pages:
            journal_str += f", {r.pages}" if journal_str else r.pages
        if journal_str:
            parts.append(journal_str + ".")

        # DOI (required when available)
        if r.doi:
            parts.append(self.doi_url(r))
        elif r.url:
            parts.append(r.url)

        return " ".join(filter(None, parts))

    def format_book(self, r: BibliographicRecord) -> str:
        """
        APA book format:
        Author, A. A. (Year). Title of book. Publisher.
        """
        parts = self._lead(r)

        if r.title:
            parts.append(self.end_with_period(self.italicize(r.title)))

        # Publisher (no location in APA 7)
        if r.publisher:
            parts.append(self.end_with_period(r.publisher))

        if r.doi:
            parts.append(self.doi_url(r))

        return " ".join(filter(None, parts))

    def format_thesis(self, r: BibliographicRecord) -> str:
        parts = self._lead(r)
        if r.title:
            parts.append(f"{self.italicize(r.title)} [Doctoral dissertation].")
        if r.publisher:
            parts.append(self.end_with_period(r.publisher))
        if r.url:
            parts.append(r.url)
        return " ".join(filter(None, parts))

    def format_website(self, r: BibliographicRecord) -> str:
        parts = self._lead(r)
        if r.title:
            parts.append(self.end_with_period(self.italicize(r.title)))
        if r.venue:
            parts.append(self.end_with_period(r.venue))
        if r.url:
            parts.append(r.url)
        return " ".join(filter(None, parts))

    def format_in_text(self, records: Sequence[BibliographicRecord]) -> str:
        cites = []
        for r in records:
            names = self.in_text_names(r.authors, connector="&") or self.short_title(r)
            cites.append(f"{names}, {self.year_or_nd(r)}")
        return f"({'; '.join(cites)})"
