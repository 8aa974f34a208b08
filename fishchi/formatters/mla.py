"""
fishchi/formatters/mla.py

MLA 9th Edition citation formatter.
Common in humanities, literature, and language studies.

Uses <i> tags for italics (Word-compatible).
"""

from typing import Sequence

from .base import BaseFormatter, register_formatter
from ..models import BibliographicRecord, CitationStyle


@register_formatter(CitationStyle.MLA)
@register_formatter('mla 9')
@register_formatter('mla9')
class MLAFormatter(BaseFormatter):
    """
    MLA 9th Edition formatter.

    Format patterns:
    - Article: Last, First, and First Last. "Title." Journal, vol. X, no. X, Year, pp. X-X.
    - Book: Last, First. Title. Publisher, Year.
    - Website: Last, First. "Title." Site, Year, URL.

    In-text: (Author), (Author and Author), (Author et al.)
    """

    style = CitationStyle.MLA

    def _author_block(self, r: BibliographicRecord) -> str:
        if not r.authors:
            return ""
        return self.end_with_period(self.format_authors(r.authors, 'mla'))

    def format_article(self, r: BibliographicRecord) -> str:
        """
        MLA journal article format:
        Last, First. "Title of Article." Journal Name, vol. 15, no. 3, 2024, pp. 123-145.
        """
        parts = [self._author_block(r)]

        if r.title:
            parts.append(self.quote(self.end_with_period(r.title)))

        container = []
        if r.venue:
            container.append(self.italicize(r.venue))
        if r.volume:
            container.append(f"vol. {r.volume}")
        if r.issue:
            container.append(f"no. {r.issue}")
        if r.year:
            container.append(str(r.year))
        if r.pages:
            prefix = "pp." if '-' in r.pages else "p."
            container.append(f"{prefix} {r.pages}")
        if r.doi:
            container.append(self.doi_url(r))
        elif r.url:
            container.append(r.url)
        if container:
            parts.append(", ".join(container) + ".")

        return " ".join(filter(None, parts))

    def format_book(self, r: BibliographicRecord) -> str:
        """
        MLA book format:
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
            parts.append(self.end_with_period(self.italicize(r.title)))
        tail = [p for p in (str(r.year) if r.year else None, r.publisher) if p]
        tail.append("Dissertation")
        parts.append(". ".join(tail) + ".")
        return " ".join(filter(None, parts))

    def format_website(self, r: BibliographicRecord) -> str:
        parts = [self._author_block(r)]
        if r.title:
            parts.append(self.quote(self.end_with_period(r.title)))
        tail = [p for p in (self.italicize(r.venue), str(r.year) if r.year else None, r.url) if p]
        if tail:
            parts.append(", ".join(tail) + ".")
        return " ".join(filter(None, parts))

    def format_in_text(self, records: Sequence[BibliographicRecord]) -> str:
        cites = []
        for r in records:
            cites.append(self.in_text_names(r.authors) or self.quote(self.short_title(r)))
        return f"({'; '.join(cites)})"
