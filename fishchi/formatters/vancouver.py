"""
fishchi/formatters/vancouver.py

Vancouver (ICMJE / NLM) citation formatter.
Numbered references, common in medicine and the health sciences.
"""

from typing import Sequence

from .base import BaseFormatter, register_formatter
from ..models import BibliographicRecord, CitationStyle


@register_formatter(CitationStyle.VANCOUVER)
@register_formatter('nlm')
class VancouverFormatter(BaseFormatter):
    """
    Vancouver formatter.

    Format patterns:
    - Article: Last FI, Last FI. Title. Journal. Year;Vol(Issue):pages.
    - Book: Last FI. Title. Publisher; Year.

    Entries carry no number of their own; the bibliography backend numbers
    them in list order. In-text citations are the bracketed positions of
    the cited records in the given list.
    """

    style = CitationStyle.VANCOUVER
    numbered = True

    def _author_block(self, r: BibliographicRecord) -> str:
        if not r.authors:
            return ""
        return self.format_authors(r.authors, 'vancouver') + "."

    def format_article(self, r: BibliographicRecord) -> str:
        """
        Vancouver journal article format:
        Smith J, Johnson M. Title of article. J Educ Technol. 2024;15(3):123-45.
        """
        parts = [self._author_block(r)]

        if r.title:
            parts.append(self.end_with_period(r.title))
        if r.venue:
            parts.append(self.end_with_period(r.venue))

        source = str(r.year) if r.year else ""
        if r.volume:
            source += f";{r.volume}"
            if r.issue:
                source += f"({r.issue})"
        if r.pages:
            source += f":{r.pages}"
        if source:
            parts.append(source + ".")

        if r.doi:
            parts.append(f"doi:{r.doi}")
        elif r.url:
            parts.append(f"Available from: {r.url}")

        return " ".join(filter(None, parts))

    def format_book(self, r: BibliographicRecord) -> str:
        parts = [self._author_block(r)]
        if r.title:
            parts.append(self.end_with_period(r.title))
        pub = "; ".join(p for p in (r.publisher, str(r.year) if r.year else None) if p)
        if pub:
            parts.append(pub + ".")
        return " ".join(filter(None, parts))

    def format_thesis(self, r: BibliographicRecord) -> str:
        parts = [self._author_block(r)]
        if r.title:
            parts.append(f"{r.title} [dissertation].")
        pub = "; ".join(p for p in (r.publisher, str(r.year) if r.year else None) if p)
        if pub:
            parts.append(pub + ".")
        return " ".join(filter(None, parts))

    def format_website(self, r: BibliographicRecord) -> str:
        parts = [self._author_block(r)]
        if r.title:
            parts.append(f"{r.title} [Internet].")
        if r.year:
            parts.append(f"{r.year}.")
        if r.url:
            parts.append(f"Available from: {r.url}")
        return " ".join(filter(None, parts))

    def format_in_text(self, records: Sequence[BibliographicRecord]) -> str:
        numbers = ",".join(str(i) for i in range(1, len(records) + 1))
        return f"[{numbers}]"
