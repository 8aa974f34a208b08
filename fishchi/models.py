"""
fishchi/models.py

Core data models for the citation engine.
All modules communicate through these standardized structures.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any
from enum import Enum

from .config import (
    STYLE_ALIASES,
    DEFAULT_TEMPLATE,
    GREGORIAN_YEAR_RANGE,
    PERSIAN_YEAR_RANGE,
    LOCALE_PERSIAN,
    LOCALE_ENGLISH,
)


class CitationStyle(Enum):
    """Supported citation styles."""
    APA = "apa"
    MLA = "mla"
    HARVARD = "harvard"
    VANCOUVER = "vancouver"
    CHICAGO = "chicago"
    UNKNOWN = "unknown"

    @property
    def template(self) -> str:
        """Template name used by the rendering backend."""
        templates = {
            CitationStyle.APA: 'apa',
            CitationStyle.MLA: 'mla',
            CitationStyle.HARVARD: 'harvard-cite-them-right',
            CitationStyle.VANCOUVER: 'vancouver',
            CitationStyle.CHICAGO: 'chicago-note-bibliography',
        }
        return templates.get(self, DEFAULT_TEMPLATE)

    @classmethod
    def from_string(cls, s) -> "CitationStyle":
        """
        Parse style from string through the alias table.

        Unrecognized names fall back to APA.
        """
        if isinstance(s, cls):
            return cls.APA if s is cls.UNKNOWN else s
        template = normalize_style_name(s)
        for style in cls:
            if style is not cls.UNKNOWN and style.template == template:
                return style
        return cls.APA


class LanguageTag(Enum):
    """Language of a citation or record."""
    PERSIAN = "persian"
    ENGLISH = "english"

    @property
    def locale(self) -> str:
        return LOCALE_PERSIAN if self is LanguageTag.PERSIAN else LOCALE_ENGLISH

    @property
    def is_rtl(self) -> bool:
        return self is LanguageTag.PERSIAN

    @classmethod
    def from_string(cls, s) -> "LanguageTag":
        """Accepts persian/fa/fa-IR and english/en/en-US (anything else is English)."""
        if isinstance(s, cls):
            return s
        value = str(s or '').strip().lower()
        if value in ('persian', 'farsi') or value == 'fa' or value.startswith('fa-') or value.startswith('fa_'):
            return cls.PERSIAN
        return cls.ENGLISH


class SourceType(Enum):
    """Kind of source a record describes."""
    ARTICLE = "article"
    BOOK = "book"
    THESIS = "thesis"
    WEBSITE = "website"
    OTHER = "other"

    @classmethod
    def from_string(cls, s) -> "SourceType":
        if isinstance(s, cls):
            return s
        value = str(s or '').strip().lower()
        for source_type in cls:
            if source_type.value == value:
                return source_type
        return cls.ARTICLE


def normalize_style_name(name) -> str:
    """
    Map a style name to its template name (case-insensitive).

    Unknown names default to APA.
    """
    if isinstance(name, CitationStyle):
        return name.template
    if not name:
        return DEFAULT_TEMPLATE
    return STYLE_ALIASES.get(str(name).lower().strip(), DEFAULT_TEMPLATE)


def is_plausible_year(year: Optional[int]) -> bool:
    """Check a year against the Gregorian and Persian-calendar publication ranges."""
    if year is None:
        return False
    low, high = GREGORIAN_YEAR_RANGE
    p_low, p_high = PERSIAN_YEAR_RANGE
    return low <= year <= high or p_low <= year <= p_high


def _coerce_year(value) -> Optional[int]:
    """Year from storage data; implausible or non-numeric values become None."""
    if value is None or value == '':
        return None
    try:
        year = int(str(value).strip()[:4])
    except (TypeError, ValueError):
        return None
    return year if is_plausible_year(year) else None


@dataclass(frozen=True)
class Author:
    """One personal name. Produced by the name segmenter, never mutated."""
    firstname: str
    lastname: str

    @property
    def full_name(self) -> str:
        """Given-name-first display form."""
        return f"{self.firstname} {self.lastname}".strip()

    def to_dict(self) -> Dict[str, str]:
        return {'firstname': self.firstname, 'lastname': self.lastname}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Author":
        return cls(
            firstname=str(d.get('firstname') or d.get('given') or '').strip(),
            lastname=str(d.get('lastname') or d.get('family') or '').strip(),
        )


@dataclass
class BibliographicRecord:
    """
    Style-independent description of one source.

    This is the data contract between the parser, the external record store
    and the renderers. Every field except ``language`` is optional; the
    extractor leaves a field as None when it cannot be recovered.

    ``id`` is assigned by the caller (the record store) and is what
    Vancouver numbering keys on.
    """

    id: str = ""
    title: Optional[str] = None
    authors: List[Author] = field(default_factory=list)
    year: Optional[int] = None
    venue: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None
    doi: Optional[str] = None
    isbn: Optional[str] = None
    url: Optional[str] = None
    language: LanguageTag = LanguageTag.ENGLISH
    source_type: SourceType = SourceType.ARTICLE

    def __post_init__(self):
        if self.year is not None and not is_plausible_year(self.year):
            raise ValueError(f"Implausible publication year: {self.year}")

    @property
    def is_persian(self) -> bool:
        return self.language is LanguageTag.PERSIAN

    @property
    def first_author_lastname(self) -> str:
        return self.authors[0].lastname if self.authors else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data['authors'] = [a.to_dict() for a in self.authors]
        data['language'] = self.language.value
        data['source_type'] = self.source_type.value
        return data

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BibliographicRecord":
        """
        Create from a dictionary.

        Accepts the flat shape produced by ``to_dict`` as well as the record
        store's nested shape (``publicationDetails`` / ``identifiers``,
        ``_id``, ``type``).
        """
        details = d.get('publicationDetails') or {}
        identifiers = d.get('identifiers') or {}

        def pick(key, *alternatives):
            for source in (d, details, identifiers):
                for k in (key,) + alternatives:
                    value = source.get(k)
                    if value not in (None, ''):
                        return str(value)
            return None

        authors = []
        for a in d.get('authors') or []:
            if isinstance(a, Author):
                authors.append(a)
            elif isinstance(a, dict):
                author = Author.from_dict(a)
                if author.firstname or author.lastname:
                    authors.append(author)

        return cls(
            id=str(d.get('id') or d.get('_id') or ''),
            title=pick('title'),
            authors=authors,
            year=_coerce_year(d.get('year')),
            venue=pick('venue', 'journal', 'container-title'),
            volume=pick('volume'),
            issue=pick('issue'),
            pages=pick('pages', 'page'),
            publisher=pick('publisher'),
            doi=pick('doi', 'DOI'),
            isbn=pick('isbn', 'ISBN'),
            url=pick('url', 'URL'),
            language=LanguageTag.from_string(d.get('language')),
            source_type=SourceType.from_string(d.get('source_type') or d.get('type')),
        )

    def to_csl(self) -> Dict[str, Any]:
        """Map to a CSL-JSON item."""
        csl_types = {
            SourceType.ARTICLE: 'article-journal',
            SourceType.BOOK: 'book',
            SourceType.THESIS: 'thesis',
            SourceType.WEBSITE: 'webpage',
            SourceType.OTHER: 'document',
        }
        item: Dict[str, Any] = {
            'id': self.id,
            'type': csl_types[self.source_type],
            'title': self.title or '',
            'author': [{'family': a.lastname, 'given': a.firstname} for a in self.authors],
            'language': self.language.locale,
        }
        if self.year:
            item['issued'] = {'date-parts': [[self.year]]}
        optional = {
            'container-title': self.venue,
            'publisher': self.publisher,
            'volume': self.volume,
            'issue': self.issue,
            'page': self.pages,
            'URL': self.url,
            'DOI': self.doi,
            'ISBN': self.isbn,
        }
        item.update({k: v for k, v in optional.items() if v})
        return item


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing one free-form citation. Never mutated after creation."""
    record: BibliographicRecord
    detected_style: CitationStyle
    confidence: int = 0

    @property
    def language(self) -> LanguageTag:
        return self.record.language

    @property
    def is_low_confidence(self) -> bool:
        return self.confidence < 50

    def to_dict(self) -> Dict[str, Any]:
        return {
            'record': self.record.to_dict(),
            'detected_style': self.detected_style.value,
            'language': self.language.value,
            'confidence': self.confidence,
        }


@dataclass
class DetectionResult:
    """Result from the style detection layer."""
    style: CitationStyle
    language: LanguageTag
    scores: Dict[CitationStyle, int] = field(default_factory=dict)
