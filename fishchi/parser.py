"""
fishchi/parser.py

Parse-direction entry point that orchestrates:
1. Detection (which style, which language?)
2. Extraction (positional fields from the raw text)
3. Scoring (how complete is the result?)

Parsing is pure: no shared state, safe to run in parallel.
"""

from typing import Iterable, List

from .models import BibliographicRecord, ParseResult
from .config import CONFIDENCE_WEIGHTS, MIN_TITLE_LENGTH
from .detectors import detect
from .extractors import extract
from .errors import InvalidInputError
from .logging_utils import get_logger

logger = get_logger(__name__.split('.')[-1])


def calculate_confidence(record: BibliographicRecord) -> int:
    """
    Additive completeness score, capped at 100.

    Advisory only: a low score never rejects a parse.
    """
    score = 0
    if record.authors:
        score += CONFIDENCE_WEIGHTS['authors']
    if record.title and len(record.title) > MIN_TITLE_LENGTH:
        score += CONFIDENCE_WEIGHTS['title']
    if record.year:
        score += CONFIDENCE_WEIGHTS['year']
    if record.venue:
        score += CONFIDENCE_WEIGHTS['venue']
    if record.volume or record.pages:
        score += CONFIDENCE_WEIGHTS['volume_or_pages']
    return min(score, 100)


class CitationParser:
    """Turns one free-form citation into a ParseResult."""

    def parse(self, raw_text: str) -> ParseResult:
        """
        Parse a citation.

        Raises:
            InvalidInputError: raw_text is not a string or is blank
        """
        if not isinstance(raw_text, str):
            raise InvalidInputError(
                "Citation text must be a string",
                detail=f"got {type(raw_text).__name__}",
            )
        text = raw_text.strip()
        if not text:
            raise InvalidInputError("Citation text is empty")

        detection = detect(text)
        record = extract(text, detection.style, detection.language)
        confidence = calculate_confidence(record)

        logger.debug(
            "[Parse] style=%s language=%s confidence=%d",
            detection.style.value, detection.language.value, confidence,
        )

        return ParseResult(
            record=record,
            detected_style=detection.style,
            confidence=confidence,
        )

    def parse_many(self, texts: Iterable[str]) -> List[ParseResult]:
        return [self.parse(text) for text in texts]


_default_parser = CitationParser()


def parse_citation(text: str) -> ParseResult:
    """Parse one citation with the shared (stateless) parser."""
    return _default_parser.parse(text)


def parse_many(texts: Iterable[str]) -> List[ParseResult]:
    """Parse several citations; stops at the first invalid input."""
    return _default_parser.parse_many(texts)
