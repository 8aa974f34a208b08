"""Shared fixtures for the fishchi test suite."""

import pytest

from fishchi.models import Author, BibliographicRecord, LanguageTag, SourceType

APA_CITATION = (
    "Smith, J., & Johnson, M. (2024). The impact of technology on education. "
    "Journal of Educational Technology, 15(3), 123-145."
)

PERSIAN_CITATION = (
    "ربیعی، لیلا، یوسفی خواه، سارا. بررسی جامعه شناختی قمار آنلاین. 1401؛1(1):78-101."
)


@pytest.fixture
def english_record() -> BibliographicRecord:
    """A complete English journal article."""
    return BibliographicRecord(
        id="src1",
        title="The impact of technology on education",
        authors=[Author("J.", "Smith"), Author("M.", "Johnson")],
        year=2024,
        venue="Journal of Educational Technology",
        volume="15",
        issue="3",
        pages="123-145",
        language=LanguageTag.ENGLISH,
    )


@pytest.fixture
def persian_record() -> BibliographicRecord:
    """A Persian journal article with two authors."""
    return BibliographicRecord(
        id="src2",
        title="بررسی جامعه شناختی قمار آنلاین",
        authors=[Author("لیلا", "ربیعی"), Author("سارا", "یوسفی خواه")],
        year=1401,
        venue="مطالعات فرهنگی",
        volume="1",
        issue="1",
        pages="78-101",
        language=LanguageTag.PERSIAN,
    )


@pytest.fixture
def book_record() -> BibliographicRecord:
    """An English single-author book."""
    return BibliographicRecord(
        id="src3",
        title="Digital Learning Environments",
        authors=[Author("Anna", "Brown")],
        year=2020,
        publisher="Academic Press",
        language=LanguageTag.ENGLISH,
        source_type=SourceType.BOOK,
    )


@pytest.fixture
def abc_records():
    """Three minimal English records with ids A, B and C."""
    return [
        BibliographicRecord(id="A", title="Alpha study of learning", authors=[Author("A.", "Adams")], year=2019),
        BibliographicRecord(id="B", title="Beta review of teaching", authors=[Author("B.", "Baker")], year=2020),
        BibliographicRecord(id="C", title="Gamma trial of methods", authors=[Author("C.", "Clark")], year=2021),
    ]
