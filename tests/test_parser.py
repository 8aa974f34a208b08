"""Tests for the parse entry point and confidence scoring."""

import pytest

from fishchi.errors import InvalidInputError
from fishchi.models import Author, BibliographicRecord, CitationStyle, LanguageTag
from fishchi.parser import CitationParser, calculate_confidence, parse_citation, parse_many

from conftest import APA_CITATION, PERSIAN_CITATION


class TestParseCitation:
    """Tests for parse_citation on known samples."""

    def test_english_apa(self) -> None:
        """Should detect APA and fill a complete record."""
        result = parse_citation(APA_CITATION)
        assert result.detected_style is CitationStyle.APA
        assert result.language is LanguageTag.ENGLISH
        assert result.record.year == 2024
        assert result.record.authors == [Author("J.", "Smith"), Author("M.", "Johnson")]
        assert result.confidence == 100

    def test_persian_citation(self) -> None:
        """Should parse the Persian sample with adequate confidence."""
        result = parse_citation(PERSIAN_CITATION)
        assert result.language is LanguageTag.PERSIAN
        assert result.record.year == 1401
        assert [a.lastname for a in result.record.authors] == ["ربیعی", "یوسفی خواه"]
        assert result.confidence >= 55
        assert not result.is_low_confidence

    def test_surrounding_whitespace_ignored(self) -> None:
        """Should parse the same with padding around the text."""
        padded = parse_citation(f"  \n{APA_CITATION}\t ")
        assert padded.record.title == parse_citation(APA_CITATION).record.title

    def test_unstructured_text_still_parses(self) -> None:
        """Low confidence never rejects a parse."""
        result = parse_citation("some notes about a paper")
        assert result.detected_style is CitationStyle.UNKNOWN
        assert result.is_low_confidence

    def test_result_is_serializable(self) -> None:
        """Should convert to a JSON-friendly dict."""
        data = parse_citation(APA_CITATION).to_dict()
        assert data["detected_style"] == "apa"
        assert data["language"] == "english"
        assert data["record"]["authors"][0] == {"firstname": "J.", "lastname": "Smith"}


class TestInvalidInput:
    """Tests for rejected inputs."""

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
    def test_blank_text(self, raw: str) -> None:
        """Should reject blank text."""
        with pytest.raises(InvalidInputError):
            parse_citation(raw)

    @pytest.mark.parametrize("raw", [None, 42, ["Smith"]])
    def test_non_string(self, raw) -> None:
        """Should reject non-string input with the type in the detail."""
        with pytest.raises(InvalidInputError) as exc_info:
            parse_citation(raw)
        assert exc_info.value.code == "INVALID_INPUT"
        assert type(raw).__name__ in exc_info.value.detail

    def test_parse_many_stops_on_invalid(self) -> None:
        """Should propagate the first invalid input."""
        with pytest.raises(InvalidInputError):
            parse_many([APA_CITATION, ""])


class TestConfidence:
    """Tests for the additive confidence score."""

    def test_empty_record(self) -> None:
        """Should be zero for an empty record."""
        assert calculate_confidence(BibliographicRecord()) == 0

    def test_weights_add_up(self) -> None:
        """Should sum the weights of the filled fields."""
        record = BibliographicRecord(
            title="A sufficiently long title",
            authors=[Author("J.", "Smith")],
            year=2020,
        )
        assert calculate_confidence(record) == 75

    def test_short_title_not_counted(self) -> None:
        """A title of ten characters or fewer earns nothing."""
        assert calculate_confidence(BibliographicRecord(title="Short")) == 0

    def test_pages_count_without_volume(self) -> None:
        """Pages alone earn the volume/pages weight."""
        assert calculate_confidence(BibliographicRecord(pages="1-10")) == 10

    def test_parser_is_reusable(self) -> None:
        """The same parser instance should give identical results."""
        parser = CitationParser()
        first, second = parser.parse_many([APA_CITATION, APA_CITATION])
        assert first == second
