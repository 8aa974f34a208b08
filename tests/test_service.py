"""Tests for the format and convert-style orchestration."""

import pytest

from fishchi.errors import InvalidInputError
from fishchi.service import convert_citation_style, format_citations


class TestFormatCitations:
    """Tests for format_citations."""

    def test_returns_both_parts(self, english_record, book_record) -> None:
        """Should return the in-text marker and the bibliography."""
        result = format_citations([english_record, book_record], "apa", ["src3"])
        assert result["in_text"] == "(Brown, 2020)"
        assert "English sources" in result["bibliography"]

    def test_vancouver_shares_numbering(self, abc_records) -> None:
        """An id missing from the order gets the same number in text and list."""
        result = format_citations(abc_records, "vancouver", ["C"], order=["A", "B"])
        assert result["in_text"] == "[3]"
        assert ">3. " in result["bibliography"]


class TestConvertCitationStyle:
    """Tests for convert_citation_style."""

    def test_converts_every_citation(self, abc_records) -> None:
        """Should render one citation per source id in the new style."""
        result = convert_citation_style(abc_records, "vancouver", ["C", "A", "B"])
        assert [c["in_text"] for c in result["converted_citations"]] == ["[1]", "[2]", "[3]"]
        assert result["new_style"] == "vancouver"
        assert result["success_count"] == 3
        assert result["error_count"] == 0

    def test_author_date_target(self, english_record) -> None:
        """Should convert to an author-date style."""
        result = convert_citation_style([english_record], "harvard", current_style="apa")
        assert result["converted_citations"] == [
            {"source_id": "src1", "in_text": "(Smith and Johnson, 2024)"},
        ]
        assert result["language"] == "en-US"

    def test_missing_source_reported(self, abc_records) -> None:
        """Should flag ids with no matching record and keep going."""
        result = convert_citation_style(abc_records, "apa", ["A", "ghost"])
        assert result["converted_citations"][1] == {
            "source_id": "ghost", "in_text": "[Error]", "error": "Source not found",
        }
        assert result["total_converted"] == 2
        assert result["success_count"] == 1
        assert result["error_count"] == 1

    def test_fresh_numbering_per_call(self, abc_records) -> None:
        """Each conversion numbers from scratch."""
        first = convert_citation_style(abc_records, "vancouver", ["B"])
        second = convert_citation_style(abc_records, "vancouver", ["C"])
        assert first["converted_citations"][0]["in_text"] == "[1]"
        assert second["converted_citations"][0]["in_text"] == "[1]"

    def test_same_style_rejected(self, english_record) -> None:
        """Should refuse converting to the current style."""
        with pytest.raises(InvalidInputError):
            convert_citation_style([english_record], "APA 7", current_style="apa")

    def test_no_records_rejected(self) -> None:
        """Should refuse an empty document."""
        with pytest.raises(InvalidInputError):
            convert_citation_style([], "apa")
