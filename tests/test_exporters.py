"""Tests for the Word bibliography export."""

import io

from docx import Document
from docx.oxml.ns import qn

from fishchi.config import DOCX_HEADING
from fishchi.exporters import _parse_formatted_text, bibliography_blocks, export_bibliography_docx


def _open(content: bytes):
    return Document(io.BytesIO(content))


class TestParseFormattedText:
    """Tests for splitting entry markup into runs."""

    def test_italic_runs(self) -> None:
        """Should mark <i> text as italic."""
        parts = _parse_formatted_text("Title. <i>Journal</i>, 15.")
        assert parts == [
            {"text": "Title. ", "italic": False, "bold": False},
            {"text": "Journal", "italic": True, "bold": False},
            {"text": ", 15.", "italic": False, "bold": False},
        ]

    def test_entities_unescaped(self) -> None:
        """Should unescape HTML entities."""
        parts = _parse_formatted_text("Smith &amp; Jones")
        assert parts[0]["text"] == "Smith & Jones"


class TestBibliographyBlocks:
    """Tests for walking rendered bibliography HTML."""

    def test_sections_and_entries(self, english_record, persian_record) -> None:
        """Should report headings and entries with their direction."""
        from fishchi.renderer import render_bibliography

        html = render_bibliography([english_record, persian_record], "apa", "en-US")
        blocks = bibliography_blocks(html)
        assert [b["kind"] for b in blocks] == ["heading", "entry", "heading", "entry"]
        assert [b["rtl"] for b in blocks] == [False, False, True, True]


class TestExportDocx:
    """Tests for export_bibliography_docx."""

    def test_document_structure(self, english_record, book_record) -> None:
        """Should write a heading and one paragraph per entry."""
        doc = _open(export_bibliography_docx([english_record, book_record], "apa", "en-US"))
        texts = [p.text for p in doc.paragraphs]
        assert texts[0] == DOCX_HEADING
        assert "English sources" in texts
        assert any(t.startswith("Brown, A. (2020).") for t in texts)
        assert any(t.startswith("Smith, J., & Johnson, M. (2024).") for t in texts)

    def test_italics_preserved(self, english_record) -> None:
        """The journal name should be an italic run."""
        doc = _open(export_bibliography_docx([english_record], "apa", "en-US"))
        italic = [r.text for p in doc.paragraphs for r in p.runs if r.italic]
        assert "Journal of Educational Technology" in italic

    def test_persian_entries_are_rtl(self, persian_record) -> None:
        """Persian paragraphs should carry bidi properties."""
        doc = _open(export_bibliography_docx([persian_record], "apa", "fa-IR"))
        entry = next(p for p in doc.paragraphs if "ربیعی" in p.text)
        assert entry._p.pPr.find(qn("w:bidi")) is not None

    def test_vancouver_numbering(self, abc_records) -> None:
        """Vancouver entries keep their citation numbers."""
        doc = _open(export_bibliography_docx(abc_records, "vancouver", order=["B", "A", "C"]))
        entries = [p.text for p in doc.paragraphs[1:]]
        assert entries[0].startswith("1. Baker B.")
        assert entries[1].startswith("2. Adams A.")

    def test_escaped_text_restored(self) -> None:
        """Escaped record text reads back as typed."""
        from fishchi.models import Author, BibliographicRecord

        record = BibliographicRecord(
            id="r1", title="R&D <policy> review", authors=[Author("J.", "Smith")], year=2020,
        )
        doc = _open(export_bibliography_docx([record], "apa", "en-US"))
        assert any("R&D <policy> review." in p.text for p in doc.paragraphs)
