"""Tests for the Flask HTTP adapter."""

import io

import pytest
from docx import Document

from fishchi import app as app_module
from fishchi.app import app
from fishchi.models import Author, BibliographicRecord

from conftest import APA_CITATION

SOURCES = [
    {"id": "1", "title": "Alpha study of learning", "authors": [{"firstname": "A.", "lastname": "Adams"}], "year": 2019},
    {"id": "2", "title": "Beta review of teaching", "authors": [{"firstname": "B.", "lastname": "Baker"}], "year": 2020},
]


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestParseEndpoint:
    """Tests for POST /api/v1/sources/parse-citation."""

    def test_parses(self, client) -> None:
        """Should return the parsed record in the envelope."""
        resp = client.post("/api/v1/sources/parse-citation", json={"citation": APA_CITATION})
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["success"] is True
        assert body["status"] == "success"
        assert body["data"]["detected_style"] == "apa"
        assert body["data"]["record"]["year"] == 2024

    def test_missing_citation(self, client) -> None:
        """Should reject a request without citation text."""
        resp = client.post("/api/v1/sources/parse-citation", json={})
        body = resp.get_json()
        assert resp.status_code == 400
        assert body["status"] == "fail"
        assert body["data"]["code"] == "INVALID_INPUT"

    def test_non_json_body(self, client) -> None:
        """Should reject a body that is not a JSON object."""
        resp = client.post("/api/v1/sources/parse-citation", data="plain text")
        assert resp.status_code == 400

    def test_persian_output_not_escaped(self, client) -> None:
        """Persian text should be sent as UTF-8, not \\u escapes."""
        resp = client.post("/api/v1/sources/parse-citation", json={"citation": "احمدی، علی. (1399). عنوان مقاله."})
        assert "احمدی".encode("utf-8") in resp.data


class TestImportDoiEndpoint:
    """Tests for POST /api/v1/sources/import-doi."""

    def test_found(self, client, monkeypatch) -> None:
        """Should return the Crossref record."""
        record = BibliographicRecord(id="10.1/x", title="Found paper", authors=[Author("J.", "Smith")])
        monkeypatch.setattr(app_module, "fetch_crossref_by_doi", lambda doi: record)
        resp = client.post("/api/v1/sources/import-doi", json={"doi": "10.1/x"})
        assert resp.status_code == 200
        assert resp.get_json()["data"]["title"] == "Found paper"

    def test_not_found(self, client, monkeypatch) -> None:
        """Should return 404 when Crossref has nothing."""
        monkeypatch.setattr(app_module, "fetch_crossref_by_doi", lambda doi: None)
        resp = client.post("/api/v1/sources/import-doi", json={"doi": "10.1/none"})
        assert resp.status_code == 404
        assert resp.get_json()["success"] is False

    def test_missing_doi(self, client) -> None:
        """Should reject a request without a DOI."""
        resp = client.post("/api/v1/sources/import-doi", json={"doi": "  "})
        assert resp.status_code == 400


class TestExportEndpoints:
    """Tests for the export routes."""

    def test_format_citation(self, client) -> None:
        """Should return in-text and bibliography."""
        resp = client.post("/api/v1/export/format-citation", json={
            "sources": SOURCES, "style": "vancouver", "citedIds": ["1"], "citationOrder": ["2", "1"],
        })
        data = resp.get_json()["data"]
        assert resp.status_code == 200
        assert data["inText"] == "[2]"
        assert data["bibliography"].index("Baker") < data["bibliography"].index("Adams")

    def test_bibliography(self, client) -> None:
        """Should return the bibliography HTML."""
        resp = client.post("/api/v1/export/bibliography", json={"sources": SOURCES, "style": "apa"})
        assert resp.status_code == 200
        assert "English sources" in resp.get_json()["data"]["bibliography"]

    def test_bibliography_with_numeric_title(self, client) -> None:
        """A stored record with a numeric title does not fail the request."""
        sources = SOURCES + [{"id": "3", "title": 12345}]
        resp = client.post("/api/v1/export/bibliography", json={"sources": sources, "style": "apa"})
        assert resp.status_code == 200
        assert "12345" in resp.get_json()["data"]["bibliography"]

    def test_missing_sources(self, client) -> None:
        """Should reject an empty source list."""
        resp = client.post("/api/v1/export/bibliography", json={"sources": []})
        assert resp.status_code == 400

    def test_convert_style(self, client) -> None:
        """Should return camelCase conversion results."""
        resp = client.post("/api/v1/export/convert-style", json={
            "sources": SOURCES, "sourceIds": ["2", "1", "9"], "currentStyle": "apa", "newStyle": "vancouver",
        })
        data = resp.get_json()["data"]
        assert resp.status_code == 200
        assert data["convertedCitations"][0] == {"sourceId": "2", "inText": "[1]"}
        assert data["convertedCitations"][2]["error"] == "Source not found"
        assert data["successCount"] == 2
        assert data["errorCount"] == 1

    def test_convert_requires_new_style(self, client) -> None:
        """Should reject a request without newStyle."""
        resp = client.post("/api/v1/export/convert-style", json={"sources": SOURCES})
        assert resp.status_code == 400

    def test_convert_same_style(self, client) -> None:
        """Should reject converting to the current style."""
        resp = client.post("/api/v1/export/convert-style", json={
            "sources": SOURCES, "currentStyle": "apa", "newStyle": "APA",
        })
        assert resp.status_code == 400

    def test_docx(self, client) -> None:
        """Should send a readable .docx attachment."""
        resp = client.post("/api/v1/export/docx", json={"sources": SOURCES, "style": "apa"})
        assert resp.status_code == 200
        assert "bibliography.docx" in resp.headers["Content-Disposition"]
        doc = Document(io.BytesIO(resp.data))
        assert any("Adams" in p.text for p in doc.paragraphs)


class TestStyleEndpoints:
    """Tests for the style lookup routes."""

    def test_list(self, client) -> None:
        """Should list the available styles."""
        data = client.get("/api/v1/styles").get_json()["data"]
        assert "vancouver" in data["styles"]
        assert data["default"] == "apa"

    def test_supported(self, client) -> None:
        """Should report whether an alias is known."""
        assert client.get("/api/v1/styles/Harvard").get_json()["data"]["supported"] is True
        assert client.get("/api/v1/styles/klingon").get_json()["data"]["supported"] is False

    def test_health(self, client) -> None:
        """Should report the package version."""
        body = client.get("/health").get_json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
