"""Tests for DOI extraction and the Crossref lookup (network mocked)."""

import pytest
import requests

from fishchi.engines import doi as doi_engine
from fishchi.engines.doi import extract_doi, fetch_crossref_by_doi
from fishchi.models import LanguageTag, SourceType

CROSSREF_MESSAGE = {
    "DOI": "10.1234/jet.2024.001",
    "type": "journal-article",
    "title": ["The impact of technology on education"],
    "author": [
        {"given": "John", "family": "Smith"},
        {"given": "Mary", "family": "Johnson"},
        {"name": "Education Consortium"},
    ],
    "issued": {"date-parts": [[2024, 3, 1]]},
    "container-title": ["Journal of Educational Technology"],
    "volume": "15",
    "issue": "3",
    "page": "123-145",
    "publisher": "Tech Press",
    "URL": "https://doi.org/10.1234/jet.2024.001",
}


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get in the DOI engine and record the calls."""
    calls = []

    def install(response=None, exc=None):
        def _get(url, headers=None, timeout=None):
            calls.append({"url": url, "headers": headers, "timeout": timeout})
            if exc is not None:
                raise exc
            return response

        monkeypatch.setattr(doi_engine.requests, "get", _get)
        return calls

    return install


class TestExtractDoi:
    """Tests for DOI extraction from text and URLs."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("doi:10.1234/jet.2024.001", "10.1234/jet.2024.001"),
            ("https://doi.org/10.1038/nature12373", "10.1038/nature12373"),
            ("https://onlinelibrary.wiley.com/doi/full/10.1002/abc.123", "10.1002/abc.123"),
            ("https://example.com/view?doi=10.5555/xyz.1&lang=en", "10.5555/xyz.1"),
            ("See 10.1000/182.", "10.1000/182"),
        ],
    )
    def test_extracts(self, text, expected) -> None:
        """Should find the DOI in each form."""
        assert extract_doi(text) == expected

    def test_no_doi(self) -> None:
        """Should return an empty string when there is no DOI."""
        assert extract_doi("no identifier here") == ""
        assert extract_doi("") == ""


class TestFetchCrossref:
    """Tests for fetch_crossref_by_doi."""

    def test_normalizes_record(self, fake_get) -> None:
        """Should map Crossref metadata onto a record."""
        calls = fake_get(FakeResponse(payload={"message": CROSSREF_MESSAGE}))
        record = fetch_crossref_by_doi("https://doi.org/10.1234/jet.2024.001")

        assert calls[0]["url"].endswith("/works/10.1234/jet.2024.001")
        assert calls[0]["timeout"] is not None
        assert record.id == "10.1234/jet.2024.001"
        assert record.title == "The impact of technology on education"
        assert [(a.firstname, a.lastname) for a in record.authors] == [("John", "Smith"), ("Mary", "Johnson")]
        assert record.year == 2024
        assert record.venue == "Journal of Educational Technology"
        assert record.pages == "123-145"
        assert record.source_type is SourceType.ARTICLE
        assert record.language is LanguageTag.ENGLISH

    def test_book_type(self, fake_get) -> None:
        """Should map book types to BOOK."""
        message = dict(CROSSREF_MESSAGE, type="monograph")
        fake_get(FakeResponse(payload={"message": message}))
        assert fetch_crossref_by_doi("10.1234/jet.2024.001").source_type is SourceType.BOOK

    def test_not_found(self, fake_get) -> None:
        """Should return None on a 404."""
        fake_get(FakeResponse(status_code=404))
        assert fetch_crossref_by_doi("10.1234/missing") is None

    def test_network_error(self, fake_get) -> None:
        """Should return None when the request fails."""
        fake_get(exc=requests.ConnectionError("offline"))
        assert fetch_crossref_by_doi("10.1234/jet.2024.001") is None

    def test_bad_json(self, fake_get) -> None:
        """Should return None for an unreadable payload."""
        fake_get(FakeResponse(bad_json=True))
        assert fetch_crossref_by_doi("10.1234/jet.2024.001") is None

    def test_empty_doi(self, fake_get) -> None:
        """Should not call Crossref without a DOI."""
        calls = fake_get(FakeResponse(payload={"message": CROSSREF_MESSAGE}))
        assert fetch_crossref_by_doi("   ") is None
        assert calls == []
