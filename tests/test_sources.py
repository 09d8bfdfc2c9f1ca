"""Tests for text sources: files, stdin, and URLs.

WHY: Unreadable input must surface as one readable error type so the CLI
and GUI can report it, never as a traceback.

HOW: Files live in tmp_path, stdin is an io.StringIO, and URL fetches use
an httpx.Client built on httpx.MockTransport so no network is touched.
"""

import io

import httpx
import pytest

from rsvp_reader.errors import RsvpReaderError, TextSourceError
from rsvp_reader.sources import fetch_url, is_url, load_file, load_text


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestIsUrl:

    @pytest.mark.parametrize("source", ["http://x.test/a", "https://x.test", "HTTPS://X.TEST/"])
    def test_urls(self, source):
        assert is_url(source)

    @pytest.mark.parametrize("source", ["notes.txt", "-", "ftp://x.test", "/tmp/http.txt"])
    def test_not_urls(self, source):
        assert not is_url(source)


class TestLoadFile:

    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "fi.txt"
        path.write_text("Hyvää päivää, maailma!", encoding="utf-8")
        assert load_file(path) == "Hyvää päivää, maailma!"

    def test_strips_bom(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes("\ufeffhello".encode("utf-8"))
        assert load_file(path) == "hello"

    def test_missing_file(self, tmp_path):
        with pytest.raises(TextSourceError, match="file not found"):
            load_file(tmp_path / "nope.txt")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("päivää".encode("latin-1"))
        with pytest.raises(TextSourceError, match="not UTF-8"):
            load_file(path)

    def test_directory(self, tmp_path):
        with pytest.raises(TextSourceError):
            load_file(tmp_path)

    def test_error_carries_source(self, tmp_path):
        missing = tmp_path / "nope.txt"
        with pytest.raises(TextSourceError) as exc_info:
            load_file(missing)
        assert exc_info.value.source == str(missing)
        assert isinstance(exc_info.value, RsvpReaderError)


class TestFetchUrl:

    def test_returns_text_body(self):
        client = _client(lambda request: httpx.Response(
            200, text="one two", headers={"content-type": "text/plain; charset=utf-8"},
        ))
        assert fetch_url("https://example.test/a.txt", client=client) == "one two"

    def test_missing_content_type_treated_as_text(self):
        client = _client(lambda request: httpx.Response(200, content=b"plain"))
        assert fetch_url("https://example.test/", client=client) == "plain"

    def test_http_error_status(self):
        client = _client(lambda request: httpx.Response(404, text="nope"))
        with pytest.raises(TextSourceError, match="HTTP 404"):
            fetch_url("https://example.test/missing", client=client)

    def test_non_text_content_type(self):
        client = _client(lambda request: httpx.Response(
            200, content=b"%PDF", headers={"content-type": "application/pdf"},
        ))
        with pytest.raises(TextSourceError, match="application/pdf"):
            fetch_url("https://example.test/a.pdf", client=client)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TextSourceError, match="connection refused"):
            fetch_url("https://example.test/", client=_client(handler))

    def test_passed_client_stays_open(self):
        client = _client(lambda request: httpx.Response(200, text="x"))
        fetch_url("https://example.test/", client=client)
        assert not client.is_closed


class TestLoadText:

    def test_stdin(self):
        assert load_text("-", stdin=io.StringIO("from stdin")) == "from stdin"

    def test_file_path(self, tmp_path):
        path = tmp_path / "t.txt"
        path.write_text("file text", encoding="utf-8")
        assert load_text(str(path)) == "file text"

    def test_url_dispatch(self, monkeypatch):
        seen = []

        def fake_fetch(url, client=None):
            seen.append(url)
            return "remote"

        monkeypatch.setattr("rsvp_reader.sources.fetch_url", fake_fetch)
        assert load_text("https://example.test/t") == "remote"
        assert seen == ["https://example.test/t"]

    def test_missing_path(self, tmp_path):
        with pytest.raises(TextSourceError):
            load_text(str(tmp_path / "missing.txt"))
