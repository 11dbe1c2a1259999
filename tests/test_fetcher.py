import pytest
import requests
from unittest.mock import MagicMock, patch

from metascraper.fetcher import _sync_fetch, declared_charset, fetch_resource


def mock_session(status_code=200, content_type="text/html; charset=utf-8", chunks=(b"<html></html>",),
                 final_url="https://example.com/final"):
    """Patchable requests.Session whose get() yields a canned response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = {"Content-Type": content_type} if content_type is not None else {}
    response.iter_content.side_effect = lambda chunk_size: iter(chunks)
    response.url = final_url

    session = MagicMock()
    session.get.return_value.__enter__.return_value = response

    session_cls = MagicMock()
    session_cls.return_value.__enter__.return_value = session
    return session_cls, session, response


def test_html_body_returned_as_bytes():
    session_cls, session, _ = mock_session(chunks=(b"<html><title>", b"Hi</title></html>"))
    with patch("metascraper.fetcher.requests.Session", session_cls):
        content_type, html, final_url = _sync_fetch("https://example.com")

    assert content_type == "text/html; charset=utf-8"
    assert html == b"<html><title>Hi</title></html>"
    assert final_url == "https://example.com/final"


def test_utf8_body_left_undecoded_under_bare_html_header():
    body = '<meta charset="utf-8"><title>Café über</title>'.encode("utf-8")
    session_cls, _, _ = mock_session(content_type="text/html", chunks=(body,))
    with patch("metascraper.fetcher.requests.Session", session_cls):
        _, html, _ = _sync_fetch("https://example.com")

    assert html == body
    assert html.decode("utf-8").endswith("Café über</title>")


def test_request_follows_redirects_without_referrer_or_ambient_credentials():
    session_cls, session, _ = mock_session()
    with patch("metascraper.fetcher.requests.Session", session_cls):
        _sync_fetch("https://example.com")

    args, kwargs = session.get.call_args
    assert args == ("https://example.com",)
    assert kwargs["allow_redirects"] is True
    assert kwargs["stream"] is True
    assert "Referer" not in kwargs["headers"]
    assert session.trust_env is False


def test_non_html_body_not_read():
    session_cls, _, response = mock_session(content_type="image/png")
    with patch("metascraper.fetcher.requests.Session", session_cls):
        content_type, html, _ = _sync_fetch("https://example.com/a.png")

    assert content_type == "image/png"
    assert html is None
    response.iter_content.assert_not_called()


def test_missing_content_type():
    session_cls, _, _ = mock_session(content_type=None)
    with patch("metascraper.fetcher.requests.Session", session_cls):
        content_type, html, _ = _sync_fetch("https://example.com/blob")

    assert content_type == ""
    assert html is None


@pytest.mark.parametrize("status_code", [204, 299])
def test_any_2xx_is_success(status_code):
    session_cls, _, _ = mock_session(status_code=status_code)
    with patch("metascraper.fetcher.requests.Session", session_cls):
        _, html, _ = _sync_fetch("https://example.com")

    assert html == b"<html></html>"


@pytest.mark.parametrize("status_code", [304, 404, 500])
def test_non_2xx_raises(status_code):
    session_cls, _, _ = mock_session(status_code=status_code)
    with patch("metascraper.fetcher.requests.Session", session_cls):
        with pytest.raises(requests.HTTPError):
            _sync_fetch("https://example.com")


def test_download_stops_at_byte_ceiling():
    consumed = []

    def chunks():
        for _ in range(100):
            consumed.append(1)
            yield b"x" * 4

    session_cls, _, _ = mock_session(chunks=chunks())
    with patch("metascraper.fetcher.requests.Session", session_cls), \
         patch("metascraper.fetcher.MAX_CONTENT_BYTES", 10):
        _, html, _ = _sync_fetch("https://example.com")

    assert html == b"x" * 10
    # three 4-byte chunks cover the 10-byte ceiling; the rest is never pulled
    assert len(consumed) == 3


def test_ceiling_counts_bytes_not_characters():
    # "é" is two bytes in UTF-8
    session_cls, _, _ = mock_session(chunks=(("é" * 10).encode("utf-8"),))
    with patch("metascraper.fetcher.requests.Session", session_cls), \
         patch("metascraper.fetcher.MAX_CONTENT_BYTES", 10):
        _, html, _ = _sync_fetch("https://example.com")

    assert len(html) == 10
    assert html.decode("utf-8") == "é" * 5


@pytest.mark.parametrize("content_type, expected", [
    ("text/html; charset=UTF-8", "utf-8"),
    ("text/html;charset=\"ISO-8859-1\"", "iso-8859-1"),
    ("text/html; boundary=x; charset=windows-1252", "windows-1252"),
    ("text/html", None),
    ("text/html; charset=", None),
    ("", None),
])
def test_declared_charset(content_type, expected):
    assert declared_charset(content_type) == expected


@pytest.mark.asyncio
async def test_fetch_resource_runs_sync_fetch():
    with patch("metascraper.fetcher._sync_fetch", return_value=("image/png", None, "https://x.test/a.png")) as mock_fetch:
        result = await fetch_resource("https://x.test/a.png")

    assert result == ("image/png", None, "https://x.test/a.png")
    mock_fetch.assert_called_once_with("https://x.test/a.png")
