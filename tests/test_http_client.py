"""Tests for the document fetch and download probe helpers."""
import ssl
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import httpx

from fetch.http_client import fetch_document, probe_download, is_empty_document, read_local_document
from fetch.tls_client import relaxed_ssl_context


def make_response(status_code, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.is_error = status_code >= 400
    response.text = text
    return response


@pytest.mark.asyncio
async def test_fetch_document_parses_html():
    html = '<html><head><link rel="icon" href="/f.png"></head></html>'
    with patch('fetch.http_client.fetch_url', new=AsyncMock(return_value=make_response(200, html))) as mock_fetch:
        document = await fetch_document("https://example.com")

    assert document.find("link")["href"] == "/f.png"
    assert mock_fetch.await_count == 1


@pytest.mark.asyncio
async def test_fetch_document_retries_with_relaxed_tls():
    responses = [httpx.ConnectError("certificate verify failed"), make_response(200, "<html><head></head></html>")]
    with patch('fetch.http_client.fetch_url', new=AsyncMock(side_effect=responses)) as mock_fetch:
        document = await fetch_document("https://old.example.com")

    assert not is_empty_document(document)
    retry_kwargs = mock_fetch.await_args_list[1].kwargs
    assert isinstance(retry_kwargs["verify"], ssl.SSLContext)
    assert retry_kwargs["retries"] > 0


@pytest.mark.asyncio
async def test_fetch_document_returns_empty_document_on_failure():
    responses = [make_response(404), httpx.ReadTimeout("timed out")]
    with patch('fetch.http_client.fetch_url', new=AsyncMock(side_effect=responses)):
        document = await fetch_document("https://example.com/missing")

    assert is_empty_document(document)


@pytest.mark.asyncio
async def test_probe_download_success_and_failure():
    with patch('fetch.http_client.fetch_url', new=AsyncMock(return_value=make_response(200))):
        assert await probe_download("https://example.com/favicon.ico") is True

    with patch('fetch.http_client.fetch_url', new=AsyncMock(return_value=make_response(404))):
        assert await probe_download("https://example.com/favicon.ico") is False

    with patch('fetch.http_client.fetch_url', new=AsyncMock(side_effect=httpx.ConnectError("Connection refused"))):
        assert await probe_download("https://example.com/favicon.ico") is False


@pytest.mark.asyncio
async def test_probe_download_passes_method_and_headers():
    with patch('fetch.http_client.fetch_url', new=AsyncMock(return_value=make_response(200))) as mock_fetch:
        await probe_download("https://example.com/favicon.ico", method="HEAD", headers={"Cookie": "a=b"}, retries=1)

    kwargs = mock_fetch.await_args.kwargs
    assert kwargs["method"] == "HEAD"
    assert kwargs["headers"] == {"Cookie": "a=b"}
    assert kwargs["retries"] == 1


def test_relaxed_ssl_context_skips_verification():
    context = relaxed_ssl_context()
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False


def test_read_local_document(tmp_path):
    html_file = tmp_path / "page.html"
    html_file.write_text("<html><head><title>Local</title></head></html>")
    assert read_local_document(str(html_file)).title.string == "Local"
