"""Tests for the /favicon.ico probe strategy."""
import pytest
from unittest.mock import AsyncMock, patch
import httpx

from models.lookup import NOT_FOUND
from models.probe_config import ProbeConfig
from strategies.favicon_ico import FaviconIcoStrategy


@pytest.mark.asyncio
async def test_fetchable_favicon_is_found():
    strategy = FaviconIcoStrategy()
    with patch('strategies.favicon_ico.probe_download', new=AsyncMock(return_value=True)) as mock_probe:
        result = await strategy("https", "www.r-project.org", "/about.html")

    assert result.url == "https://www.r-project.org/favicon.ico"
    assert mock_probe.await_args.args[0] == "https://www.r-project.org/favicon.ico"


@pytest.mark.asyncio
async def test_failed_probe_is_not_found():
    strategy = FaviconIcoStrategy()
    with patch('strategies.favicon_ico.probe_download', new=AsyncMock(return_value=False)):
        result = await strategy("https", "example.com", "/")
    assert result is NOT_FOUND


@pytest.mark.asyncio
async def test_probe_error_is_not_found():
    strategy = FaviconIcoStrategy()
    with patch('strategies.favicon_ico.probe_download', new=AsyncMock(side_effect=httpx.ConnectError("Connection refused"))):
        result = await strategy("https", "example.com", "/")
    assert result is NOT_FOUND


@pytest.mark.asyncio
async def test_probe_uses_configuration_from_constructor():
    config = ProbeConfig(method="HEAD", headers={"User-Agent": "test"}, timeout=3.0, retries=0)
    strategy = FaviconIcoStrategy(config)

    with patch('strategies.favicon_ico.probe_download', new=AsyncMock(return_value=True)) as mock_probe:
        await strategy("http", "localhost:8080", "/ignored/path")

    mock_probe.assert_awaited_once_with(
        "http://localhost:8080/favicon.ico",
        method="HEAD",
        headers={"User-Agent": "test"},
        timeout=3.0,
        retries=0,
    )
