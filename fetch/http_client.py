import httpx
import logging
from typing import Optional, Dict
from bs4 import BeautifulSoup

from fetch.tls_client import relaxed_ssl_context

# Default timeout configuration (in seconds)
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONNECT_TIMEOUT = 5.0
# Connection-level retries used for the relaxed second attempt and the probe
DEFAULT_RETRIES = 2
DEFAULT_USER_AGENT = "faviconplease/0.1"

HTML_PARSER = "lxml"

async def fetch_url(
    url: str,
    method: str = "GET",
    timeout: Optional[float] = None,
    connect_timeout: Optional[float] = None,
    headers: Optional[Dict[str, str]] = None,
    verify=True,
    retries: int = 0,
):
    """
    Fetches a URL with configurable timeouts, TLS verification and retries.
    
    Args:
        url: The URL to fetch
        method: HTTP method (GET, HEAD, ...)
        timeout: Total request timeout in seconds (default: 10s)
        connect_timeout: Connection timeout in seconds (default: 5s)
        headers: Optional dictionary of HTTP headers
        verify: True, False or an ssl.SSLContext
        retries: Number of connection retries done by the transport
    
    Returns:
        httpx.Response object
    """
    logger = logging.getLogger(__name__)
    logger.debug(f"HTTP {method} {url} (timeout: {timeout or DEFAULT_TIMEOUT}s, retries: {retries})")
    
    timeout_config = httpx.Timeout(
        timeout=timeout or DEFAULT_TIMEOUT,
        connect=connect_timeout or DEFAULT_CONNECT_TIMEOUT
    )
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    request_headers.update(headers or {})
    transport = httpx.AsyncHTTPTransport(verify=verify, retries=retries)
    
    try:
        async with httpx.AsyncClient(timeout=timeout_config, follow_redirects=True, transport=transport) as client:
            response = await client.request(method, url, headers=request_headers)
            logger.debug(f"HTTP {response.status_code} {url} ({len(response.content)} bytes)")
            # Don't raise for status - callers decide what an error code means
            return response
    except httpx.TimeoutException as e:
        logger.warning(f"HTTP timeout for {url}: {e}")
        raise
    except httpx.RequestError as e:
        logger.warning(f"HTTP request error for {url}: {e}")
        raise


def empty_document() -> BeautifulSoup:
    return BeautifulSoup("", HTML_PARSER)


def is_empty_document(document: BeautifulSoup) -> bool:
    """True when the document contains no elements at all."""
    return document.find(True) is None


def read_local_document(path: str) -> BeautifulSoup:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return BeautifulSoup(f.read(), HTML_PARSER)


async def fetch_document(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    retries: Optional[int] = None,
) -> BeautifulSoup:
    """
    Downloads and parses an HTML page.

    A normal request is tried first. If it fails or returns an HTTP error, a
    second request is made with relaxed TLS settings and transport retries.
    If that fails too, an empty document is returned instead of raising.
    """
    logger = logging.getLogger(__name__)

    try:
        response = await fetch_url(url, headers=headers, timeout=timeout)
        if not response.is_error:
            return BeautifulSoup(response.text, HTML_PARSER)
        logger.debug(f"HTTP {response.status_code} for {url}, retrying with relaxed TLS")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(f"Fetch of {url} failed ({type(e).__name__}), retrying with relaxed TLS")

    try:
        response = await fetch_url(
            url,
            headers=headers,
            timeout=timeout,
            verify=relaxed_ssl_context(),
            retries=DEFAULT_RETRIES if retries is None else retries,
        )
        if not response.is_error:
            return BeautifulSoup(response.text, HTML_PARSER)
        logger.debug(f"HTTP {response.status_code} for {url} on relaxed retry")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(f"Relaxed fetch of {url} failed: {type(e).__name__}")

    return empty_document()


async def probe_download(
    url: str,
    method: str = "GET",
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    retries: Optional[int] = None,
) -> bool:
    """
    Checks whether a URL can be downloaded. The body is discarded.

    Returns:
        True if the request completed with a non-error status, False otherwise
    """
    logger = logging.getLogger(__name__)
    try:
        response = await fetch_url(
            url,
            method=method,
            headers=headers,
            timeout=timeout,
            retries=DEFAULT_RETRIES if retries is None else retries,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(f"Probe of {url} failed: {type(e).__name__}")
        return False
    return not response.is_error
