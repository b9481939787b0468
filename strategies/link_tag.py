import os
import logging
import posixpath
from typing import Optional

from bs4 import BeautifulSoup

from core.strategy_registry import StrategyRegistry
from fetch.http_client import fetch_document, is_empty_document, read_local_document
from models.lookup import LookupResult, NOT_FOUND, found
from models.probe_config import ProbeConfig

ICON_RELS = ("icon", "shortcut icon")


def _rel_value(link) -> str:
    # bs4 parses rel as a multi-valued attribute
    rel = link.get("rel")
    if isinstance(rel, list):
        rel = " ".join(rel)
    return (rel or "").strip().lower()


def find_icon_href(document: BeautifulSoup) -> Optional[str]:
    """Return the href of the first icon <link> in <head>, with any <base href> prepended.

    None if there is no icon link or the first one has no href.
    """
    head = document.find("head")
    if head is None:
        return None

    icon_link = next((link for link in head.find_all("link") if _rel_value(link) in ICON_RELS), None)
    if icon_link is None:
        return None
    href = icon_link.get("href")
    if href is None:
        return None

    # https://developer.mozilla.org/en-US/docs/Web/HTML/Element/base
    base = head.find("base")
    if base is not None and base.get("href") is not None:
        href = base["href"] + href
    return href


def absolutize(href: str, scheme: str, server: str, path: str) -> str:
    """Turn an absolute, protocol-relative, root-relative or relative href into a URL."""
    if href.startswith("http"):
        return href
    if href.startswith("//"):
        return f"{scheme}:{href}"
    if href.startswith("/"):
        return f"{scheme}://{server}{href}"

    logger = logging.getLogger(__name__)
    logger.warning(
        f"Relative icon URL '{href}' on {scheme}://{server}{path}: support for relative URLs is experimental"
    )
    directory = posixpath.dirname(path) or "/"
    return f"{scheme}://{server}{posixpath.join(directory, href)}"


@StrategyRegistry.register("link")
class LinkTagStrategy:
    """Find the favicon declared by <link rel="icon"> in the page's <head>."""

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()

    async def _load(self, scheme: str, server: str, path: str) -> BeautifulSoup:
        logger = logging.getLogger(__name__)
        if scheme == "file":
            filepath = path.lstrip("/") if os.name == "nt" else path
            return read_local_document(filepath)

        document = await fetch_document(
            f"{scheme}://{server}{path}",
            headers=self.config.headers,
            timeout=self.config.timeout,
            retries=self.config.retries,
        )
        # Some sites only declare the icon on their home page
        if is_empty_document(document):
            logger.debug(f"Empty document for {scheme}://{server}{path}, trying site root")
            document = await fetch_document(
                f"{scheme}://{server}",
                headers=self.config.headers,
                timeout=self.config.timeout,
                retries=self.config.retries,
            )
        return document

    async def __call__(self, scheme: str, server: str, path: str) -> LookupResult:
        document = await self._load(scheme, server, path)
        href = find_icon_href(document)
        if href is None:
            return NOT_FOUND
        return found(absolutize(href, scheme, server, path))
