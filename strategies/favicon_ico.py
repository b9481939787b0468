import logging
from typing import Optional

from core.strategy_registry import StrategyRegistry
from fetch.http_client import probe_download
from models.lookup import LookupResult, NOT_FOUND, found
from models.probe_config import ProbeConfig


@StrategyRegistry.register("ico")
class FaviconIcoStrategy:
    """Check whether the server publishes /favicon.ico."""

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()

    async def __call__(self, scheme: str, server: str, path: str) -> LookupResult:
        logger = logging.getLogger(__name__)
        favicon = f"{scheme}://{server}/favicon.ico"
        try:
            ok = await probe_download(
                favicon,
                method=self.config.method,
                headers=self.config.headers,
                timeout=self.config.timeout,
                retries=self.config.retries,
            )
        except Exception as e:
            logger.debug(f"Probe of {favicon} raised {type(e).__name__}: {e}")
            return NOT_FOUND
        return found(favicon) if ok else NOT_FOUND
