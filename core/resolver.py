import asyncio
import inspect
import logging
from typing import Callable, List, Sequence, Union

from core.context import decompose
from core.exceptions import InvalidArgument
from core.strategy_registry import default_strategies
from fallbacks.icon_services import duckduckgo
from models.fallback import Fallback, make_fallback
from models.lookup import LookupResult, NOT_FOUND, as_result

logger = logging.getLogger(__name__)

# Marker for "use the built-in link + ico chain"
DEFAULT_STRATEGIES = object()


def _validate_links(links) -> List[str]:
    if isinstance(links, str):
        return [links]
    if not isinstance(links, (list, tuple)) or not all(isinstance(link, str) for link in links):
        raise InvalidArgument("The argument `links` must be a list of URL strings")
    return list(links)


def _validate_strategies(strategies) -> List[Callable]:
    if strategies is DEFAULT_STRATEGIES:
        return default_strategies()
    if strategies is None:
        return []
    if not isinstance(strategies, (list, tuple)) or not all(callable(s) for s in strategies):
        raise InvalidArgument("The argument `strategies` must be a list of functions or None")
    return list(strategies)


def _strategy_name(strategy) -> str:
    return getattr(strategy, "__name__", type(strategy).__name__)


async def _run_strategy(strategy, scheme: str, server: str, path: str) -> LookupResult:
    """Call one strategy, turning any fault into NOT_FOUND."""
    name = _strategy_name(strategy)
    try:
        result = strategy(scheme, server, path)
        if inspect.isawaitable(result):
            result = await result
        return as_result(result)
    except Exception as e:
        logger.warning(f"Error in {name} strategy for {scheme}://{server}{path}: {e}", exc_info=True)
        return NOT_FOUND


async def resolve_one(link: str, strategies: Sequence[Callable], fallback: Fallback) -> str:
    parsed = decompose(link)
    logger.debug(f"Resolving favicon for {link} (scheme={parsed.scheme!r}, server={parsed.server!r}, path={parsed.path!r})")

    # Sequential on purpose: the first strategy to answer wins
    for strategy in strategies:
        result = await _run_strategy(strategy, parsed.scheme, parsed.server, parsed.path)
        if result:
            logger.debug(f"{_strategy_name(strategy)} strategy found {result.url} for {link}")
            return result.url

    favicon = fallback.apply(parsed.server)
    logger.debug(f"No strategy found a favicon for {link}, using fallback {favicon}")
    return favicon


async def resolve(
    links: Union[str, Sequence[str]],
    strategies=DEFAULT_STRATEGIES,
    fallback: Union[str, Callable[[str], str], Fallback] = duckduckgo,
) -> List[str]:
    """Find the URL of each website's favicon.

    The strategies are tried in order until one returns a URL. If none does,
    the fallback is used: called with the server name if it is a function,
    used verbatim if it is a string.

    Args:
        links: URLs of pages on the websites
        strategies: Ordered callables ``(scheme, server, path)`` returning a
            favicon URL, "" / None / NOT_FOUND, or an awaitable of those.
            None disables strategies; the default is link tag then favicon.ico.
        fallback: A one-argument function of the server name, or a string

    Returns:
        One favicon URL per input link, in the same order

    Raises:
        InvalidArgument: if any argument is malformed (checked before any request)
    """
    links = _validate_links(links)
    strategy_list = _validate_strategies(strategies)
    resolved_fallback = make_fallback(fallback)
    logger.info(f"Resolving {len(links)} links with {len(strategy_list)} strategies")

    favicons: List[str] = []
    for link in links:
        favicons.append(await resolve_one(link, strategy_list, resolved_fallback))
    return favicons


def resolve_sync(
    links: Union[str, Sequence[str]],
    strategies=DEFAULT_STRATEGIES,
    fallback: Union[str, Callable[[str], str], Fallback] = duckduckgo,
) -> List[str]:
    """Blocking wrapper around resolve() for code without an event loop."""
    return asyncio.run(resolve(links, strategies, fallback))
