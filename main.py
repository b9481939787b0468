import asyncio
import argparse
import json
import logging
import sys
from core.exceptions import InvalidArgument
from core.resolver import resolve
from core.strategy_registry import StrategyRegistry, DEFAULT_STRATEGY_NAMES
from fallbacks.icon_services import ICON_SERVICES, get_fallback
from fetch.http_client import DEFAULT_RETRIES
from models.probe_config import ProbeConfig

# Import built-in strategies to trigger @StrategyRegistry.register decorators
import strategies.link_tag
import strategies.favicon_ico


def _load_headers(path: str, logger: logging.Logger):
    """Read extra request headers from a JSON object file. Returns None on error."""
    try:
        with open(path, 'r') as f:
            headers = json.load(f)
    except FileNotFoundError:
        logger.error(f"Headers file not found: {path}")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in headers file: {e}")
        return None
    if not isinstance(headers, dict):
        logger.error("Headers file must contain a JSON object (dictionary)")
        return None
    logger.info(f"Loaded {len(headers)} custom headers from {path}")
    return headers


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Find the URL to a website's favicon")
    parser.add_argument("urls", nargs="*", help="Page URLs (e.g., https://www.r-project.org/about.html)")
    parser.add_argument("--strategies", type=str, nargs="+", default=list(DEFAULT_STRATEGY_NAMES), help="Strategies to try, in order (default: link ico)")
    parser.add_argument("--no-strategies", action="store_true", help="Skip all strategies and use the fallback directly")
    parser.add_argument("--fallback", type=str, default="duckduckgo", help="Icon service name, or any other string to use as a constant favicon URL (default: duckduckgo)")
    parser.add_argument("--method", type=str, default="GET", help="HTTP method for the favicon.ico probe (default: GET)")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--retries", type=int, default=DEFAULT_RETRIES, help=f"Connection retries (default: {DEFAULT_RETRIES})")
    parser.add_argument("--headers-file", type=str, help="Path to JSON file containing additional HTTP headers (e.g., User-Agent, Cookie)")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity level (default: WARNING)")
    parser.add_argument("--list-strategies", action="store_true", help="List available strategies and exit")
    parser.add_argument("--list-services", action="store_true", help="List available icon services and exit")
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, args.log_level),
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    if args.list_strategies:
        print("Available strategies:")
        for name in StrategyRegistry.get_all_names():
            print(f"  - {name}")
        return 0

    if args.list_services:
        print("Available icon services:")
        for service in ICON_SERVICES.values():
            print(f"  - {service.name}: {service.template}")
        return 0

    if not args.urls:
        parser.error("at least one URL is required unless using --list-strategies or --list-services")

    headers = {}
    if args.headers_file:
        headers = _load_headers(args.headers_file, logger)
        if headers is None:
            return 1

    config = ProbeConfig(method=args.method, headers=headers, timeout=args.timeout, retries=args.retries)
    fallback = get_fallback(args.fallback) if args.fallback in ICON_SERVICES else args.fallback

    try:
        chain = None if args.no_strategies else StrategyRegistry.instantiate(args.strategies, config)
        favicons = asyncio.run(resolve(args.urls, chain, fallback))
    except InvalidArgument as e:
        logger.error(str(e))
        return 2

    print(json.dumps([{"url": url, "favicon": favicon} for url, favicon in zip(args.urls, favicons)], indent=2))
    return 0

if __name__ == "__main__":
    sys.exit(main())
