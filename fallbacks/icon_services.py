"""Fallbacks that point at third-party favicon services.

Each builder takes a server name and formats a URL; nothing is downloaded.
"""
from typing import Callable, Dict

from core.exceptions import InvalidArgument
from rules.rules_loader import load_icon_services

ICON_SERVICES = load_icon_services()


def duckduckgo(server: str) -> str:
    """DuckDuckGo's public favicon service.

    https://duckduckgo.com/duckduckgo-help-pages/privacy/favicons/
    """
    return ICON_SERVICES["duckduckgo"].url_for(server)


def google(server: str) -> str:
    return ICON_SERVICES["google"].url_for(server)


def yandex(server: str) -> str:
    return ICON_SERVICES["yandex"].url_for(server)


def allesedv(server: str) -> str:
    return ICON_SERVICES["allesedv"].url_for(server)


BUILTIN_FALLBACKS: Dict[str, Callable[[str], str]] = {
    "duckduckgo": duckduckgo,
    "google": google,
    "yandex": yandex,
    "allesedv": allesedv,
}


def get_fallback(name: str) -> Callable[[str], str]:
    """Look up a fallback builder by service name.

    Services added to the YAML table without a named builder get one here.
    """
    if name in BUILTIN_FALLBACKS:
        return BUILTIN_FALLBACKS[name]
    if name in ICON_SERVICES:
        service = ICON_SERVICES[name]
        return lambda server: service.url_for(server)
    raise InvalidArgument(f"Unknown icon service '{name}' (available: {', '.join(sorted(ICON_SERVICES))})")
