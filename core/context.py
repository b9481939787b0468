from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class ParsedURL:
    scheme: str
    server: str # Authority, e.g. "www.r-project.org" or "localhost:8080"
    path: str # Starts with "/" or is empty


def decompose(url: str) -> ParsedURL:
    """Split a URL into scheme, server and path.

    Query strings and fragments are dropped. Malformed URLs are not rejected;
    whatever urlsplit() yields (possibly empty fields) is passed on.
    """
    parts = urlsplit(url)
    return ParsedURL(scheme=parts.scheme, server=parts.netloc, path=parts.path)
