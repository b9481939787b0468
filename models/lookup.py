from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a single strategy: Found(url) or NOT_FOUND."""
    url: str = ""

    @property
    def found(self) -> bool:
        return bool(self.url)

    def __bool__(self) -> bool:
        return self.found


NOT_FOUND = LookupResult()


def found(url: str) -> LookupResult:
    return LookupResult(url=url) if url else NOT_FOUND


def as_result(value: Any) -> LookupResult:
    """Normalize a strategy return value.

    Raises TypeError for values that are neither a LookupResult, a string nor None.
    """
    if isinstance(value, LookupResult):
        return value
    if value is None:
        return NOT_FOUND
    if isinstance(value, str):
        return found(value)
    raise TypeError(f"Strategy returned {type(value).__name__}, expected str or LookupResult")
