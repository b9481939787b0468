import inspect
from dataclasses import dataclass
from typing import Callable, Union

from core.exceptions import InvalidArgument


@dataclass(frozen=True)
class ConstantFallback:
    """The same URL for every input."""
    url: str

    def apply(self, server: str) -> str:
        return self.url


@dataclass(frozen=True)
class ComputedFallback:
    """A total function mapping a server name to a favicon URL."""
    func: Callable[[str], str]

    def apply(self, server: str) -> str:
        return self.func(server)


Fallback = Union[ConstantFallback, ComputedFallback]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _takes_one_argument(func: Callable) -> bool:
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False
    return len(params) == 1 and params[0].kind in _POSITIONAL


def make_fallback(value) -> Fallback:
    """Resolve a fallback argument into one of the two variants.

    Args:
        value: A ConstantFallback/ComputedFallback, a single string, or a
            callable accepting exactly one argument (the server name)

    Raises:
        InvalidArgument: for any other shape
    """
    if isinstance(value, (ConstantFallback, ComputedFallback)):
        return value
    if isinstance(value, str):
        return ConstantFallback(value)
    if callable(value) and _takes_one_argument(value):
        return ComputedFallback(value)
    raise InvalidArgument(
        "The argument `fallback` must be a function with one argument or a single string"
    )
