"""Named registration of the built-in favicon strategies."""
import logging
from typing import Dict, Type, List, Optional, Sequence

from core.exceptions import InvalidArgument
from models.probe_config import ProbeConfig

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Registry mapping short names ("link", "ico") to strategy classes."""

    _strategies: Dict[str, Type] = {}
    _order: List[str] = []  # Preserve registration order

    @classmethod
    def register(cls, name: str):
        """Decorator to register a strategy class.

        The class is instantiated with a ProbeConfig and must be callable as
        ``strategy(scheme, server, path)``.

        Example:
            @StrategyRegistry.register("ico")
            class FaviconIcoStrategy:
                def __init__(self, config: ProbeConfig):
                    self.config = config

                async def __call__(self, scheme, server, path) -> LookupResult:
                    ...
        """
        def decorator(strategy_class: Type):
            if name in cls._strategies:
                logger.warning(f"Strategy '{name}' already registered, overwriting")
            else:
                cls._order.append(name)

            cls._strategies[name] = strategy_class
            logger.debug(f"Registered strategy: {name} -> {strategy_class.__name__}")
            return strategy_class
        return decorator

    @classmethod
    def get_all_names(cls) -> List[str]:
        """Get names of all registered strategies in registration order."""
        return cls._order.copy()

    @classmethod
    def get_strategy_class(cls, name: str) -> Optional[Type]:
        return cls._strategies.get(name)

    @classmethod
    def instantiate(cls, names: Sequence[str], config: Optional[ProbeConfig] = None) -> List[object]:
        """Instantiate strategies in the order given by ``names``.

        Raises:
            InvalidArgument: if a name is not registered
        """
        config = config or ProbeConfig()
        unknown = [name for name in names if name not in cls._strategies]
        if unknown:
            raise InvalidArgument(
                f"Unknown strategies: {', '.join(unknown)} "
                f"(available: {', '.join(cls._order)})"
            )

        instances = []
        for name in names:
            instances.append(cls._strategies[name](config))
            logger.debug(f"Instantiated strategy: {name}")
        return instances

    @classmethod
    def clear(cls):
        """Clear all registered strategies (useful for testing)."""
        cls._strategies.clear()
        cls._order.clear()


DEFAULT_STRATEGY_NAMES = ("link", "ico")


def default_strategies(config: Optional[ProbeConfig] = None) -> List[object]:
    """The default chain: <link> tag discovery, then the /favicon.ico probe."""
    # Import built-ins to trigger @StrategyRegistry.register decorators
    import strategies.link_tag  # noqa: F401
    import strategies.favicon_ico  # noqa: F401

    return StrategyRegistry.instantiate(DEFAULT_STRATEGY_NAMES, config)
