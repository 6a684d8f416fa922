"""
Strategy Factory Module - Registry of Tetonor search strategies.

Strategies register themselves on import with @register_strategy; the
CLI and runner look them up by name.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Type

from .base import SolverStrategy


# Global registry of strategies
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}

DEFAULT_STRATEGY = "backtrack"


@dataclass(frozen=True)
class StrategyInfo:
    """Listing entry for a registered strategy."""
    name: str
    description: str
    is_default: bool

    def __str__(self) -> str:
        marker = " (default)" if self.is_default else ""
        return f"{self.name}{marker}: {self.description}"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class under its `name`.

    Re-registering the same class is a no-op, so reloading a strategy
    module is safe.

    Raises:
        ValueError: If another class already holds the name
    """
    existing = _STRATEGIES.get(cls.name)
    if existing is not None and existing.__qualname__ != cls.__qualname__:
        raise ValueError(f"Strategy name '{cls.name}' already registered "
                         f"by {existing.__qualname__}")
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name (e.g., "backtrack")
        **kwargs: Passed to the strategy constructor

    Raises:
        ValueError: If strategy name not found
    """
    if name not in _STRATEGIES:
        available = ", ".join(sorted(_STRATEGIES))
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return _STRATEGIES[name](**kwargs)


def get_strategy_names() -> List[str]:
    """List registered strategy names."""
    return sorted(_STRATEGIES)


def get_strategy_info() -> List[StrategyInfo]:
    """Describe every registered strategy, default first."""
    default = get_default_strategy_name()
    infos = [
        StrategyInfo(name=cls.name, description=cls.description, is_default=cls.name == default)
        for cls in _STRATEGIES.values()
    ]
    return sorted(infos, key=lambda info: (not info.is_default, info.name))


def get_default_strategy_name() -> str:
    """
    Get the default strategy name.

    Returns:
        "backtrack" if available, else first registered, else ""
    """
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    return next(iter(_STRATEGIES), "")
