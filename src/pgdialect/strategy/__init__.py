"""
Dialect strategy factory.
"""
from functools import lru_cache
from typing import TYPE_CHECKING

from pgdialect.exceptions import UnsupportedDialectError
from pgdialect.strategy.base import _STRATEGY_REGISTRY
from pgdialect.strategy.base import DialectStrategy as DialectStrategy
from pgdialect.strategy.base import register_strategy as register_strategy
from pgdialect.strategy.postgres import PostgresStrategy as PostgresStrategy
from pgdialect.utils import get_dialect_name

if TYPE_CHECKING:
    from pgdialect.options import DialectOptions


def _validate_dialect(dialect: str) -> None:
    """Raise UnsupportedDialectError if dialect is not registered."""
    if dialect not in _STRATEGY_REGISTRY:
        available = list(_STRATEGY_REGISTRY.keys())
        raise UnsupportedDialectError(f'Unsupported dialect: {dialect}. Available: {available}')


@lru_cache(maxsize=8)
def _get_strategy(dialect: str) -> DialectStrategy:
    """Get cached strategy instance for a dialect."""
    _validate_dialect(dialect)
    return _STRATEGY_REGISTRY[dialect]()


def get_strategy(dialect: str = 'postgres',
                 options: 'DialectOptions | None' = None) -> DialectStrategy:
    """Get strategy instance for a dialect name.

    Without options a shared default instance is returned; with options a
    new strategy configured by them.
    """
    if options is None:
        return _get_strategy(dialect)
    _validate_dialect(dialect)
    return _STRATEGY_REGISTRY[dialect](options)


def get_db_strategy(cn) -> DialectStrategy:
    """Get dialect strategy for the connection."""
    dialect = get_dialect_name(cn)
    return _get_strategy(dialect)


def get_available_dialects() -> list[str]:
    """Return list of registered dialect names."""
    return list(_STRATEGY_REGISTRY.keys())


def is_supported_dialect(dialect: str) -> bool:
    """Check if a dialect is supported."""
    return dialect in _STRATEGY_REGISTRY


def get_strategy_class(dialect: str) -> type['DialectStrategy']:
    """Get the strategy class for a dialect without instantiating."""
    _validate_dialect(dialect)
    return _STRATEGY_REGISTRY[dialect]
