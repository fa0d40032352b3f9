"""Low-level connection utilities with no internal dependencies.

These utilities work with any connection type the probes accept (SQLAlchemy
connections, pool proxies, raw psycopg connections) and import nothing from
other pgdialect modules, making them safe to import anywhere.
"""
from typing import Any

import psycopg
import sqlalchemy as sa

_DIALECT_ALIASES = {
    'postgres': 'postgres',
    'postgresql': 'postgres',
    }


def normalize_dialect_name(name: str) -> str:
    """Map a dialect alias such as 'postgresql' to its registry name."""
    return _DIALECT_ALIASES.get(name.lower(), name.lower())


def get_dialect_name(obj: Any) -> str:
    """Get dialect name for a database connection or engine.
    """
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        name = dialect if isinstance(dialect, str) else str(dialect.name)
        return normalize_dialect_name(name)

    if hasattr(obj, 'engine') and hasattr(obj.engine, 'dialect'):
        return get_dialect_name(obj.engine)

    if isinstance(obj, psycopg.Connection):
        return 'postgres'

    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def get_raw_connection(connection: Any) -> Any:
    """Extract the raw DBAPI connection from a wrapper."""
    raw_conn = connection
    if isinstance(raw_conn, sa.engine.Connection):
        raw_conn = raw_conn.connection
    for attr in ('dbapi_connection', 'driver_connection'):
        inner = getattr(raw_conn, attr, None)
        if inner is not None:
            return inner
    return raw_conn
