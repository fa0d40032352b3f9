"""
PostgreSQL dialect adapter for ORM layers.

All dialect operations can be called either as:
- Module functions: pgdialect.has_table(cn, 'users')
- Strategy methods: get_strategy('postgres').has_table(cn, 'users')

The module functions are facades over the default PostgreSQL strategy.
"""
__version__ = '0.1.0'

from typing import Any

from pgdialect.exceptions import DialectError, IntrospectionError
from pgdialect.exceptions import TagParseError, UnresolvedTypeError
from pgdialect.exceptions import UnsupportedDialectError
from pgdialect.hstore import Hstore, from_storage, to_storage
from pgdialect.options import DialectOptions
from pgdialect.sql import bind_var, make_placeholders
from pgdialect.sql import quote_identifier
from pgdialect.strategy import DialectStrategy, PostgresStrategy
from pgdialect.strategy import get_db_strategy, get_strategy
from pgdialect.tags import field_from_tag, parse_tag_settings
from pgdialect.types import Field, FieldKind, TypeInference, fields_from_frame
from pgdialect.types import kind_from_dtype, kind_of


def data_type_of(field: Field) -> str:
    """Return the PostgreSQL column type for a field.

    Records AUTO_INCREMENT in the field's tag settings for serial columns.
    """
    return get_strategy().data_type_of(field)


def infer_type(field: Field) -> TypeInference:
    """Infer the PostgreSQL column type for a field without modifying it.
    """
    return get_strategy().infer_type(field)


def has_index(cn: Any, table: str, index: str) -> bool:
    """Check whether an index exists on a table.
    """
    return get_strategy().has_index(cn, table, index)


def has_foreign_key(cn: Any, table: str, constraint: str) -> bool:
    """Check whether a foreign key exists on a table.
    """
    return get_strategy().has_foreign_key(cn, table, constraint)


def has_table(cn: Any, table: str) -> bool:
    """Check whether a base table exists.
    """
    return get_strategy().has_table(cn, table)


def has_column(cn: Any, table: str, column: str) -> bool:
    """Check whether a column exists on a table.
    """
    return get_strategy().has_column(cn, table, column)


def current_database(cn: Any) -> str:
    """Return the name of the database the connection is bound to.
    """
    return get_strategy().current_database(cn)


__all__ = [
    'DialectOptions',
    'DialectStrategy',
    'PostgresStrategy',
    'get_strategy',
    'get_db_strategy',
    'Field',
    'FieldKind',
    'TypeInference',
    'kind_of',
    'kind_from_dtype',
    'fields_from_frame',
    'parse_tag_settings',
    'field_from_tag',
    'data_type_of',
    'infer_type',
    'has_index',
    'has_foreign_key',
    'has_table',
    'has_column',
    'current_database',
    'bind_var',
    'make_placeholders',
    'quote_identifier',
    'Hstore',
    'to_storage',
    'from_storage',
    'DialectError',
    'UnresolvedTypeError',
    'IntrospectionError',
    'TagParseError',
    'UnsupportedDialectError',
]
