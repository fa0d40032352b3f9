"""
PostgreSQL-specific strategy implementation.

This module implements the DialectStrategy interface for PostgreSQL:
- Column type inference from field descriptors (serial keys, varchar/text,
  hstore, bytea, uuid)
- Schema existence probes against pg_catalog and information_schema
- Ordinal bind variables ($1, $2, ...)
- RETURNING clauses in place of a last-insert-id call
"""
import logging
from typing import Any

from psycopg.types import TypeInfo
from psycopg.types.hstore import register_hstore

from pgdialect.exceptions import UnresolvedTypeError
from pgdialect.sql import bind_var
from pgdialect.strategy.base import AUTO_INCREMENT, DialectStrategy
from pgdialect.strategy.base import register_strategy
from pgdialect.types import Field, FieldKind, TypeInference
from pgdialect.utils import get_raw_connection

logger = logging.getLogger(__name__)

_SERIAL_KINDS = {
    FieldKind.INT8: ('serial', 'integer'),
    FieldKind.INT16: ('serial', 'integer'),
    FieldKind.INT32: ('serial', 'integer'),
    FieldKind.UINT8: ('serial', 'integer'),
    FieldKind.UINT16: ('serial', 'integer'),
    FieldKind.UINT32: ('serial', 'integer'),
    FieldKind.INT64: ('bigserial', 'bigint'),
    FieldKind.UINT64: ('bigserial', 'bigint'),
    }

_FIXED_KINDS = {
    FieldKind.BOOL: 'boolean',
    FieldKind.FLOAT32: 'numeric',
    FieldKind.FLOAT64: 'numeric',
    FieldKind.TIMESTAMP: 'timestamp with time zone',
    FieldKind.BYTES: 'bytea',
    }


@register_strategy('postgres')
class PostgresStrategy(DialectStrategy):
    """PostgreSQL-specific operations.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for PostgreSQL."""
        return 'postgres'

    @classmethod
    def get_required_options(cls) -> list[str]:
        """Return required options for PostgreSQL connections."""
        return ['hostname', 'username', 'database', 'port']

    def bind_var(self, position: int) -> str:
        """Return `$n` for parameter position n."""
        return bind_var(position)

    def infer_type(self, field: Field) -> TypeInference:
        """Infer the PostgreSQL column type for a field.

        An explicit SQL type on the field wins. Otherwise the kind decides,
        and integer primary keys (or fields already tagged AUTO_INCREMENT)
        become serial columns.
        """
        auto_increment = False
        sql_type = field.sql_type.strip()

        if not sql_type:
            if field.kind in _SERIAL_KINDS:
                serial, plain = _SERIAL_KINDS[field.kind]
                auto_increment = field.is_primary_key or field.has_tag(AUTO_INCREMENT)
                sql_type = serial if auto_increment else plain
            elif field.kind in _FIXED_KINDS:
                sql_type = _FIXED_KINDS[field.kind]
            elif field.kind is FieldKind.STRING:
                sql_type = self._string_type(field)
            elif field.kind is FieldKind.MAP:
                if field.type_name == self.options.composite_type_name:
                    sql_type = 'hstore'
            elif field.kind is FieldKind.BYTES16:
                if field.type_name.lower() in {'uuid', 'guid'}:
                    sql_type = 'uuid'

        if not sql_type:
            raise UnresolvedTypeError(field.type_name, str(field.kind), field.name)

        additional_type = field.additional_type.strip()
        if additional_type:
            sql_type = f'{sql_type} {additional_type}'

        logger.debug(f'Inferred {sql_type!r} for field {field.name} ({field.kind})')
        return TypeInference(sql_type, auto_increment)

    def _string_type(self, field: Field) -> str:
        """varchar(n) for an explicit SIZE tag within bounds, text otherwise.

        A size that did not come from a SIZE tag is ignored.
        """
        size = field.size if field.has_tag('SIZE') else None
        if size is not None and 0 < size < self.options.max_varchar_size:
            return f'varchar({size})'
        return 'text'

    def has_index(self, cn: Any, table: str, index: str) -> bool:
        """Check pg_indexes for an index on a table.
        """
        sql = """
select count(*)
from pg_indexes
where tablename = %s and indexname = %s
"""
        return self._probe(cn, sql, (table, index), 0) > 0

    def has_foreign_key(self, cn: Any, table: str, constraint: str) -> bool:
        """Check pg_constraint for a foreign key on a table.
        """
        sql = """
select count(con.conname)
from pg_constraint con
where %s::regclass::oid = con.conrelid
    and con.conname = %s
    and con.contype = 'f'
"""
        return self._probe(cn, sql, (table, constraint), 0) > 0

    def has_table(self, cn: Any, table: str) -> bool:
        """Check information_schema for a base table.
        """
        sql = """
select count(*)
from information_schema.tables
where table_name = %s
    and table_type = 'BASE TABLE'
"""
        return self._probe(cn, sql, (table,), 0) > 0

    def has_column(self, cn: Any, table: str, column: str) -> bool:
        """Check information_schema for a column on a table.
        """
        sql = """
select count(*)
from information_schema.columns
where table_name = %s
    and column_name = %s
"""
        return self._probe(cn, sql, (table, column), 0) > 0

    def current_database(self, cn: Any) -> str:
        """Return the connected database name, empty if it cannot be read.
        """
        return self._probe(cn, 'select current_database()', (), '')

    def last_insert_id_returning_suffix(self, table: str, key: str) -> str:
        """PostgreSQL reads generated keys back with RETURNING."""
        return f'RETURNING {table}.{key}'

    def support_last_insert_id(self) -> bool:
        return False

    def register_type_adapters(self, cn: Any) -> bool:
        """Register psycopg's hstore adapters when the extension is installed.

        Afterwards hstore columns load as dicts, which `hstore.from_storage`
        accepts as they are.
        """
        raw_conn = get_raw_connection(cn)
        info = TypeInfo.fetch(raw_conn, 'hstore')
        if info is None:
            logger.info('hstore extension not installed, skipping adapter registration')
            return False
        register_hstore(info, raw_conn)
        logger.debug(f'Registered hstore adapters (oid {info.oid})')
        return True
