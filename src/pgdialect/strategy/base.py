"""
Base strategy interface for dialect operations.

Defines the abstract base class that every dialect implementation must inherit
from. The ORM layer holds one strategy per target engine and asks it for
column types, schema existence checks and bind variables, without knowing
which engine it talks to.
"""
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from pgdialect.exceptions import IntrospectionError, ProbeFailure
from pgdialect.sql import quote_identifier
from pgdialect.tags import field_from_tag
from pgdialect.types import Field, FieldKind, TypeInference
from pgdialect.utils import get_raw_connection

if TYPE_CHECKING:
    from pgdialect.options import DialectOptions

logger = logging.getLogger(__name__)

# Registry of dialect name -> strategy class
# Defined here to avoid circular imports (concrete strategies import from base)
_STRATEGY_REGISTRY: dict[str, type['DialectStrategy']] = {}

AUTO_INCREMENT = 'AUTO_INCREMENT'


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('postgres')
        class PostgresStrategy(DialectStrategy):
            ...
    """
    def decorator(cls: type['DialectStrategy']) -> type['DialectStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


class DialectStrategy(ABC):
    """Base class for dialect-specific operations.
    """

    def __init__(self, options: 'DialectOptions | None' = None) -> None:
        if options is None:
            from pgdialect.options import DialectOptions
            options = DialectOptions(drivername=self.dialect_name)
        self.options = options

    @contextmanager
    def _cursor(self, cn: Any, sql: str, params: tuple | None = None):
        """Context manager for cursor lifecycle.

        Handles cursor creation, SQL execution, and cleanup. The statement
        runs in its own transaction block (a savepoint when the caller already
        has one open) so a failing query does not abort the caller's work.
        """
        raw_conn = get_raw_connection(cn)
        with raw_conn.transaction():
            cursor = raw_conn.cursor()
            try:
                cursor.execute(sql, params or ())
                yield cursor
            finally:
                cursor.close()

    def _select_scalar_raw(self, cn: Any, sql: str, params: tuple | None = None) -> Any:
        """Execute SQL and return the first column of the first row, or None.
        """
        with self._cursor(cn, sql, params) as cursor:
            row = cursor.fetchone()
            return None if row is None else row[0]

    def _probe(self, cn: Any, sql: str, params: tuple, default: Any) -> Any:
        """Run a catalog probe.

        Driver errors leave the answer at `default` unless strict probes are
        enabled, in which case they surface as IntrospectionError.
        """
        try:
            value = self._select_scalar_raw(cn, sql, params)
        except ProbeFailure as e:
            if self.options.strict_probes:
                raise IntrospectionError(f'Catalog probe failed for {params}: {e}') from e
            logger.warning(f'Catalog probe failed for {params}, answering {default!r}: {e}')
            return default
        return default if value is None else value

    def field_from_tag(self, name: str, kind: FieldKind, tag: str | None = None,
                       type_name: str = '') -> Field:
        """Build a field descriptor from tag text using the configured default size.
        """
        return field_from_tag(name, kind, tag, type_name=type_name,
                              default_size=self.options.default_size)

    def data_type_of(self, field: Field) -> str:
        """Return the column type for a field and record its side effects.

        Runs `infer_type` and, when it reports an auto-increment column,
        stores the AUTO_INCREMENT marker in the field's tag settings.

        Args:
            field: Field descriptor

        Returns
            Column type string for DDL

        Raises
            UnresolvedTypeError: If no type matches the field
        """
        inferred = self.infer_type(field)
        if inferred.auto_increment:
            field.set_tag(AUTO_INCREMENT, AUTO_INCREMENT)
        return inferred.sql_type

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier (e.g., 'postgres')."""

    @abstractmethod
    def infer_type(self, field: Field) -> TypeInference:
        """Infer the column type for a field without modifying it.

        Args:
            field: Field descriptor

        Returns
            TypeInference with the type string and side effects to apply

        Raises
            UnresolvedTypeError: If no type matches the field
        """

    @abstractmethod
    def bind_var(self, position: int) -> str:
        """Return the placeholder token for a 1-based parameter position.

        Args:
            position: Parameter ordinal, starting at 1
        """

    @abstractmethod
    def has_index(self, cn: Any, table: str, index: str) -> bool:
        """Check whether an index exists on a table.

        Args:
            cn: Database connection object
            table: Table name
            index: Index name
        """

    @abstractmethod
    def has_foreign_key(self, cn: Any, table: str, constraint: str) -> bool:
        """Check whether a foreign key constraint exists on a table.

        Args:
            cn: Database connection object
            table: Table name
            constraint: Constraint name
        """

    @abstractmethod
    def has_table(self, cn: Any, table: str) -> bool:
        """Check whether a base table exists.

        Args:
            cn: Database connection object
            table: Table name
        """

    @abstractmethod
    def has_column(self, cn: Any, table: str, column: str) -> bool:
        """Check whether a column exists on a table.

        Args:
            cn: Database connection object
            table: Table name
            column: Column name
        """

    @abstractmethod
    def current_database(self, cn: Any) -> str:
        """Return the name of the database the connection is bound to.

        Args:
            cn: Database connection object
        """

    @abstractmethod
    def last_insert_id_returning_suffix(self, table: str, key: str) -> str:
        """Return the clause appended to INSERT to read back the generated key.
        """

    @abstractmethod
    def support_last_insert_id(self) -> bool:
        """Return whether the driver reports the last inserted id directly."""

    @abstractmethod
    def register_type_adapters(self, cn: Any) -> bool:
        """Register dialect-specific type adapters on a connection.

        Args:
            cn: Database connection to register adapters on

        Returns
            True if adapters were registered
        """

    @classmethod
    @abstractmethod
    def get_required_options(cls) -> list[str]:
        """Return list of option field names required to connect.

        Returns
            List of field names that must have non-None/non-zero values
        """

    @classmethod
    def validate_options(cls, options: 'DialectOptions') -> None:
        """Validate connection options for this dialect.

        Args:
            options: DialectOptions to validate

        Raises
            ValueError: If any required field is None or 0
        """
        for field in cls.get_required_options():
            if not getattr(options, field):
                raise ValueError(f'field {field} cannot be None or 0')

    def quote(self, identifier: str) -> str:
        """Quote a database identifier.

        Args:
            identifier: Database identifier to be quoted

        Returns
            str: Properly quoted identifier
        """
        return quote_identifier(identifier)
