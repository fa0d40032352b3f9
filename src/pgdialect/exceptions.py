"""
Dialect-specific exception classes.
"""
import psycopg
import sqlalchemy as sa


class DialectError(Exception):
    """Base class for all dialect module errors.
    """


class UnresolvedTypeError(DialectError):
    """No column type could be inferred for a field.
    """

    def __init__(self, type_name: str, kind: str, field_name: str | None = None) -> None:
        self.type_name = type_name
        self.kind = kind
        self.field_name = field_name
        super().__init__(f'invalid sql type {type_name} ({kind}) for postgres')


class IntrospectionError(DialectError):
    """Catalog probe failed (raised only when strict probes are enabled).
    """


class TagParseError(DialectError, ValueError):
    """Malformed field tag setting.
    """


class UnsupportedDialectError(DialectError, ValueError):
    """Dialect name is not registered.
    """


# Driver errors that probes downgrade to a negative answer
ProbeFailure = (
    psycopg.Error,
    sa.exc.SQLAlchemyError,
    )
