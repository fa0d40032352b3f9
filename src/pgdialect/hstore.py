"""
Codec for the PostgreSQL hstore composite scalar.

An hstore value is a string-keyed map of optional strings kept in a single
column. A key mapped to None is an SQL NULL entry; a missing key is no entry.

Encoding and decoding of the literal text (`"k"=>"v","k2"=>NULL`) is done
by psycopg's hstore adapters so quoting and escaping follow the driver.
"""
import logging
from collections.abc import Mapping
from typing import Any

from psycopg.types.hstore import BaseHstoreDumper, HstoreLoader

logger = logging.getLogger(__name__)

__all__ = ['Hstore', 'to_storage', 'from_storage']

_dumper = BaseHstoreDumper(dict)
_loader = HstoreLoader(0)


class Hstore(dict[str, str | None]):
    """Nullable string map stored as an hstore column.
    """

    def value(self) -> str | None:
        """Return the storage form, None (SQL NULL) when empty."""
        return to_storage(self)

    def scan(self, raw: Any) -> None:
        """Load a raw driver value; empty values leave this map unchanged."""
        from_storage(raw, self)


def to_storage(value: Mapping[str, str | None]) -> str | None:
    """Encode a map as an hstore literal.

    An empty map encodes as None so the column stores SQL NULL rather than
    an empty hstore.
    """
    if not value:
        return None
    return bytes(_dumper.dump(dict(value))).decode()


def _parse(raw: Any) -> dict[str, str | None]:
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, str):
        raw = raw.encode()
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return _loader.load(raw)
    raise TypeError(f'Cannot read hstore from {type(raw).__name__}')


def from_storage(raw: Any, target: dict | None = None) -> dict:
    """Decode a raw driver value into `target`.

    A NULL or empty value leaves `target` exactly as it was. Otherwise the
    contents of `target` are replaced with the parsed entries. Parse errors
    from the driver (`psycopg.DataError`) propagate.

    Parameters
        raw: Literal text, bytes, or a dict already adapted by the driver
        target: Map to fill, a new Hstore when omitted

    Returns
        The target map
    """
    if target is None:
        target = Hstore()

    parsed = _parse(raw)
    if not parsed:
        return target

    target.clear()
    for key, value in parsed.items():
        target[key] = value
    logger.debug(f'Loaded hstore with {len(parsed)} entries')
    return target
