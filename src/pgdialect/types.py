"""
Field descriptors handed to the type inference engine.

A descriptor's kind is decided once, when the descriptor is built, from a
sample value or a numpy/pandas dtype. The inference engine only ever looks at
the kind and never inspects values itself.
"""
import datetime
import decimal
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

__all__ = [
    'FieldKind',
    'Field',
    'TypeInference',
    'kind_of',
    'kind_from_dtype',
    'fields_from_frame',
    'is_byte_array_or_slice',
    'is_fixed_16_bytes',
    'is_uuid',
    ]


class FieldKind(Enum):
    """Primitive value shapes a mapped field can have."""
    BOOL = 'bool'
    INT8 = 'int8'
    INT16 = 'int16'
    INT32 = 'int32'
    INT64 = 'int64'
    UINT8 = 'uint8'
    UINT16 = 'uint16'
    UINT32 = 'uint32'
    UINT64 = 'uint64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    STRING = 'string'
    TIMESTAMP = 'timestamp'
    MAP = 'map'
    BYTES = 'bytes'
    BYTES16 = 'bytes16'     # fixed 16-byte array
    OTHER = 'other'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Field:
    """Metadata about one mapped attribute.

    Only `tag_settings` changes after construction, and only when the caller
    records an inference side effect such as AUTO_INCREMENT.
    """
    name: str
    kind: FieldKind
    is_primary_key: bool = False
    size: int | None = None
    tag_settings: dict[str, str] = field(default_factory=dict, hash=False)
    additional_type: str = ''
    type_name: str = ''
    sql_type: str = ''

    @classmethod
    def from_value(cls, name: str, value: Any, **kwargs: Any) -> 'Field':
        """Build a descriptor whose kind is detected from a sample value.
        """
        kwargs.setdefault('type_name', type(value).__name__)
        return cls(name=name, kind=kind_of(value), **kwargs)

    def has_tag(self, name: str) -> bool:
        """Check for a tag setting, ignoring case of the option name."""
        name = name.upper()
        return any(key.upper() == name for key in self.tag_settings)

    def set_tag(self, name: str, value: str) -> None:
        """Store a tag setting, reusing the spelling of an existing key."""
        for key in self.tag_settings:
            if key.upper() == name.upper():
                name = key
                break
        self.tag_settings[name] = value


class TypeInference(NamedTuple):
    """Result of type inference.

    `auto_increment` tells the caller to record AUTO_INCREMENT on the field.
    """
    sql_type: str
    auto_increment: bool = False


def is_byte_array_or_slice(value: Any) -> bool:
    """Check whether a value is a sequence of unsigned 8-bit elements.
    """
    if isinstance(value, (bytes, bytearray)):
        return True
    if isinstance(value, memoryview):
        return value.format in {'B', 'c'} and value.ndim == 1
    if isinstance(value, np.ndarray):
        return value.dtype == np.uint8 and value.ndim == 1
    return False


def is_fixed_16_bytes(value: Any) -> bool:
    """Check whether a value wraps exactly 16 raw bytes (`uuid.UUID` and friends).
    """
    raw = getattr(value, 'bytes', None)
    return isinstance(raw, bytes) and len(raw) == 16


def is_uuid(value: Any) -> bool:
    """Check whether a value is a 16-byte array whose type is named uuid or guid.
    """
    if not is_fixed_16_bytes(value):
        return False
    return type(value).__name__.lower() in {'uuid', 'guid'}


_DTYPE_KINDS = {
    ('b', 1): FieldKind.BOOL,
    ('i', 1): FieldKind.INT8,
    ('i', 2): FieldKind.INT16,
    ('i', 4): FieldKind.INT32,
    ('i', 8): FieldKind.INT64,
    ('u', 1): FieldKind.UINT8,
    ('u', 2): FieldKind.UINT16,
    ('u', 4): FieldKind.UINT32,
    ('u', 8): FieldKind.UINT64,
    ('f', 2): FieldKind.FLOAT32,
    ('f', 4): FieldKind.FLOAT32,
    ('f', 8): FieldKind.FLOAT64,
    }

_DTYPE_CHAR_KINDS = {
    'M': FieldKind.TIMESTAMP,
    'U': FieldKind.STRING,
    'S': FieldKind.BYTES,
    }


def kind_from_dtype(dtype: Any) -> FieldKind:
    """Map a numpy or pandas dtype to a field kind.

    Object dtypes carry no shape information and map to OTHER; callers
    resolve those from the values themselves.
    """
    if isinstance(dtype, pd.DatetimeTZDtype):
        return FieldKind.TIMESTAMP
    if isinstance(dtype, pd.StringDtype):
        return FieldKind.STRING
    if isinstance(dtype, pd.api.extensions.ExtensionDtype):
        dtype = getattr(dtype, 'numpy_dtype', None)
        if dtype is None:
            return FieldKind.OTHER

    dtype = np.dtype(dtype)
    kind = _DTYPE_KINDS.get((dtype.kind, dtype.itemsize))
    if kind is None:
        kind = _DTYPE_CHAR_KINDS.get(dtype.kind, FieldKind.OTHER)
    return kind


def kind_of(value: Any) -> FieldKind:
    """Detect the field kind of a sample value.

    A plain Python int maps to the default integer width (INT32); use a
    numpy scalar or dtype to pick another width.
    """
    if isinstance(value, bool):
        return FieldKind.BOOL
    if isinstance(value, np.generic):
        return kind_from_dtype(value.dtype)
    if isinstance(value, int):
        return FieldKind.INT32
    if isinstance(value, (float, decimal.Decimal)):
        return FieldKind.FLOAT64
    if isinstance(value, str):
        return FieldKind.STRING
    if isinstance(value, datetime.datetime):
        return FieldKind.TIMESTAMP
    if isinstance(value, Mapping):
        return FieldKind.MAP
    if is_byte_array_or_slice(value):
        return FieldKind.BYTES
    if is_fixed_16_bytes(value):
        return FieldKind.BYTES16
    return FieldKind.OTHER


def _first_valid(series: pd.Series) -> Any:
    index = series.first_valid_index()
    return None if index is None else series.loc[index]


def fields_from_frame(df: pd.DataFrame,
                      primary_key: str | list[str] | None = None) -> list[Field]:
    """Build one descriptor per DataFrame column.

    Typed columns use their dtype; object columns are resolved from their
    first non-null value.
    """
    if isinstance(primary_key, str):
        primary_key = [primary_key]
    primary_key = set(primary_key or [])

    fields = []
    for name in df.columns:
        dtype = df[name].dtype
        if dtype == object:
            value = _first_valid(df[name])
            kind = FieldKind.OTHER if value is None else kind_of(value)
            type_name = type(value).__name__
        else:
            kind = kind_from_dtype(dtype)
            type_name = str(dtype)
        logger.debug(f'Column {name} ({type_name}) resolved to kind {kind}')
        fields.append(Field(name=str(name), kind=kind, type_name=type_name,
                            is_primary_key=name in primary_key))
    return fields
