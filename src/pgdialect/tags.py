"""
Field tag parsing.

ORM field declarations carry option text such as
`"size:64;not null;default:'n/a'"`. This module turns that text into tag
settings and derives the size, explicit type and type suffix that the type
inference engine consumes.
"""
import logging

from pgdialect.exceptions import TagParseError
from pgdialect.types import Field, FieldKind

logger = logging.getLogger(__name__)

__all__ = ['parse_tag_settings', 'field_from_tag']

DEFAULT_SIZE = 255


def parse_tag_settings(tag: str | None) -> dict[str, str]:
    """Parse `name[:value]` entries separated by semicolons.

    Names are upper-cased. An entry without a value maps to its own name,
    so `not null` becomes `{'NOT NULL': 'NOT NULL'}`. Values keep everything
    after the first colon.
    """
    settings = {}
    for entry in (tag or '').split(';'):
        if not entry.strip():
            continue
        name, sep, value = entry.partition(':')
        name = name.strip().upper()
        if not name:
            raise TagParseError(f'Tag entry without a name: {entry!r}')
        settings[name] = value.strip() if sep else name
    return settings


def _parse_size(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise TagParseError(f'SIZE must be an integer, got {value!r}') from e


def _additional_type(settings: dict[str, str]) -> str:
    parts = [settings.get('NOT NULL', ''), settings.get('UNIQUE', '')]
    if 'DEFAULT' in settings:
        parts.append(f"DEFAULT {settings['DEFAULT']}")
    return ' '.join(part for part in parts if part)


def field_from_tag(name: str, kind: FieldKind, tag: str | None = None,
                   type_name: str = '', default_size: int = DEFAULT_SIZE) -> Field:
    """Build a descriptor from a field's kind and its tag text.

    Fields without a SIZE tag still get `default_size`; the string rule of
    the inference engine ignores it unless the tag was given.
    """
    settings = parse_tag_settings(tag)
    if 'SIZE' in settings:
        size = _parse_size(settings['SIZE'])
    else:
        size = default_size

    field = Field(
        name=name,
        kind=kind,
        is_primary_key='PRIMARY_KEY' in settings,
        size=size,
        tag_settings=settings,
        additional_type=_additional_type(settings),
        type_name=type_name,
        sql_type=settings.get('TYPE', ''),
        )
    logger.debug(f'Parsed tag for {name}: {settings}')
    return field
