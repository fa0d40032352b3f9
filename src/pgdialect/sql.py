"""
Bind variables and identifier quoting for PostgreSQL statement text.

PostgreSQL addresses parameters by ordinal (`$1`, `$2`, ...). The ORM layer
asks for these tokens when compiling statements:

- `bind_var(i)` - the token for the i-th parameter (1-based)
- `make_placeholders(n)` - a comma separated run of tokens
- `quote_identifier()` - quote table/column names
"""


def bind_var(position: int) -> str:
    """Return the placeholder token for a 1-based parameter position.
    """
    return f'${position}'


def make_placeholders(count: int, start: int = 1) -> str:
    """Build `count` comma separated bind variables beginning at `start`.

    >>> make_placeholders(3)
    '$1, $2, $3'
    """
    return ', '.join(bind_var(i) for i in range(start, start + count))


def quote_identifier(identifier: str) -> str:
    """Safely quote a database identifier.

    Parameters
        identifier: Table or column name

    Returns
        Quoted identifier
    """
    return '"' + identifier.replace('"', '""') + '"'
