"""
Tests for bind variables and identifier quoting.
"""
import pgdialect.sql
import pytest
from pgdialect import get_strategy
from pgdialect.sql import bind_var, make_placeholders
from pgdialect.sql import quote_identifier


class TestBindVar:
    """Ordinal placeholder tokens."""

    @pytest.mark.parametrize(('position', 'expected'), [
        (1, '$1'),
        (3, '$3'),
        (12, '$12'),
    ])
    def test_bind_var(self, position, expected):
        assert bind_var(position) == expected

    def test_strategy_bind_var(self):
        assert get_strategy('postgres').bind_var(12) == '$12'


class TestMakePlaceholders:
    """Comma separated runs of bind variables."""

    def test_default_start(self):
        assert make_placeholders(3) == '$1, $2, $3'

    def test_offset_start(self):
        assert make_placeholders(2, start=4) == '$4, $5'

    def test_zero(self):
        assert make_placeholders(0) == ''

    def test_statement_text_untouched(self):
        """Only the generated tokens are ordinals; jsonb and dollar quoting survive."""
        sql = f"select $$what?$$ from t where data ? 'k' and id in ({make_placeholders(2)})"
        assert sql == "select $$what?$$ from t where data ? 'k' and id in ($1, $2)"
        assert not hasattr(pgdialect.sql, 'number_placeholders')


class TestQuoteIdentifier:
    """Identifier quoting."""

    @pytest.mark.parametrize(('identifier', 'expected'), [
        ('my_table', '"my_table"'),
        ('user', '"user"'),
        ('table"with"quotes', '"table""with""quotes"'),
    ], ids=['basic', 'reserved', 'quotes'])
    def test_quote_identifier(self, identifier, expected):
        assert quote_identifier(identifier) == expected

    def test_strategy_quote(self):
        assert get_strategy().quote('Order') == '"Order"'


if __name__ == '__main__':
    __import__('pytest').main([__file__])
