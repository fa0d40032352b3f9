import pgdialect
import psycopg
import pytest
from pgdialect import IntrospectionError, get_db_strategy

pytestmark = pytest.mark.postgres


def test_has_table(conn):
    """Test base table detection"""
    assert pgdialect.has_table(conn, 'test_customers')
    assert pgdialect.has_table(conn, 'test_orders')
    assert not pgdialect.has_table(conn, 'test_missing')


def test_view_is_not_a_table(conn):
    """Views are excluded from table checks"""
    assert not pgdialect.has_table(conn, 'test_customer_names')


def test_has_column(conn):
    assert pgdialect.has_column(conn, 'test_customers', 'attrs')
    assert pgdialect.has_column(conn, 'test_orders', 'customer_id')
    assert not pgdialect.has_column(conn, 'test_customers', 'customer_id')
    assert not pgdialect.has_column(conn, 'test_missing', 'id')


def test_has_index(conn):
    assert pgdialect.has_index(conn, 'test_customers', 'idx_customers_name')
    assert pgdialect.has_index(conn, 'test_customers', 'test_customers_pkey')
    assert not pgdialect.has_index(conn, 'test_orders', 'idx_customers_name')


def test_has_foreign_key(conn):
    assert pgdialect.has_foreign_key(conn, 'test_orders', 'fk_orders_customer')
    assert not pgdialect.has_foreign_key(conn, 'test_customers', 'fk_orders_customer')
    assert not pgdialect.has_foreign_key(conn, 'test_orders', 'fk_missing')


def test_has_foreign_key_missing_table(conn):
    """A missing table answers False and the connection stays usable"""
    assert not pgdialect.has_foreign_key(conn, 'test_missing', 'fk_orders_customer')
    assert conn.execute('select 1').fetchone()[0] == 1
    assert pgdialect.has_table(conn, 'test_customers')


def test_failed_probe_inside_transaction(conn):
    """A failed probe rolls back only itself, not the caller's transaction"""
    with conn.transaction():
        conn.execute("insert into test_customers (name) values ('before')")
        assert not pgdialect.has_foreign_key(conn, 'test_missing', 'fk')
        conn.execute("insert into test_customers (name) values ('after')")

    count = conn.execute('select count(*) from test_customers').fetchone()[0]
    assert count == 2


def test_strict_probe_raises(conn, strict_strategy):
    with pytest.raises(IntrospectionError) as excinfo:
        strict_strategy.has_foreign_key(conn, 'test_missing', 'fk')
    assert isinstance(excinfo.value.__cause__, psycopg.errors.UndefinedTable)
    assert strict_strategy.has_table(conn, 'test_customers')


def test_probes_see_ddl_changes(conn):
    """Answers reflect the catalog at call time"""
    assert not pgdialect.has_column(conn, 'test_customers', 'email')
    conn.execute('alter table test_customers add column email text')
    assert pgdialect.has_column(conn, 'test_customers', 'email')


def test_current_database(conn):
    assert pgdialect.current_database(conn) == 'test_db'


def test_sqlalchemy_connection(conn, engine):
    """Probes accept SQLAlchemy connections"""
    with engine.connect() as sa_connection:
        strategy = get_db_strategy(sa_connection)
        assert strategy.dialect_name == 'postgres'
        assert strategy.has_table(sa_connection, 'test_customers')
        assert strategy.current_database(sa_connection) == 'test_db'


if __name__ == '__main__':
    __import__('pytest').main([__file__])
