import pytest
from pgdialect import Hstore, from_storage

pytestmark = pytest.mark.postgres


def insert_customer(conn, name, attrs):
    row = conn.execute(
        'insert into test_customers (name, attrs) values (%s, %s::hstore) returning id',
        (name, attrs.value()),
    ).fetchone()
    return row[0]


def select_attrs(conn, customer_id):
    row = conn.execute('select attrs from test_customers where id = %s', (customer_id,)).fetchone()
    return row[0]


def test_round_trip_as_text(conn):
    """Without adapters the driver returns hstore text"""
    attrs = Hstore({'color': 'red', 'size': None, 'note': 'a "quoted" => value'})
    customer_id = insert_customer(conn, 'alice', attrs)

    raw = select_attrs(conn, customer_id)
    assert isinstance(raw, str)
    assert from_storage(raw) == attrs


def test_empty_map_stored_as_null(conn):
    customer_id = insert_customer(conn, 'bob', Hstore())
    assert select_attrs(conn, customer_id) is None

    target = Hstore(keep='me')
    from_storage(None, target)
    assert target == {'keep': 'me'}


def test_round_trip_with_adapters(conn, strategy):
    """Registered adapters load dicts, which decode as they are"""
    assert strategy.register_type_adapters(conn) is True

    attrs = Hstore(tier='gold', since=None)
    customer_id = insert_customer(conn, 'carol', attrs)

    raw = select_attrs(conn, customer_id)
    assert isinstance(raw, dict)
    target = Hstore()
    target.scan(raw)
    assert target == attrs


if __name__ == '__main__':
    __import__('pytest').main([__file__])
