import pytest
from pgdialect.options import DialectOptions


def test_init_defaults():
    """Test default initialization"""
    options = DialectOptions()

    assert options.drivername == 'postgres'
    assert options.hostname is None
    assert options.port == 0
    assert options.default_size == 255
    assert options.max_varchar_size == 65532
    assert options.composite_type_name == 'Hstore'
    assert options.strict_probes is False


def test_connection_options():
    """Test connection settings are stored as given"""
    options = DialectOptions(
        hostname='testhost',
        username='testuser',
        password='testpass',
        database='testdb',
        port=1234,
        timeout=30,
        strict_probes=True,
    )

    assert options.hostname == 'testhost'
    assert options.database == 'testdb'
    assert options.port == 1234
    assert options.timeout == 30
    assert options.strict_probes is True


def test_validation():
    """Test validation rules"""
    with pytest.raises(ValueError, match='drivername must be one of'):
        DialectOptions(drivername='invalid')

    with pytest.raises(ValueError, match='default_size'):
        DialectOptions(default_size=0)

    with pytest.raises(ValueError, match='max_varchar_size'):
        DialectOptions(max_varchar_size=1)


@pytest.mark.parametrize('drivername', ['postgresql', 'PostgreSQL', 'postgres'])
def test_drivername_aliases(drivername):
    """Aliases accepted for connections are accepted for options too"""
    options = DialectOptions(drivername=drivername)
    assert options.drivername == 'postgres'


def test_options_do_not_require_connection_settings():
    """Type inference needs no connection, so none is demanded here"""
    options = DialectOptions(max_varchar_size=100)
    assert options.hostname is None


if __name__ == '__main__':
    __import__('pytest').main([__file__])
