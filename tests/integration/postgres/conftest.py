"""
Fixtures for PostgreSQL-specific integration tests.
"""
import pytest
from pgdialect import DialectOptions
from pgdialect.strategy import PostgresStrategy


@pytest.fixture
def strategy():
    """Strategy with default options."""
    return PostgresStrategy()


@pytest.fixture
def strict_strategy():
    """Strategy that raises on failed catalog probes."""
    return PostgresStrategy(DialectOptions(strict_probes=True))
