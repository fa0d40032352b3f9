import pathlib
import site

import pytest
from pgdialect.strategy import _get_strategy

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def clear_strategies():
    """Drop cached strategy instances before and after each test."""
    _get_strategy.cache_clear()
    yield
    _get_strategy.cache_clear()


pytest_plugins = [
    'tests.fixtures.mocks',
    'tests.fixtures.values',
    'tests.fixtures.postgres',
]
