"""
Connection helpers built on SQLAlchemy.

The dialect does not manage connections; the ORM layer hands it one. These
helpers turn DialectOptions into a SQLAlchemy URL and engine for callers
that only hold options (and for the integration tests).
"""
import logging
from collections.abc import Callable

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

from pgdialect.options import DialectOptions
from pgdialect.strategy import get_strategy_class

__all__ = ['create_url_from_options', 'get_engine']

logger = logging.getLogger(__name__)


def create_url_from_options(options: DialectOptions,
                            url_creator: Callable[..., sa.URL] = sa.URL.create) -> sa.URL:
    """Convert DialectOptions to SQLAlchemy URL.

    Raises
        ValueError: If a required connection option is missing
    """
    get_strategy_class(options.drivername).validate_options(options)

    query = {}
    if options.timeout:
        query['connect_timeout'] = str(options.timeout)

    return url_creator(
        drivername='postgresql+psycopg',
        username=options.username,
        password=options.password,
        host=options.hostname,
        port=options.port,
        database=options.database,
        query=query
    )


def get_engine(options: DialectOptions) -> Engine:
    """Create an engine without pooling for the given options.
    """
    url = create_url_from_options(options)
    logger.debug(f'Creating engine for {url.render_as_string(hide_password=True)}')
    return sa.create_engine(url, poolclass=NullPool)
