"""
Async engine construction for PostgreSQL (asyncpg) and SQLite (aiosqlite).
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from ..exceptions import DatabaseConfigException
from ..utils.config import ConfigError, DatabaseURLValidator

logger = logging.getLogger(__name__)

ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


class DatabaseConfig:
    """
    A validated database URL.

    Attributes:
        database_url: URL as configured
        backend: ``postgresql`` or ``sqlite``
    """

    def __init__(self, database_url: str):
        """
        Raises:
            DatabaseConfigException: If the URL is not usable
        """
        self.database_url = database_url
        try:
            self.backend = DatabaseURLValidator.validate_url(database_url)["backend"]
        except ConfigError as e:
            raise DatabaseConfigException(
                f"Invalid database URL: {e}",
                config_key="database_url",
            )

    @property
    def is_sqlite(self) -> bool:
        return self.backend == "sqlite"

    def get_async_url(self) -> str:
        """Return the URL with a bare ``postgresql``/``sqlite`` scheme mapped to its async driver."""
        for sync_scheme, async_scheme in ASYNC_DRIVERS.items():
            prefix = f"{sync_scheme}://"
            if self.database_url.startswith(prefix):
                return self.database_url.replace(prefix, f"{async_scheme}://", 1)
        return self.database_url


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: int = 30,
    pool_recycle: int = 3600,
    echo: bool = False,
    use_null_pool: bool = False,
    connect_args: Optional[dict] = None,
) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    PostgreSQL engines get a pre-pinged ``AsyncAdaptedQueuePool`` sized from
    the arguments. SQLite engines keep SQLAlchemy's default pool and switch
    on foreign key enforcement for every new connection.

    Args:
        database_url: PostgreSQL or SQLite URL (sync schemes are accepted)
        pool_size: Connections kept open in the pool
        max_overflow: Extra connections allowed beyond ``pool_size``
        pool_timeout: Seconds to wait for a pooled connection
        pool_recycle: Seconds after which a connection is replaced
        echo: Log every SQL statement
        use_null_pool: Open a fresh connection per checkout (tests)
        connect_args: Passed through to the DBAPI ``connect()``

    Returns:
        Configured async engine

    Raises:
        DatabaseConfigException: If the URL is invalid
    """
    config = DatabaseConfig(database_url)
    async_url = config.get_async_url()

    engine_kwargs: Dict[str, Any] = {"echo": echo}
    if connect_args:
        engine_kwargs["connect_args"] = connect_args

    if use_null_pool:
        engine_kwargs["poolclass"] = NullPool
    elif not config.is_sqlite:
        engine_kwargs.update(
            poolclass=AsyncAdaptedQueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
            pool_pre_ping=True,
        )

    engine = create_async_engine(async_url, **engine_kwargs)

    if config.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    parsed = urlparse(async_url)
    logger.info(
        f"Created {config.backend} engine for {parsed.hostname or parsed.path or 'memory'}"
    )
    return engine
