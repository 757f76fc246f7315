"""PostgreSQL async connection pool for the grant store."""

from psycopg_pool import AsyncConnectionPool

from grantwise.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Create the grant store pool from settings.

    Pool is created with open=False. Caller must await pool.open() before
    the first check and await pool.close() on shutdown. Connections are
    verified on checkout since the sweeper can sit idle for long intervals.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        name="grantwise",
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
