"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and the per-operation transaction scope.
Uses psycopg2's ThreadedConnectionPool so that concurrent callers never share
a connection.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX,
              dsn: str = DATABASE_URL) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: libpq connection string; defaults to ``config.DATABASE_URL``.

    Raises:
        PersistenceError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise PersistenceError("Unable to initialize connection pool", e) from e


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        PersistenceError: If the pool has not been initialized or is exhausted.
    """
    if _pool is None:
        raise PersistenceError("Database pool not initialized. Call init_pool() first.")
    try:
        return _pool.getconn()
    except psycopg2.Error as e:
        logger.error(f"Failed to acquire connection: {e}")
        raise PersistenceError("Unable to acquire connection", e) from e


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except Exception as e:
        logger.error(f"Rollback failed: {e}")


@contextmanager
def transaction() -> Iterator:
    """
    Run a block of statements inside a single transaction.

    psycopg2 opens the transaction implicitly on the first statement.
    The block's connection is committed when it exits normally, rolled back
    on any exception, and always released back to the pool.

    Yields:
        The psycopg2 connection owning the transaction.

    Raises:
        PersistenceError: Wrapping whatever failed inside the block or on commit.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except PersistenceError:
        _rollback(conn)
        raise
    except Exception as e:
        _rollback(conn)
        raise PersistenceError("Transaction rolled back", e) from e
    finally:
        release_connection(conn)
