"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

Queries are written with PostgreSQL's positional ``$1, $2, ...`` markers;
``run_query`` translates them into psycopg2's ``%s`` paramstyle before
executing.
"""

import re
from typing import Any, Sequence

import psycopg2
from psycopg2 import pool, extras
from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None

_MARKER_RE = re.compile(r"\$(\d+)")


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


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


def bind_positional(sql: str, params: Sequence[Any] = ()) -> tuple[str, list]:
    """
    Rewrite ``$n`` markers into psycopg2's ``%s`` form.

    The returned value list follows the order in which markers occur in the
    text, so ``"... $2 ... $1"`` with ``[a, b]`` becomes ``[b, a]`` and a
    marker used twice binds its value twice. Literal ``%`` characters are
    doubled so psycopg2 does not read them as placeholders.

    Raises:
        ValueError: If a marker refers to a parameter that was not supplied.
    """
    params = list(params)
    bound: list = []

    def _replace(match: re.Match) -> str:
        index = int(match.group(1))
        if not 1 <= index <= len(params):
            raise ValueError(
                f"Placeholder ${index} has no matching parameter ({len(params)} supplied)"
            )
        bound.append(params[index - 1])
        return "%s"

    statement = _MARKER_RE.sub(_replace, sql.replace("%", "%%"))
    return statement, bound


def run_query(sql: str, params: Sequence[Any] = ()) -> list[dict]:
    """
    Execute one statement in its own transaction.

    Args:
        sql: Statement text using ``$n`` markers.
        params: Values for the markers, ``params[0]`` being ``$1``.

    Returns:
        The result rows as dicts keyed by column (or alias) name; an empty
        list for statements that return nothing.
    """
    statement, values = bind_positional(sql, params)
    conn = get_connection()
    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(statement, values)
            rows = cur.fetchall() if cur.description is not None else []
        conn.commit()
        return [dict(row) for row in rows]
    except Exception as e:
        conn.rollback()
        logger.error(f"Query failed: {e}")
        raise
    finally:
        release_connection(conn)
