"""
Database connection factory utilities for the rental reports job.

The job runs once per business day and does all of its work on a single
connection, so connections are opened directly rather than through a pool.

Includes retry logic for transient connection failures using tenacity. Only
connection acquisition is retried; a refresh that fails mid-way is rolled
back and surfaced to the caller.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection, sql
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from rental_reports.config import Settings, get_settings
from rental_reports.utils.logging import get_logger

log = get_logger(__name__)

CONNECT_ATTEMPTS = 3


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def apply_statement_timeout(cur: psycopg.Cursor, timeout_ms: int) -> None:
    """
    Cap statement runtime for the current transaction.

    `SET LOCAL` is scoped to the enclosing transaction, so the timeout does not
    outlive the refresh it was set for.
    """
    if timeout_ms <= 0:
        return
    cur.execute(
        sql.SQL("SET LOCAL statement_timeout = {}").format(sql.Literal(int(timeout_ms)))
    )


def _log_retry(retry_state) -> None:
    log.warning(
        "Database connection failed, retrying",
        extra={
            "attempt": retry_state.attempt_number,
            "error": str(retry_state.outcome.exception()),
        },
    )


@retry(
    stop=stop_after_attempt(CONNECT_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    before_sleep=_log_retry,
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Parameters
    ----------
    dsn : str | None
        Optional DSN override; defaults to the configured database.

    Returns
    -------
    Connection
        A new psycopg connection instance in autocommit mode; use
        `conn.transaction()` for explicit transactional blocks.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn(), autocommit=True)


__all__ = [
    "CONNECT_ATTEMPTS",
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
]
