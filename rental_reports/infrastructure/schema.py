"""
DDL for the two tables owned by the rental reports job.

`detail_report` holds one denormalized row per rental in the reporting window;
`summary_report` holds one row per time-of-day bucket. Both are created with
IF NOT EXISTS so `init-schema` can be re-run safely.

Older deployments maintained `summary_report` through an AFTER INSERT trigger
(`add_to_summary` calling `update_summary()`). The aggregator now updates the
summary explicitly on every insert, so the trigger must be gone or every
rental would be counted twice.
"""

from __future__ import annotations

import psycopg

from rental_reports.utils.logging import get_logger

log = get_logger(__name__)

DETAIL_TABLE = "detail_report"
SUMMARY_TABLE = "summary_report"

CREATE_DETAIL_TABLE = """
CREATE TABLE IF NOT EXISTS detail_report (
    rental_id INT PRIMARY KEY,
    film_id INT,
    title VARCHAR(40),
    category VARCHAR(40),
    rating VARCHAR(10),
    rental_date TIMESTAMP,
    time_of_day VARCHAR(10),
    rental_rate NUMERIC
);
"""

CREATE_SUMMARY_TABLE = """
CREATE TABLE IF NOT EXISTS summary_report (
    time_of_day VARCHAR(10) PRIMARY KEY,
    total_rentals INT,
    total_revenue NUMERIC
);
"""

DROP_LEGACY_TRIGGER = "DROP TRIGGER IF EXISTS add_to_summary ON detail_report;"
DROP_LEGACY_FUNCTION = "DROP FUNCTION IF EXISTS update_summary();"


def create_report_tables(conn: psycopg.Connection) -> None:
    """Create `detail_report` and `summary_report` if missing."""
    with conn.transaction():
        with conn.cursor() as cur:
            cur.execute(CREATE_DETAIL_TABLE)
            cur.execute(CREATE_SUMMARY_TABLE)
    log.info("Report tables ensured", extra={"tables": [DETAIL_TABLE, SUMMARY_TABLE]})


def drop_legacy_trigger(conn: psycopg.Connection) -> None:
    """Remove the trigger-based summary maintenance, if installed."""
    with conn.transaction():
        with conn.cursor() as cur:
            cur.execute(DROP_LEGACY_TRIGGER)
            cur.execute(DROP_LEGACY_FUNCTION)
    log.info("Legacy summary trigger removed (if present)")


__all__ = [
    "DETAIL_TABLE",
    "SUMMARY_TABLE",
    "create_report_tables",
    "drop_legacy_trigger",
]
