"""
PostgreSQL report store backed by `detail_report` and `summary_report`.

The summary upsert is a single `INSERT ... ON CONFLICT DO UPDATE` statement,
so the count and revenue of a bucket always change together. Transactions use
psycopg's `Connection.transaction()`; nested blocks become savepoints.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Generator, List, Optional

import psycopg
from psycopg import errors
from psycopg.rows import class_row

from rental_reports.domain.classifier import TimeOfDay
from rental_reports.domain.errors import ConstraintViolationError
from rental_reports.domain.models import DetailRecord, SummaryRecord
from rental_reports.infrastructure.db_factory import apply_statement_timeout
from rental_reports.stores.abstract import AbstractReportStore, clock_order

TRUNCATE_SUMMARY_SQL = "TRUNCATE TABLE summary_report RESTART IDENTITY;"
TRUNCATE_DETAIL_SQL = "TRUNCATE TABLE detail_report RESTART IDENTITY;"

INSERT_DETAIL_SQL = """
INSERT INTO detail_report (
    rental_id, film_id, title, category, rating, rental_date, time_of_day, rental_rate
)
VALUES (
    %(rental_id)s, %(film_id)s, %(title)s, %(category)s, %(rating)s,
    %(rental_date)s, %(time_of_day)s, %(rental_rate)s
);
"""

UPSERT_SUMMARY_SQL = """
INSERT INTO summary_report (time_of_day, total_rentals, total_revenue)
VALUES (%(time_of_day)s, 1, %(rental_rate)s)
ON CONFLICT (time_of_day) DO UPDATE SET
    total_rentals = summary_report.total_rentals + 1,
    total_revenue = summary_report.total_revenue + EXCLUDED.total_revenue;
"""

SELECT_DETAILS_SQL = """
SELECT rental_id, film_id, title, category, rating, rental_date, time_of_day, rental_rate
FROM detail_report;
"""

SELECT_SUMMARY_SQL = "SELECT time_of_day, total_rentals, total_revenue FROM summary_report;"


class PostgresReportStore(AbstractReportStore):
    """
    Report tables accessed over an existing psycopg connection.

    Parameters
    ----------
    conn : psycopg.Connection
        Connection in autocommit mode, so that `transaction()` maps to an
        explicit BEGIN/COMMIT rather than a savepoint inside an implicit
        transaction.
    statement_timeout_ms : int | None
        Applied with `SET LOCAL` when the outermost transaction opens.
    """

    name: str = "postgres"

    def __init__(self, conn: psycopg.Connection, statement_timeout_ms: Optional[int] = None) -> None:
        self._conn = conn
        self._statement_timeout_ms = statement_timeout_ms
        self._depth = 0

    @contextmanager
    def transaction(self) -> Generator["PostgresReportStore", None, None]:
        with self._conn.transaction():
            if self._depth == 0 and self._statement_timeout_ms:
                with self._conn.cursor() as cur:
                    apply_statement_timeout(cur, self._statement_timeout_ms)
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1

    def _execute(self, query: str, params: Optional[dict] = None) -> None:
        with self._conn.cursor() as cur:
            cur.execute(query, params)

    def clear_summary(self) -> None:
        self._execute(TRUNCATE_SUMMARY_SQL)

    def clear_details(self) -> None:
        self._execute(TRUNCATE_DETAIL_SQL)

    def insert_detail(self, record: DetailRecord) -> None:
        params = record.model_dump()
        params["time_of_day"] = record.time_of_day.value
        try:
            self._execute(INSERT_DETAIL_SQL, params)
        except errors.UniqueViolation as exc:
            raise ConstraintViolationError(
                f"duplicate key: detail_report already has rental_id {record.rental_id}"
            ) from exc
        except psycopg.DataError as exc:
            raise ConstraintViolationError(
                f"rental {record.rental_id} does not fit detail_report: {exc}"
            ) from exc

    def upsert_summary(self, time_of_day: TimeOfDay, rental_rate: Decimal) -> None:
        self._execute(
            UPSERT_SUMMARY_SQL, {"time_of_day": time_of_day.value, "rental_rate": rental_rate}
        )

    def details(self) -> List[DetailRecord]:
        with self._conn.cursor(row_factory=class_row(DetailRecord)) as cur:
            cur.execute(SELECT_DETAILS_SQL)
            return cur.fetchall()

    def summary(self) -> List[SummaryRecord]:
        with self._conn.cursor(row_factory=class_row(SummaryRecord)) as cur:
            cur.execute(SELECT_SUMMARY_SQL)
            return clock_order(cur.fetchall())


__all__ = ["PostgresReportStore"]
