"""
In-memory report store.

Both tables live in dicts guarded by one re-entrant lock. A transaction holds
the lock for its whole duration and snapshots both dicts on entry; if the
block raises, the snapshot is restored. Rows are frozen models, so a shallow
copy is a full snapshot.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from decimal import Decimal
from typing import Dict, Generator, List

from rental_reports.domain.classifier import TimeOfDay
from rental_reports.domain.errors import ConstraintViolationError
from rental_reports.domain.models import DetailRecord, SummaryRecord
from rental_reports.stores.abstract import AbstractReportStore, clock_order


class InMemoryReportStore(AbstractReportStore):
    """Thread-safe dict-backed store with snapshot rollback."""

    name: str = "in_memory"

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._details: Dict[int, DetailRecord] = {}
        self._summary: Dict[TimeOfDay, SummaryRecord] = {}

    @contextmanager
    def transaction(self) -> Generator["InMemoryReportStore", None, None]:
        with self._lock:
            details, summary = dict(self._details), dict(self._summary)
            try:
                yield self
            except BaseException:
                self._details, self._summary = details, summary
                raise

    def clear_summary(self) -> None:
        with self._lock:
            self._summary.clear()

    def clear_details(self) -> None:
        with self._lock:
            self._details.clear()

    def insert_detail(self, record: DetailRecord) -> None:
        with self._lock:
            if record.rental_id in self._details:
                raise ConstraintViolationError(
                    f"duplicate key: detail_report already has rental_id {record.rental_id}"
                )
            self._details[record.rental_id] = record

    def upsert_summary(self, time_of_day: TimeOfDay, rental_rate: Decimal) -> None:
        with self._lock:
            current = self._summary.get(time_of_day)
            if current is None:
                row = SummaryRecord(
                    time_of_day=time_of_day, total_rentals=1, total_revenue=rental_rate
                )
            else:
                row = SummaryRecord(
                    time_of_day=time_of_day,
                    total_rentals=current.total_rentals + 1,
                    total_revenue=current.total_revenue + rental_rate,
                )
            self._summary[time_of_day] = row

    def details(self) -> List[DetailRecord]:
        with self._lock:
            return list(self._details.values())

    def summary(self) -> List[SummaryRecord]:
        with self._lock:
            return clock_order(list(self._summary.values()))


__all__ = ["InMemoryReportStore"]
