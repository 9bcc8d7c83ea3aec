"""
Summary maintenance: every detail insert updates its time-of-day bucket.

`append_detail` is the only write path into the detail table. It inserts the
row and, inside the same transaction, calls `apply_to_summary`, so the
summary matches the detail table after every single insert rather than only
at the end of a batch. There is no database trigger involved.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Tuple

from rental_reports.domain.classifier import TimeOfDay
from rental_reports.domain.models import DetailRecord
from rental_reports.stores.abstract import ReportStore
from rental_reports.utils.logging import get_logger

log = get_logger(__name__)


def apply_to_summary(store: ReportStore, record: DetailRecord) -> None:
    """Add one rental and its rate to the record's bucket (atomic upsert)."""
    store.upsert_summary(record.time_of_day, record.rental_rate)


def append_detail(store: ReportStore, record: DetailRecord) -> None:
    """
    Insert a detail row and fold it into the summary.

    If either step fails, neither is kept.
    """
    with store.transaction():
        store.insert_detail(record)
        apply_to_summary(store, record)
    log.debug(
        "Detail appended",
        extra={"rental_id": record.rental_id, "time_of_day": record.time_of_day.value},
    )


def verify_summary(store: ReportStore) -> List[str]:
    """
    Recompute the summary from the detail table and compare with the store.

    Returns
    -------
    list[str]
        One message per mismatching bucket; empty when the summary is consistent.
    """
    with store.transaction():
        details = store.details()
        stored = {row.time_of_day: row for row in store.summary()}

    expected: Dict[TimeOfDay, Tuple[int, Decimal]] = defaultdict(lambda: (0, Decimal("0")))
    for record in details:
        count, revenue = expected[record.time_of_day]
        expected[record.time_of_day] = (count + 1, revenue + record.rental_rate)

    problems: List[str] = []
    for label in TimeOfDay:
        want = expected.get(label)
        have = stored.get(label)
        if want is None and have is None:
            continue
        if have is None:
            problems.append(f"{label.value}: missing summary row, expected {want[0]} / {want[1]}")
        elif want is None:
            problems.append(
                f"{label.value}: summary row {have.total_rentals} / {have.total_revenue} "
                "has no detail rows"
            )
        elif (have.total_rentals, have.total_revenue) != want:
            problems.append(
                f"{label.value}: summary {have.total_rentals} / {have.total_revenue}, "
                f"details {want[0]} / {want[1]}"
            )
    return problems


__all__ = ["append_detail", "apply_to_summary", "verify_summary"]
