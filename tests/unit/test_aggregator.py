from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from rental_reports.domain.classifier import TimeOfDay
from rental_reports.domain.errors import ConstraintViolationError
from rental_reports.domain.models import DetailRecord
from rental_reports.pipeline.aggregator import append_detail, apply_to_summary, verify_summary
from rental_reports.stores.in_memory import InMemoryReportStore


def _detail(rental_id: int, hour: int, rate: str, minute: int = 0) -> DetailRecord:
    rental_date = datetime(2005, 5, 30, hour, minute)
    return DetailRecord(
        rental_id=rental_id,
        film_id=rental_id * 10,
        title=f"Film {rental_id}",
        category="Drama",
        rating="PG",
        rental_date=rental_date,
        time_of_day={9: TimeOfDay.MORNING, 13: TimeOfDay.AFTERNOON, 18: TimeOfDay.EVENING}[hour],
        rental_rate=Decimal(rate),
    )


def _summary(store: InMemoryReportStore):
    return [(row.time_of_day.value, row.total_rentals, row.total_revenue) for row in store.summary()]


def test_first_rental_creates_bucket_row(store: InMemoryReportStore):
    apply_to_summary(store, _detail(1, 13, "4.99"))

    assert _summary(store) == [("Afternoon", 1, Decimal("4.99"))]


def test_example_day_then_fourth_morning_rental(store: InMemoryReportStore):
    for record in (_detail(1, 9, "2.99"), _detail(2, 13, "4.99"), _detail(3, 18, "0.99")):
        append_detail(store, record)

    assert _summary(store) == [
        ("Morning", 1, Decimal("2.99")),
        ("Afternoon", 1, Decimal("4.99")),
        ("Evening", 1, Decimal("0.99")),
    ]

    append_detail(store, _detail(4, 9, "1.99", minute=30))

    assert _summary(store)[0] == ("Morning", 2, Decimal("4.98"))
    assert len(store.summary()) == 3


def test_summary_matches_details_after_every_insert(store: InMemoryReportStore):
    records = [_detail(i, hour, rate) for i, (hour, rate) in enumerate(
        [(9, "0.99"), (9, "2.99"), (18, "4.99"), (13, "0.99"), (18, "2.99"), (9, "4.99")], start=1
    )]

    for record in records:
        append_detail(store, record)
        assert verify_summary(store) == []

    assert sum(row.total_rentals for row in store.summary()) == len(records)
    assert sum(row.total_revenue for row in store.summary()) == Decimal("17.94")


def test_duplicate_rental_leaves_both_tables_unchanged(store: InMemoryReportStore):
    append_detail(store, _detail(1, 9, "2.99"))

    with pytest.raises(ConstraintViolationError):
        append_detail(store, _detail(1, 18, "0.99"))

    assert [r.rental_id for r in store.details()] == [1]
    assert _summary(store) == [("Morning", 1, Decimal("2.99"))]


def test_verify_summary_reports_drift(store: InMemoryReportStore):
    append_detail(store, _detail(1, 9, "2.99"))
    store.upsert_summary(TimeOfDay.MORNING, Decimal("1.00"))
    store.upsert_summary(TimeOfDay.EVENING, Decimal("0.99"))

    problems = verify_summary(store)

    assert len(problems) == 2
    assert problems[0].startswith("Morning:")
    assert problems[1].startswith("Evening:")


def test_verify_summary_reports_missing_bucket(store: InMemoryReportStore):
    store.insert_detail(_detail(1, 13, "4.99"))

    assert verify_summary(store) == ["Afternoon: missing summary row, expected 1 / 4.99"]


def test_label_must_match_rental_date(store: InMemoryReportStore):
    with pytest.raises(ValidationError, match="does not match rental_date"):
        DetailRecord(
            rental_id=1,
            film_id=10,
            title="Film 1",
            category="Drama",
            rating="PG",
            rental_date=datetime(2005, 5, 30, 9, 0),
            time_of_day=TimeOfDay.EVENING,
            rental_rate=Decimal("2.99"),
        )

    assert store.details() == []
    assert store.summary() == []
