"""
Integration tests for the Postgres source and store.

These tests run against a real PostgreSQL instance and verify that:
1. A refresh builds both report tables from the upstream tables
2. The summary upsert and explicit aggregation agree with the detail rows
3. A failing refresh rolls back to the previous report

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os
from datetime import datetime
from decimal import Decimal

import psycopg
import pytest

from rental_reports.domain.errors import ConstraintViolationError, JoinResolutionError
from rental_reports.domain.window import ReportWindow
from rental_reports.orchestrator import generate_reports
from rental_reports.pipeline.aggregator import append_detail, verify_summary
from rental_reports.pipeline.extractor import extract_details
from rental_reports.sources.postgres import PostgresRentalSource
from rental_reports.stores.postgres import PostgresReportStore

END_OF_DAY = datetime(2005, 5, 30, 23, 59, 59)

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


def _summary(store: PostgresReportStore):
    return [(r.time_of_day.value, r.total_rentals, r.total_revenue) for r in store.summary()]


def test_source_applies_day_window_in_sql(seeded_db: psycopg.Connection):
    source = PostgresRentalSource(seeded_db)

    day = {r.rental_id for r in source.rentals(ReportWindow.for_day(END_OF_DAY))}
    mid_day = {r.rental_id for r in source.rentals(ReportWindow.for_day(datetime(2005, 5, 30, 13)))}
    span = {
        r.rental_id
        for r in source.rentals(ReportWindow.between(datetime(2005, 5, 29), datetime(2005, 5, 31)))
    }

    assert day == {1, 2, 3}
    assert mid_day == {1, 2}
    assert span == {1, 2, 3, 4, 5}


def test_refresh_builds_reports(seeded_db: psycopg.Connection):
    store = PostgresReportStore(seeded_db)

    result = generate_reports(END_OF_DAY, source=PostgresRentalSource(seeded_db), store=store)

    assert result["rows"] == 3
    assert _summary(store) == [
        ("Morning", 1, Decimal("2.99")),
        ("Afternoon", 1, Decimal("4.99")),
        ("Evening", 1, Decimal("0.99")),
    ]
    assert verify_summary(store) == []


def test_refresh_twice_gives_same_tables(seeded_db: psycopg.Connection):
    source, store = PostgresRentalSource(seeded_db), PostgresReportStore(seeded_db)

    generate_reports(END_OF_DAY, source=source, store=store)
    first = (sorted(r.rental_id for r in store.details()), _summary(store))
    generate_reports(END_OF_DAY, source=source, store=store)

    assert (sorted(r.rental_id for r in store.details()), _summary(store)) == first


def test_incremental_append_updates_summary(seeded_db: psycopg.Connection):
    source, store = PostgresRentalSource(seeded_db), PostgresReportStore(seeded_db)
    generate_reports(END_OF_DAY, source=source, store=store)
    with seeded_db.cursor() as cur:
        cur.execute(
            "INSERT INTO rental (rental_id, rental_date, inventory_id) "
            "VALUES (6, '2005-05-30 09:30:00', 40);"
        )

    window = ReportWindow.between(datetime(2005, 5, 30, 9, 30), datetime(2005, 5, 30, 9, 30))
    (record,) = list(extract_details(source, window))
    append_detail(store, record)

    assert _summary(store)[0] == ("Morning", 2, Decimal("4.98"))
    with pytest.raises(ConstraintViolationError):
        append_detail(store, record)
    assert _summary(store)[0] == ("Morning", 2, Decimal("4.98"))


def test_failed_refresh_rolls_back(seeded_db: psycopg.Connection):
    source, store = PostgresRentalSource(seeded_db), PostgresReportStore(seeded_db)
    generate_reports(END_OF_DAY, source=source, store=store)
    before = _summary(store)

    with seeded_db.cursor() as cur:
        cur.execute("INSERT INTO film_category (film_id, category_id) VALUES (300, 11);")
    with pytest.raises(JoinResolutionError):
        generate_reports(END_OF_DAY, source=source, store=store)

    assert _summary(store) == before
    assert len(store.details()) == 3
