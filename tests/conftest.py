"""
Pytest configuration for the rental reports job.

Provides fixtures for:
- An in-memory upstream dataset around 2005-05-30
- In-memory report stores
- Database connection management for integration tests
"""

from __future__ import annotations

import os
from datetime import datetime
from decimal import Decimal
from typing import Generator

import psycopg
import pytest

from rental_reports.config import Settings
from rental_reports.domain.models import Category, Film, FilmCategory, InventoryItem, Rental
from rental_reports.infrastructure.schema import create_report_tables, drop_legacy_trigger
from rental_reports.sources.in_memory import InMemoryRentalSource
from rental_reports.stores.in_memory import InMemoryReportStore

REPORT_DAY = datetime(2005, 5, 30, 23, 59, 59)


def make_source() -> InMemoryRentalSource:
    """
    Three films in three categories; three rentals on 2005-05-30 at 09:00,
    13:00 and 18:00, plus one rental the day before and one the day after.
    """
    return InMemoryRentalSource(
        rentals=[
            Rental(rental_id=1, inventory_id=10, rental_date=datetime(2005, 5, 30, 9, 0)),
            Rental(rental_id=2, inventory_id=20, rental_date=datetime(2005, 5, 30, 13, 0)),
            Rental(rental_id=3, inventory_id=30, rental_date=datetime(2005, 5, 30, 18, 0)),
            Rental(rental_id=4, inventory_id=10, rental_date=datetime(2005, 5, 29, 10, 0)),
            Rental(rental_id=5, inventory_id=20, rental_date=datetime(2005, 5, 31, 0, 0)),
        ],
        inventory=[
            InventoryItem(inventory_id=10, film_id=100),
            InventoryItem(inventory_id=20, film_id=200),
            InventoryItem(inventory_id=30, film_id=300),
            InventoryItem(inventory_id=40, film_id=400),
        ],
        films=[
            Film(film_id=100, title="Academy Dinosaur", rating="PG", rental_rate=Decimal("2.99")),
            Film(film_id=200, title="Ace Goldfinger", rating="G", rental_rate=Decimal("4.99")),
            Film(film_id=300, title="Adaptation Holes", rating="NC-17", rental_rate=Decimal("0.99")),
            Film(film_id=400, title="Affair Prejudice", rating="G", rental_rate=Decimal("1.99")),
        ],
        film_categories=[
            FilmCategory(film_id=100, category_id=6),
            FilmCategory(film_id=200, category_id=11),
            FilmCategory(film_id=300, category_id=6),
            FilmCategory(film_id=400, category_id=5),
        ],
        categories=[
            Category(category_id=5, name="Comedy"),
            Category(category_id=6, name="Documentary"),
            Category(category_id=11, name="Horror"),
        ],
    )


@pytest.fixture
def source() -> InMemoryRentalSource:
    return make_source()


@pytest.fixture
def store() -> InMemoryReportStore:
    return InMemoryReportStore()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "rental_reports_test"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def seeded_db(db_connection: psycopg.Connection, test_dsn: str) -> psycopg.Connection:
    """
    Empty report tables plus upstream tables holding the `make_source()` rows.
    """
    from scripts.generate_data import _copy_into_db

    with db_connection.cursor() as cur:
        cur.execute(
            "DROP TABLE IF EXISTS rental, inventory, film_category, film, category, "
            "detail_report, summary_report CASCADE;"
        )
    _copy_into_db(test_dsn, make_source())
    create_report_tables(db_connection)
    drop_legacy_trigger(db_connection)
    return db_connection
