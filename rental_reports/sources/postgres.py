"""
PostgreSQL rental source reading the dvdrental schema.

Each lookup is a single `= ANY(%s)` query over the keys the extractor asks
for; rows are materialized straight into the domain models with psycopg's
`class_row` factory.
"""

from __future__ import annotations

from typing import Collection, List, Sequence, Type, TypeVar

import psycopg
from psycopg.rows import class_row

from rental_reports.domain.models import Category, Film, FilmCategory, InventoryItem, Rental
from rental_reports.domain.window import ReportWindow
from rental_reports.sources.abstract import AbstractRentalSource
from rental_reports.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

RENTALS_FOR_DAY_SQL = """
SELECT rental_id, inventory_id, rental_date
FROM rental
WHERE rental_date::date = %(day)s
  AND rental_date <= %(end)s;
"""

RENTALS_FOR_RANGE_SQL = """
SELECT rental_id, inventory_id, rental_date
FROM rental
WHERE rental_date >= %(start)s
  AND rental_date <= %(end)s;
"""

INVENTORY_SQL = "SELECT inventory_id, film_id FROM inventory WHERE inventory_id = ANY(%s);"
FILMS_SQL = (
    "SELECT film_id, title, rating::text AS rating, rental_rate "
    "FROM film WHERE film_id = ANY(%s);"
)
FILM_CATEGORIES_SQL = "SELECT film_id, category_id FROM film_category WHERE film_id = ANY(%s);"
CATEGORIES_SQL = "SELECT category_id, name FROM category WHERE category_id = ANY(%s);"


class PostgresRentalSource(AbstractRentalSource):
    """
    Reads upstream relations over an existing psycopg connection.

    The connection is shared with the report store during a refresh so that
    reads and writes happen inside the same transaction.
    """

    name: str = "postgres"

    def __init__(self, conn: psycopg.Connection) -> None:
        self._conn = conn

    def _fetch(self, model: Type[T], query: str, params: object) -> List[T]:
        with self._conn.cursor(row_factory=class_row(model)) as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def _lookup(self, model: Type[T], query: str, keys: Collection[int]) -> List[T]:
        if not keys:
            return []
        key_list: Sequence[int] = sorted(set(keys))
        return self._fetch(model, query, (list(key_list),))

    def rentals(self, window: ReportWindow) -> List[Rental]:
        if window.is_day:
            rows = self._fetch(Rental, RENTALS_FOR_DAY_SQL, {"day": window.day, "end": window.end})
        else:
            rows = self._fetch(
                Rental, RENTALS_FOR_RANGE_SQL, {"start": window.start, "end": window.end}
            )
        log.debug("Fetched rentals", extra={"window": window.describe(), "rows": len(rows)})
        return rows

    def inventory_items(self, inventory_ids: Collection[int]) -> List[InventoryItem]:
        return self._lookup(InventoryItem, INVENTORY_SQL, inventory_ids)

    def films(self, film_ids: Collection[int]) -> List[Film]:
        return self._lookup(Film, FILMS_SQL, film_ids)

    def film_categories(self, film_ids: Collection[int]) -> List[FilmCategory]:
        return self._lookup(FilmCategory, FILM_CATEGORIES_SQL, film_ids)

    def categories(self, category_ids: Collection[int]) -> List[Category]:
        return self._lookup(Category, CATEGORIES_SQL, category_ids)


__all__ = ["PostgresRentalSource"]
