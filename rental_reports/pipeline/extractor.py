"""
Detail extraction: rentals in a window, flattened with film and category.

Each rental is resolved through four lookup hops:

    rental.inventory_id -> inventory.film_id -> film
    film.film_id -> film_category.category_id -> category

Every hop must match exactly one upstream row. A missing or ambiguous match
is a data-integrity problem in the source; it raises JoinResolutionError
and is never skipped, so a refresh either covers every rental in the
window or fails.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

from rental_reports.domain.errors import JoinResolutionError
from rental_reports.domain.models import DetailRecord
from rental_reports.domain.window import ReportWindow
from rental_reports.pipeline.aggregator import append_detail
from rental_reports.sources.abstract import RentalSource
from rental_reports.stores.abstract import ReportStore
from rental_reports.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


class Lookup(Generic[T]):
    """
    Rows of one upstream relation indexed by a key.

    `resolve()` enforces the exactly-one-match rule for a hop.
    """

    def __init__(self, relation: str, rows: Iterable[T], key: Callable[[T], Hashable]) -> None:
        self.relation = relation
        self._index: Dict[Hashable, List[T]] = defaultdict(list)
        for row in rows:
            self._index[key(row)].append(row)

    def resolve(self, key: Hashable, rental_id: Optional[int] = None) -> T:
        matches = self._index.get(key, [])
        if len(matches) != 1:
            raise JoinResolutionError(self.relation, key, len(matches), rental_id)
        return matches[0]


def extract_details(source: RentalSource, window: ReportWindow) -> Iterator[DetailRecord]:
    """
    Yield one DetailRecord per rental of `source` inside `window`.

    Lookups are fetched in bulk, one query per relation, before any record is
    yielded. Order of the yielded records is unspecified.

    Raises
    ------
    JoinResolutionError
        If any hop for any rental does not resolve to exactly one row.
    ConstraintViolationError
        If a resolved rental does not fit the detail table.
    """
    rentals = list(source.rentals(window))
    log.info(
        "Extracting rentals",
        extra={"source": source.name, "window": window.describe(), "rentals": len(rentals)},
    )
    if not rentals:
        return

    inventory = Lookup(
        "inventory",
        source.inventory_items({r.inventory_id for r in rentals}),
        key=lambda row: row.inventory_id,
    )
    film_of = {r.rental_id: inventory.resolve(r.inventory_id, r.rental_id).film_id for r in rentals}
    film_ids = set(film_of.values())
    films = Lookup("film", source.films(film_ids), key=lambda row: row.film_id)
    film_categories = Lookup(
        "film_category", source.film_categories(film_ids), key=lambda row: row.film_id
    )
    category_ids = {
        film_categories.resolve(film_of[r.rental_id], r.rental_id).category_id for r in rentals
    }
    categories = Lookup(
        "category", source.categories(category_ids), key=lambda row: row.category_id
    )

    for rental in rentals:
        item = inventory.resolve(rental.inventory_id, rental.rental_id)
        film = films.resolve(item.film_id, rental.rental_id)
        link = film_categories.resolve(film.film_id, rental.rental_id)
        category = categories.resolve(link.category_id, rental.rental_id)
        yield DetailRecord.from_rental(rental, film, category)


def load_details(store: ReportStore, records: Iterable[DetailRecord]) -> int:
    """
    Insert records one at a time through the aggregating insert path.

    Returns the number of rows inserted.
    """
    inserted = 0
    for record in records:
        append_detail(store, record)
        inserted += 1
    return inserted


__all__ = ["Lookup", "extract_details", "load_details"]
