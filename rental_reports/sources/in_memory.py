"""
In-memory rental source.

Backs unit tests and the sample-data script; rows are plain model instances
held in lists, filtered on each call.
"""

from __future__ import annotations

from typing import Collection, Iterable, List, Optional

from rental_reports.domain.models import Category, Film, FilmCategory, InventoryItem, Rental
from rental_reports.domain.window import ReportWindow
from rental_reports.sources.abstract import AbstractRentalSource


class InMemoryRentalSource(AbstractRentalSource):
    """Upstream relations held as lists of model instances."""

    name: str = "in_memory"

    def __init__(
        self,
        rentals: Optional[Iterable[Rental]] = None,
        inventory: Optional[Iterable[InventoryItem]] = None,
        films: Optional[Iterable[Film]] = None,
        film_categories: Optional[Iterable[FilmCategory]] = None,
        categories: Optional[Iterable[Category]] = None,
    ) -> None:
        self.rental_rows: List[Rental] = list(rentals or [])
        self.inventory_rows: List[InventoryItem] = list(inventory or [])
        self.film_rows: List[Film] = list(films or [])
        self.film_category_rows: List[FilmCategory] = list(film_categories or [])
        self.category_rows: List[Category] = list(categories or [])

    def rentals(self, window: ReportWindow) -> List[Rental]:
        return [r for r in self.rental_rows if window.contains(r.rental_date)]

    def inventory_items(self, inventory_ids: Collection[int]) -> List[InventoryItem]:
        wanted = set(inventory_ids)
        return [i for i in self.inventory_rows if i.inventory_id in wanted]

    def films(self, film_ids: Collection[int]) -> List[Film]:
        wanted = set(film_ids)
        return [f for f in self.film_rows if f.film_id in wanted]

    def film_categories(self, film_ids: Collection[int]) -> List[FilmCategory]:
        wanted = set(film_ids)
        return [fc for fc in self.film_category_rows if fc.film_id in wanted]

    def categories(self, category_ids: Collection[int]) -> List[Category]:
        wanted = set(category_ids)
        return [c for c in self.category_rows if c.category_id in wanted]


__all__ = ["InMemoryRentalSource"]
