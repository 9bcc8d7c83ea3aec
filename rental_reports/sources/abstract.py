"""
Read-only access to the upstream rental schema.

The extractor only needs five lookups: rentals inside a window, and the
inventory, film, film_category and category rows for a set of keys. Sources
return rows as-is; deciding whether a hop resolved to exactly one row is the
extractor's job.
"""

from __future__ import annotations

import abc
from typing import Collection, Iterable, Protocol, runtime_checkable

from rental_reports.domain.models import Category, Film, FilmCategory, InventoryItem, Rental
from rental_reports.domain.window import ReportWindow


@runtime_checkable
class RentalSource(Protocol):
    """
    Common interface for upstream data sources.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier used in logs.
    """

    name: str

    def rentals(self, window: ReportWindow) -> Iterable[Rental]:
        """Rentals whose `rental_date` falls inside `window`."""
        ...

    def inventory_items(self, inventory_ids: Collection[int]) -> Iterable[InventoryItem]:
        ...

    def films(self, film_ids: Collection[int]) -> Iterable[Film]:
        ...

    def film_categories(self, film_ids: Collection[int]) -> Iterable[FilmCategory]:
        ...

    def categories(self, category_ids: Collection[int]) -> Iterable[Category]:
        ...


class AbstractRentalSource(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    name: str

    @abc.abstractmethod
    def rentals(self, window: ReportWindow) -> Iterable[Rental]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def inventory_items(self, inventory_ids: Collection[int]) -> Iterable[InventoryItem]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def films(self, film_ids: Collection[int]) -> Iterable[Film]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def film_categories(self, film_ids: Collection[int]) -> Iterable[FilmCategory]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def categories(self, category_ids: Collection[int]) -> Iterable[Category]:  # pragma: no cover
        raise NotImplementedError


__all__ = ["RentalSource", "AbstractRentalSource"]
