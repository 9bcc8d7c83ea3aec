"""
Domain models for the rental reports job.

The first group mirrors the upstream dvdrental relations the extractor reads;
only the columns the report needs are modelled. DetailRecord and
SummaryRecord describe the two tables this job owns (`detail_report` and
`summary_report`), with field limits matching their DDL.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from rental_reports.domain.classifier import TimeOfDay, classify_time_of_day
from rental_reports.domain.errors import ConstraintViolationError

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Rental(BaseModel):
    """A row of the upstream `rental` table."""

    rental_id: int
    inventory_id: int
    rental_date: datetime

    model_config = _FROZEN


class InventoryItem(BaseModel):
    """A row of the upstream `inventory` table."""

    inventory_id: int
    film_id: int

    model_config = _FROZEN


class Film(BaseModel):
    """A row of the upstream `film` table."""

    film_id: int
    title: str
    rating: Optional[str] = None
    rental_rate: Decimal

    model_config = _FROZEN


class FilmCategory(BaseModel):
    """A row of the upstream `film_category` link table."""

    film_id: int
    category_id: int

    model_config = _FROZEN


class Category(BaseModel):
    """A row of the upstream `category` table."""

    category_id: int
    name: str

    model_config = _FROZEN


class DetailRecord(BaseModel):
    """
    Representation of a single row in the `detail_report` table.

    One row per rental in the reporting window, with film and category
    attributes denormalized onto it.
    """

    rental_id: int = Field(..., description="Primary key, copied from rental.")
    film_id: int = Field(..., description="Film resolved through inventory.")
    title: str = Field(..., max_length=40, description="Film title.")
    category: str = Field(..., max_length=40, description="Category name.")
    rating: Optional[str] = Field(None, max_length=10, description="MPAA rating.")
    rental_date: datetime = Field(..., description="Rental timestamp.")
    time_of_day: TimeOfDay = Field(..., description="Bucket derived from rental_date.")
    rental_rate: Decimal = Field(..., description="Film rental rate.")

    model_config = _FROZEN

    @model_validator(mode="after")
    def _label_matches_rental_date(self) -> "DetailRecord":
        expected = classify_time_of_day(self.rental_date)
        if self.time_of_day is not expected:
            raise ValueError(
                f"time_of_day {self.time_of_day.value!r} does not match rental_date "
                f"{self.rental_date.isoformat()} (expected {expected.value!r})"
            )
        return self

    @classmethod
    def from_rental(cls, rental: Rental, film: Film, category: Category) -> "DetailRecord":
        """
        Build the detail row for a resolved rental.

        The time-of-day label is computed here, once; it is never recomputed
        for a stored row.

        Raises
        ------
        ConstraintViolationError
            If a field does not fit the `detail_report` columns.
        """
        try:
            return cls(
                rental_id=rental.rental_id,
                film_id=film.film_id,
                title=film.title,
                category=category.name,
                rating=film.rating,
                rental_date=rental.rental_date,
                time_of_day=classify_time_of_day(rental.rental_date),
                rental_rate=film.rental_rate,
            )
        except ValidationError as exc:
            raise ConstraintViolationError(
                f"rental {rental.rental_id} does not fit detail_report: {exc}"
            ) from exc


class SummaryRecord(BaseModel):
    """
    Representation of a single row in the `summary_report` table.
    """

    time_of_day: TimeOfDay = Field(..., description="Primary key.")
    total_rentals: int = Field(..., ge=0, description="Contributing detail rows.")
    total_revenue: Decimal = Field(..., description="Sum of their rental_rate.")

    model_config = _FROZEN


__all__ = [
    "Rental",
    "InventoryItem",
    "Film",
    "FilmCategory",
    "Category",
    "DetailRecord",
    "SummaryRecord",
]
