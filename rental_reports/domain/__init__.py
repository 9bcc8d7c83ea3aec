"""
Domain package for the rental reports job.

Exports the models, classifier, reporting window and error types used by the
sources, stores and pipeline. Keep this package free of I/O.
"""

from rental_reports.domain.classifier import TimeOfDay, classify_time_of_day
from rental_reports.domain.errors import (
    ConstraintViolationError,
    JoinResolutionError,
    ReportError,
)
from rental_reports.domain.models import (
    Category,
    DetailRecord,
    Film,
    FilmCategory,
    InventoryItem,
    Rental,
    SummaryRecord,
)
from rental_reports.domain.window import ReportWindow

__all__ = [
    "TimeOfDay",
    "classify_time_of_day",
    "ReportError",
    "JoinResolutionError",
    "ConstraintViolationError",
    "Rental",
    "InventoryItem",
    "Film",
    "FilmCategory",
    "Category",
    "DetailRecord",
    "SummaryRecord",
    "ReportWindow",
]
