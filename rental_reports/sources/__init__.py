"""
Sources package for the rental reports job.

Re-exports the source interface and the concrete implementations so callers
can import from `rental_reports.sources` directly.
"""

from rental_reports.sources.abstract import AbstractRentalSource, RentalSource
from rental_reports.sources.in_memory import InMemoryRentalSource
from rental_reports.sources.postgres import PostgresRentalSource

__all__ = [
    "AbstractRentalSource",
    "RentalSource",
    "InMemoryRentalSource",
    "PostgresRentalSource",
]
