"""
Stores package for the rental reports job.

Re-exports the store interface and the concrete backends.
"""

from rental_reports.stores.abstract import AbstractReportStore, ReportStore, clock_order
from rental_reports.stores.in_memory import InMemoryReportStore
from rental_reports.stores.postgres import PostgresReportStore

__all__ = [
    "AbstractReportStore",
    "ReportStore",
    "clock_order",
    "InMemoryReportStore",
    "PostgresReportStore",
]
