"""
Rental Reports - daily time-of-day summary of DVD rental transactions.

This package rebuilds two report tables from the dvdrental schema:

- `detail_report`: one denormalized row per rental of the reporting day
- `summary_report`: rental count and revenue per time-of-day bucket
  (Morning, Afternoon, Evening)

The summary is maintained incrementally: each detail insert updates its
bucket in the same transaction, and a full refresh rebuilds both tables
from empty.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from rental_reports.config import Settings, get_settings
from rental_reports.domain import (
    ConstraintViolationError,
    DetailRecord,
    JoinResolutionError,
    ReportError,
    ReportWindow,
    SummaryRecord,
    TimeOfDay,
    classify_time_of_day,
)
from rental_reports.orchestrator import RefreshResult, generate_reports
from rental_reports.pipeline import append_detail, extract_details, verify_summary
from rental_reports.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "TimeOfDay",
    "classify_time_of_day",
    "DetailRecord",
    "SummaryRecord",
    "ReportWindow",
    "ReportError",
    "JoinResolutionError",
    "ConstraintViolationError",
    # Pipeline
    "extract_details",
    "append_detail",
    "verify_summary",
    "generate_reports",
    "RefreshResult",
    # Logging
    "configure_logging",
    "get_logger",
]
