"""
Infrastructure package for the rental reports job.

Centralizes database connectivity (retrying connection factory) and the DDL
for the report tables. Keep this layer focused on I/O and resource
management, decoupled from the extraction and aggregation logic.
"""

from rental_reports.infrastructure.db_factory import (
    apply_statement_timeout,
    build_dsn,
    get_sync_connection,
)
from rental_reports.infrastructure.schema import create_report_tables, drop_legacy_trigger

__all__ = [
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "create_report_tables",
    "drop_legacy_trigger",
]
