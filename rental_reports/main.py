from __future__ import annotations

import json
import sys
from datetime import datetime
from typing import Optional

import typer

from rental_reports.config import get_settings
from rental_reports.domain.errors import ReportError
from rental_reports.domain.window import ReportWindow
from rental_reports.infrastructure.db_factory import get_sync_connection
from rental_reports.infrastructure.schema import create_report_tables, drop_legacy_trigger
from rental_reports.orchestrator import generate_reports
from rental_reports.pipeline.aggregator import verify_summary
from rental_reports.pipeline.extractor import extract_details
from rental_reports.reporter import print_refresh_result
from rental_reports.sources.postgres import PostgresRentalSource
from rental_reports.stores.postgres import PostgresReportStore
from rental_reports.utils.logging import configure_logging

app = typer.Typer(help="DVD rental time-of-day reports.")


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"env={settings.app_env} log_level={settings.log_level} "
        f"statement_timeout_ms={settings.db_statement_timeout_ms}"
    )


@app.command("init-schema")
def init_schema() -> None:
    """
    Create the report tables and remove the legacy summary trigger.
    """
    _setup_logging()
    with get_sync_connection() as conn:
        create_report_tables(conn)
        drop_legacy_trigger(conn)
    typer.echo("Report tables ready.")


@app.command()
def generate(
    at: Optional[datetime] = typer.Option(
        None,
        "--at",
        "-a",
        help="Report instant (ISO timestamp). Defaults to now; rentals after it are excluded.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """
    Rebuild the detail and summary reports for the day of --at.
    """
    _setup_logging()
    settings = get_settings()
    target = at or datetime.now()

    try:
        with get_sync_connection() as conn:
            result = generate_reports(
                target,
                source=PostgresRentalSource(conn),
                store=PostgresReportStore(
                    conn, statement_timeout_ms=settings.db_statement_timeout_ms
                ),
            )
    except ReportError as exc:
        typer.echo(f"Refresh failed: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
    else:
        print_refresh_result(result)


@app.command()
def verify() -> None:
    """
    Check that summary_report matches what detail_report implies.
    """
    _setup_logging()
    with get_sync_connection() as conn:
        problems = verify_summary(PostgresReportStore(conn))
    if problems:
        for problem in problems:
            typer.echo(problem, err=True)
        raise typer.Exit(code=1)
    typer.echo("Summary consistent with detail rows.")


@app.command()
def extract(
    start: datetime = typer.Option(..., "--from", help="First rental instant to include (ISO timestamp)."),
    end: datetime = typer.Option(..., "--to", help="Last rental instant to include (ISO timestamp)."),
) -> None:
    """
    Print detail rows for rentals in [--from, --to] as JSON lines.

    Read-only: the report tables are not touched.
    """
    _setup_logging()
    try:
        window = ReportWindow.between(start, end)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    try:
        with get_sync_connection() as conn:
            records = list(extract_details(PostgresRentalSource(conn), window))
    except ReportError as exc:
        typer.echo(f"Extraction failed: {exc}", err=True)
        raise typer.Exit(code=1)

    for record in records:
        typer.echo(record.model_dump_json())


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
