"""
Full refresh of the rental reports for one business day.

Usage (as invoked by the daily scheduler, through the CLI):
    from rental_reports.orchestrator import generate_reports

    result = generate_reports(datetime.now(), source=source, store=store)

A refresh runs as one transaction on the store:

1. clear `summary_report`
2. clear `detail_report`
3. extract the day's rentals and insert them one by one; each insert
   updates the summary, which is rebuilt from empty as a side effect

Both tables are empty before anything is written, so leftover rows can
neither survive nor be double-counted. If any step raises, the transaction
rolls back and the previous report is left untouched. Running the same
target day twice yields the same tables both times.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, TypedDict

from rental_reports.domain.window import ReportWindow
from rental_reports.pipeline.extractor import extract_details, load_details
from rental_reports.sources.abstract import RentalSource
from rental_reports.stores.abstract import ReportStore
from rental_reports.utils.logging import get_logger
from rental_reports.utils.profiler import profile_block

log = get_logger(__name__)


class RefreshResult(TypedDict, total=False):
    """
    Outcome of a refresh, as printed by the CLI.
    """

    target: str
    window_start: str
    window_end: str
    rows: int
    summary: List[Dict[str, Any]]
    duration_seconds: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]


def refresh(window: ReportWindow, *, source: RentalSource, store: ReportStore) -> int:
    """
    Replace both report tables with the rentals in `window`.

    Returns the number of detail rows written.
    """
    with store.transaction():
        store.clear_summary()
        store.clear_details()
        return load_details(store, extract_details(source, window))


def generate_reports(
    target_day: datetime, *, source: RentalSource, store: ReportStore
) -> RefreshResult:
    """
    Rebuild the detail and summary reports for the day of `target_day`.

    Parameters
    ----------
    target_day : datetime
        Any instant on the day to report. Rentals after this instant are
        excluded, so passing "now" mid-day reports the day so far.
    source : RentalSource
        Upstream rental data.
    store : ReportStore
        Destination for the two report tables.

    Returns
    -------
    RefreshResult
        Row count, the rebuilt summary and profiling stats.

    Raises
    ------
    ReportError
        If extraction or insertion fails; the store is left as it was.
    """
    window = ReportWindow.for_day(target_day)
    label = f"refresh-{window.day.isoformat()}"
    log.info(f"[REFRESH START] {window.describe()}", extra={"source": source.name, "store": store.name})

    with profile_block(label) as stats:
        try:
            rows = refresh(window, source=source, store=store)
        except Exception:
            log.exception(
                f"[REFRESH FAILED] {window.describe()}; previous report kept",
                extra={"source": source.name, "store": store.name},
            )
            raise

    summary = store.summary()
    log.info(
        f"[REFRESH SUCCESS] {window.describe()}",
        extra={
            "rows": rows,
            "buckets": len(summary),
            "duration": round(stats.duration_seconds, 3),
        },
    )
    return RefreshResult(
        target=window.end.isoformat(),
        window_start=window.start.isoformat(),
        window_end=window.end.isoformat(),
        rows=rows,
        summary=[row.model_dump(mode="json") for row in summary],
        duration_seconds=round(stats.duration_seconds, 3),
        peak_rss_bytes=stats.peak_rss_bytes,
        cpu_percent=round(stats.cpu_percent, 1) if stats.cpu_percent is not None else None,
    )


__all__ = ["RefreshResult", "generate_reports", "refresh"]
