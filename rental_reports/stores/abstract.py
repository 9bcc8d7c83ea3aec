"""
Report store interface: the two tables owned by the rental reports job.

A store is always passed explicitly to the pipeline; nothing reaches it
through module-level state. Implementations must provide:

- `transaction()`: a nestable context manager. If the block raises, every
  mutation made inside it is undone and the exception propagates.
- `upsert_summary()`: an atomic insert-or-increment. No reader may observe a
  summary row whose count was bumped but whose revenue was not.
"""

from __future__ import annotations

import abc
from contextlib import AbstractContextManager
from decimal import Decimal
from typing import List, Protocol, runtime_checkable

from rental_reports.domain.classifier import TimeOfDay
from rental_reports.domain.models import DetailRecord, SummaryRecord


@runtime_checkable
class ReportStore(Protocol):
    """
    Common interface for detail/summary storage backends.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier used in logs.
    """

    name: str

    def transaction(self) -> AbstractContextManager["ReportStore"]:
        ...

    def clear_summary(self) -> None:
        ...

    def clear_details(self) -> None:
        ...

    def insert_detail(self, record: DetailRecord) -> None:
        """
        Insert one detail row.

        Raises
        ------
        ConstraintViolationError
            If a row with the same `rental_id` already exists.
        """
        ...

    def upsert_summary(self, time_of_day: TimeOfDay, rental_rate: Decimal) -> None:
        """Create the bucket row with (1, rate) or add (1, rate) to it."""
        ...

    def details(self) -> List[DetailRecord]:
        ...

    def summary(self) -> List[SummaryRecord]:
        """Summary rows in clock order (Morning, Afternoon, Evening)."""
        ...


class AbstractReportStore(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    name: str

    @abc.abstractmethod
    def transaction(self) -> AbstractContextManager["AbstractReportStore"]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def clear_summary(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def clear_details(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def insert_detail(self, record: DetailRecord) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def upsert_summary(self, time_of_day: TimeOfDay, rental_rate: Decimal) -> None:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def details(self) -> List[DetailRecord]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def summary(self) -> List[SummaryRecord]:  # pragma: no cover - interface only
        raise NotImplementedError


def clock_order(rows: List[SummaryRecord]) -> List[SummaryRecord]:
    """Sort summary rows Morning, Afternoon, Evening."""
    position = {label: index for index, label in enumerate(TimeOfDay)}
    return sorted(rows, key=lambda row: position[row.time_of_day])


__all__ = ["ReportStore", "AbstractReportStore", "clock_order"]
