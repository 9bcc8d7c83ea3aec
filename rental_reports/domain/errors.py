"""
Error taxonomy for the rental reports job.

All errors raised by the pipeline derive from ReportError so the CLI (and any
scheduler wrapper) can tell a failed refresh apart from a programming error.
"""

from __future__ import annotations

from typing import Any, Optional


class ReportError(Exception):
    """Base class for refresh failures."""


class JoinResolutionError(ReportError):
    """
    A rental could not be resolved to exactly one row through a lookup hop.

    Attributes
    ----------
    relation : str
        Upstream relation the hop reads (e.g. "inventory", "film_category").
    key : Any
        Lookup key that failed to resolve.
    matches : int
        Number of rows found for the key (0 = missing, >1 = ambiguous).
    rental_id : int | None
        Rental being resolved when the hop failed.
    """

    def __init__(self, relation: str, key: Any, matches: int, rental_id: Optional[int] = None):
        self.relation = relation
        self.key = key
        self.matches = matches
        self.rental_id = rental_id
        problem = "no matching row" if matches == 0 else f"{matches} matching rows"
        super().__init__(
            f"rental {rental_id}: expected exactly one {relation} row for key {key!r}, "
            f"found {problem}"
        )


class ConstraintViolationError(ReportError):
    """A detail row could not be written (duplicate key or malformed field)."""


__all__ = ["ReportError", "JoinResolutionError", "ConstraintViolationError"]
