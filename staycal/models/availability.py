"""Pydantic models for derived availability data."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UnavailabilityRange(BaseModel):
    """A half-open ``[start, end)`` range occupied by one active reservation."""

    start: date = Field(description="First occupied night (inclusive)")
    end: date = Field(description="Check-out day (exclusive)")
    status: str = Field(description="Reservation status, original case")
    reservation_id: Optional[str] = Field(None, description="Source reservation")

    model_config = ConfigDict(frozen=True)

    @property
    def nights(self) -> int:
        return (self.end - self.start).days

    def covers(self, day: date) -> bool:
        return self.start <= day < self.end

    def overlaps(self, start: date, end: date) -> bool:
        """Half-open interval overlap with ``[start, end)``."""
        return start < self.end and end > self.start


class AvailabilityIndex(BaseModel):
    """Immutable snapshot of blocked days and the ranges that block them.

    A date key is in ``blocked_days`` iff it falls within at least one of
    ``ranges``. Ranges keep the order of the reservation list they were
    built from.
    """

    blocked_days: frozenset[str] = Field(default_factory=frozenset)
    ranges: tuple[UnavailabilityRange, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    def is_blocked(self, key: str) -> bool:
        """Check a ``YYYY-MM-DD`` date key against the blocked days."""
        return key in self.blocked_days

    @property
    def total_ranges(self) -> int:
        return len(self.ranges)
