"""Pydantic model for reservation documents read from the document store."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from staycal.models.reservation_status import ReservationStatusMapper
from staycal.utils.dates import nights_between, to_local_date, to_local_datetime


class Reservation(BaseModel):
    """Read-only snapshot of a reservation document.

    Check-in and check-out are local calendar days; check-out is exclusive
    (the guest occupies the nights from check-in to the day before
    check-out). Dates that are missing or cannot be parsed are None, and such
    reservations are left out of availability computations.
    """

    id: Optional[str] = Field(None, description="Document identifier")
    listing_id: Optional[str] = Field(None, alias="listingId")
    guest_id: Optional[str] = Field(None, alias="guestId")
    host_id: Optional[str] = Field(None, alias="hostId")
    check_in: Optional[date] = Field(None, alias="checkIn")
    check_out: Optional[date] = Field(None, alias="checkOut")
    status: str = Field(default="", description="Free-form status, original case preserved")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
    )

    @field_validator("id", "listing_id", "guest_id", "host_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Optional[str]:
        """Identifiers are opaque; keep them as strings."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def parse_stay_date(cls, v: Any) -> Optional[date]:
        """Normalize timestamps and date strings to the local calendar day."""
        return to_local_date(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Optional[datetime]:
        return to_local_datetime(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def status_key(self) -> str:
        """Lowercase status used for comparisons."""
        return ReservationStatusMapper.normalize(self.status)

    @property
    def has_stay_dates(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    @property
    def nights(self) -> Optional[int]:
        """Number of nights booked, None if a date is missing."""
        return nights_between(self.check_in, self.check_out)

    def covers(self, day: date) -> bool:
        """Check whether the guest occupies the night of ``day``.

        Args:
            day: Calendar day to test

        Returns:
            True if check_in <= day < check_out
        """
        if not self.has_stay_dates:
            return False
        return self.check_in <= day < self.check_out
