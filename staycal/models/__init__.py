"""Reservation, availability and calendar models."""

from staycal.models.availability import AvailabilityIndex, UnavailabilityRange
from staycal.models.calendar import (
    BlankCell,
    CalendarCell,
    CalendarViewState,
    DayCell,
)
from staycal.models.reservation import Reservation
from staycal.models.reservation_status import (
    BLOCKING_STATUSES,
    ReservationStatus,
    ReservationStatusMapper,
    StatusPriority,
)

__all__ = [
    "AvailabilityIndex",
    "UnavailabilityRange",
    "BlankCell",
    "CalendarCell",
    "CalendarViewState",
    "DayCell",
    "Reservation",
    "BLOCKING_STATUSES",
    "ReservationStatus",
    "ReservationStatusMapper",
    "StatusPriority",
]
