"""Exceptions raised inside staycal.

None of these cross the public boundary for advisory cases: the range
picker and the reservation feed catch them and turn them into results or
log events.
"""


class StaycalError(Exception):
    """Base class for staycal errors."""

    pass


class MalformedReservation(StaycalError):
    """Raised when a reservation lacks a usable check-in or check-out date."""

    def __init__(self, reservation_id: str | None, reason: str):
        self.reservation_id = reservation_id
        self.reason = reason
        super().__init__(f"Reservation {reservation_id or '<unknown>'}: {reason}")


class InvalidRangeSelection(StaycalError):
    """Raised when a check-out is chosen at or before the check-in."""

    pass


class SourceUnavailable(StaycalError):
    """Raised when the reservation subscription stops delivering snapshots."""

    pass
