"""Calendar and booking view services."""

from staycal.services.bookings_view import (
    BookingsViewState,
    ModalState,
    reduce_bookings_view,
)
from staycal.services.calendar_navigator import CalendarNavigator
from staycal.services.range_picker import RangePicker, SelectionOutcome, SelectionResult
from staycal.services.reservation_feed import (
    FeedSnapshot,
    ReservationFeed,
    ReservationFilter,
    ReservationSource,
)

__all__ = [
    "BookingsViewState",
    "ModalState",
    "reduce_bookings_view",
    "CalendarNavigator",
    "RangePicker",
    "SelectionOutcome",
    "SelectionResult",
    "FeedSnapshot",
    "ReservationFeed",
    "ReservationFilter",
    "ReservationSource",
]
