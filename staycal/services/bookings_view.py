"""Explicit view state and reducer for the host/guest bookings screens."""

from datetime import date
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from structlog import get_logger

from staycal.models.availability import AvailabilityIndex
from staycal.models.reservation import Reservation
from staycal.models.reservation_status import ReservationStatus
from staycal.transformers.availability_transformer import AvailabilityTransformer

logger = get_logger(__name__)


class ModalState(str, Enum):
    """Which dialog the bookings screen shows."""

    NONE = "none"
    RESERVATION_DETAIL = "reservation_detail"
    CONFIRM_BOOKING = "confirm_booking"


class BookingsViewState(BaseModel):
    """Everything a bookings screen renders, in one immutable record."""

    reservations: tuple[Reservation, ...] = ()
    index: AvailabilityIndex = Field(default_factory=AvailabilityIndex)
    overlay: dict[str, str] = Field(default_factory=dict)
    loading: bool = True
    selected_date: Optional[date] = None
    selected_reservation_id: Optional[str] = None
    modal: ModalState = ModalState.NONE
    updating_id: Optional[str] = None
    feedback: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def selected_reservation(self) -> Optional[Reservation]:
        return self.find_reservation(self.selected_reservation_id)

    @property
    def visible_reservations(self) -> list[Reservation]:
        """Reservations shown in the list, narrowed to the selected day if any."""
        return AvailabilityTransformer.reservations_on(self.reservations, self.selected_date)

    def find_reservation(self, reservation_id: Optional[str]) -> Optional[Reservation]:
        if reservation_id is None:
            return None
        for reservation in self.reservations:
            if reservation.id == reservation_id:
                return reservation
        return None


class SnapshotReceived(BaseModel):
    """A full replacement list of reservations from the subscription."""

    reservations: list[Any]


class DateSelected(BaseModel):
    day: Optional[date] = None


class ReservationSelected(BaseModel):
    reservation_id: Optional[str] = None


class ConfirmDialogOpened(BaseModel):
    reservation_id: str


class DialogClosed(BaseModel):
    pass


class DecisionStarted(BaseModel):
    reservation_id: str
    status: ReservationStatus


class DecisionFinished(BaseModel):
    reservation_id: str
    status: ReservationStatus
    error: Optional[str] = None


class FeedbackDismissed(BaseModel):
    pass


BookingsAction = Union[
    SnapshotReceived,
    DateSelected,
    ReservationSelected,
    ConfirmDialogOpened,
    DialogClosed,
    DecisionStarted,
    DecisionFinished,
    FeedbackDismissed,
]


def date_clicked(day: int, month: int, year: int) -> DateSelected:
    """Build a DateSelected action from a navigator callback (1-based month)."""
    return DateSelected(day=date(year, month, day))


def reduce_bookings_view(state: BookingsViewState, action: BookingsAction) -> BookingsViewState:
    """Compute the next bookings view state.

    Snapshots are sorted newest first and the availability index and
    status overlay are rebuilt from scratch. Only pending reservations can
    be confirmed or declined.

    Args:
        state: Current state
        action: Action to apply

    Returns:
        New state (the input is never modified)

    Raises:
        TypeError: If the action type is unknown
    """
    if isinstance(action, SnapshotReceived):
        reservations = AvailabilityTransformer.sort_by_created_desc(action.reservations)
        update: dict[str, Any] = {
            "reservations": tuple(reservations),
            "index": AvailabilityTransformer.build_index(reservations),
            "overlay": AvailabilityTransformer.booked_status_overlay(reservations),
            "loading": False,
        }
        if state.selected_reservation_id is not None and not any(
            r.id == state.selected_reservation_id for r in reservations
        ):
            update["selected_reservation_id"] = None
            update["modal"] = ModalState.NONE
        return state.model_copy(update=update)

    if isinstance(action, DateSelected):
        return state.model_copy(update={"selected_date": action.day})

    if isinstance(action, ReservationSelected):
        if action.reservation_id is None or state.find_reservation(action.reservation_id) is None:
            return state.model_copy(
                update={"selected_reservation_id": None, "modal": ModalState.NONE}
            )
        return state.model_copy(
            update={
                "selected_reservation_id": action.reservation_id,
                "modal": ModalState.RESERVATION_DETAIL,
            }
        )

    if isinstance(action, ConfirmDialogOpened):
        reservation = state.find_reservation(action.reservation_id)
        if reservation is None or reservation.status_key != ReservationStatus.PENDING.value:
            logger.info(
                "Confirm dialog refused for non-pending reservation",
                reservation_id=action.reservation_id,
            )
            return state
        return state.model_copy(
            update={
                "selected_reservation_id": action.reservation_id,
                "modal": ModalState.CONFIRM_BOOKING,
            }
        )

    if isinstance(action, DialogClosed):
        if state.modal == ModalState.CONFIRM_BOOKING and state.selected_reservation is not None:
            return state.model_copy(update={"modal": ModalState.RESERVATION_DETAIL})
        return state.model_copy(
            update={"modal": ModalState.NONE, "selected_reservation_id": None}
        )

    if isinstance(action, DecisionStarted):
        reservation = state.find_reservation(action.reservation_id)
        if state.updating_id is not None or reservation is None:
            return state
        if reservation.status_key != ReservationStatus.PENDING.value:
            return state
        modal = ModalState.RESERVATION_DETAIL if state.modal == ModalState.CONFIRM_BOOKING else state.modal
        return state.model_copy(update={"updating_id": action.reservation_id, "modal": modal})

    if isinstance(action, DecisionFinished):
        if action.error:
            logger.error(
                "Failed to update reservation",
                reservation_id=action.reservation_id,
                status=action.status.value,
                error=action.error,
            )
            feedback = "Failed to update reservation. Please try again."
        else:
            feedback = f"Reservation {action.status.value} successfully!"
        return state.model_copy(update={"updating_id": None, "feedback": feedback})

    if isinstance(action, FeedbackDismissed):
        return state.model_copy(update={"feedback": None})

    raise TypeError(f"Unknown bookings action: {type(action).__name__}")
