"""Reservation statuses and their calendar display rules."""

from enum import Enum, IntEnum


class ReservationStatus(str, Enum):
    """Reservation lifecycle statuses as stored on reservation documents.

    Stored values are free-form strings; compare case-insensitively.
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    COMPLETED = "completed"
    REFUND_PENDING = "refund_pending"
    CANCELLED = "cancelled"


# Only these statuses occupy the calendar for conflict checks
BLOCKING_STATUSES = frozenset({ReservationStatus.PENDING.value, ReservationStatus.CONFIRMED.value})


class StatusPriority(IntEnum):
    """Display priority when several reservations cover the same day.

    - 3: PENDING
    - 2: CONFIRMED
    - 1: DECLINED
    - 0: anything else
    """
    UNSET = 0
    DECLINED = 1
    CONFIRMED = 2
    PENDING = 3


class ReservationStatusMapper:
    """Maps reservation status strings to priorities, labels and CSS classes."""

    @staticmethod
    def normalize(status: str | None) -> str:
        """Lowercase, stripped status ('' when missing)."""
        return (status or "").strip().lower()

    @staticmethod
    def priority(status: str | None) -> int:
        """Get the overlay priority of a status.

        Args:
            status: Status string in any case (e.g., "Pending", "confirmed")

        Returns:
            StatusPriority value, UNSET for unknown statuses
        """
        priority_mapping = {
            ReservationStatus.PENDING.value: StatusPriority.PENDING,
            ReservationStatus.CONFIRMED.value: StatusPriority.CONFIRMED,
            ReservationStatus.DECLINED.value: StatusPriority.DECLINED,
        }
        return priority_mapping.get(ReservationStatusMapper.normalize(status), StatusPriority.UNSET)

    @staticmethod
    def display_label(status: str | None) -> str:
        """Capitalised status label shown on calendar days ("Booked" if empty)."""
        label = ReservationStatusMapper.normalize(status)
        return label.capitalize() if label else "Booked"

    @staticmethod
    def css_class(status: str | None) -> str:
        """CSS class used to colour a calendar day for a status label."""
        normalized = ReservationStatusMapper.normalize(status)
        if normalized == ReservationStatus.PENDING.value:
            return "status-pending"
        if normalized == ReservationStatus.CONFIRMED.value:
            return "status-confirmed"
        if normalized in (ReservationStatus.DECLINED.value, ReservationStatus.CANCELLED.value):
            return "status-declined"
        return ""

    @staticmethod
    def is_blocking(status: str | None, blocking_statuses: frozenset[str] = BLOCKING_STATUSES) -> bool:
        return ReservationStatusMapper.normalize(status) in blocking_statuses
