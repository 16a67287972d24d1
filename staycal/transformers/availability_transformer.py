"""Transformer for deriving calendar availability from reservation snapshots."""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError
from structlog import get_logger

from staycal.config.settings import settings
from staycal.exceptions import MalformedReservation
from staycal.models.availability import AvailabilityIndex, UnavailabilityRange
from staycal.models.reservation import Reservation
from staycal.models.reservation_status import ReservationStatusMapper
from staycal.utils.dates import DateLike, iter_days, to_local_date

logger = get_logger(__name__)

ReservationInput = Reservation | Mapping[str, Any]


class AvailabilityTransformer:
    """Turns reservation lists into availability data for calendars and booking forms.

    Every method is a pure function of its arguments. Callers rebuild from
    the full reservation list whenever a new snapshot arrives instead of
    patching previous results.
    """

    @staticmethod
    def to_reservation(raw: ReservationInput) -> Reservation:
        """Coerce a raw document or model into a Reservation.

        Args:
            raw: Reservation model or document mapping (camelCase keys)

        Returns:
            Reservation model

        Raises:
            MalformedReservation: If the document cannot be read at all
        """
        if isinstance(raw, Reservation):
            return raw
        try:
            return Reservation.model_validate(raw)
        except ValidationError as e:
            reservation_id = raw.get("id") if isinstance(raw, Mapping) else None
            raise MalformedReservation(reservation_id, str(e)) from e

    @staticmethod
    def to_reservations(reservations: Iterable[ReservationInput]) -> list[Reservation]:
        """Parse a snapshot, dropping documents that are not readable."""
        parsed = []
        for raw in reservations:
            try:
                parsed.append(AvailabilityTransformer.to_reservation(raw))
            except MalformedReservation as e:
                logger.warning(
                    "Skipping unreadable reservation document",
                    reservation_id=e.reservation_id,
                    reason=e.reason,
                )
        return parsed

    @staticmethod
    def _stay_range(reservation: Reservation) -> tuple[date, date]:
        """Get the ``[check_in, check_out)`` nights of a reservation.

        Raises:
            MalformedReservation: If a date is missing or check-out is not after check-in
        """
        if reservation.check_in is None:
            raise MalformedReservation(reservation.id, "missing or unparsable checkIn")
        if reservation.check_out is None:
            raise MalformedReservation(reservation.id, "missing or unparsable checkOut")
        if reservation.check_out <= reservation.check_in:
            raise MalformedReservation(reservation.id, "checkOut is not after checkIn")
        return reservation.check_in, reservation.check_out

    @staticmethod
    def build_index(
        reservations: Iterable[ReservationInput],
        blocking_statuses: frozenset[str] | None = None,
    ) -> AvailabilityIndex:
        """Build the availability index for a reservation list.

        Only reservations whose status (case-insensitive) is a blocking
        status occupy the calendar. For each of them every night from
        check-in up to, but not including, check-out becomes a blocked day,
        and one range carrying the original-case status is recorded. Ranges
        keep the order of the input list.

        Args:
            reservations: Reservation models or raw documents
            blocking_statuses: Lowercased statuses that block days
                (defaults to the configured pending/confirmed)

        Returns:
            Immutable AvailabilityIndex
        """
        statuses = blocking_statuses if blocking_statuses is not None else settings.blocking_statuses

        blocked_days: set[str] = set()
        ranges: list[UnavailabilityRange] = []
        skipped = 0

        for reservation in AvailabilityTransformer.to_reservations(reservations):
            if not ReservationStatusMapper.is_blocking(reservation.status, statuses):
                continue

            try:
                start, end = AvailabilityTransformer._stay_range(reservation)
            except MalformedReservation as e:
                skipped += 1
                logger.debug(
                    "Excluding reservation from availability",
                    reservation_id=e.reservation_id,
                    reason=e.reason,
                )
                continue

            for day in iter_days(start, end):
                blocked_days.add(day.isoformat())

            ranges.append(
                UnavailabilityRange(
                    start=start,
                    end=end,
                    status=reservation.status,
                    reservation_id=reservation.id,
                )
            )

        logger.debug(
            "Built availability index",
            ranges=len(ranges),
            blocked_days=len(blocked_days),
            skipped=skipped,
        )

        return AvailabilityIndex(blocked_days=frozenset(blocked_days), ranges=tuple(ranges))

    @staticmethod
    def has_conflict(
        index: AvailabilityIndex,
        proposed_start: DateLike,
        proposed_end: DateLike,
    ) -> bool:
        """Check whether a proposed stay collides with the index.

        Returns False when either date is absent; callers must read that as
        "not ready to check", not as "available". Two checks are applied:
        any night of ``[start, end)`` being a blocked day, and half-open
        overlap with any range.

        Args:
            index: Availability index to check against
            proposed_start: Check-in (date-like)
            proposed_end: Check-out (date-like, exclusive)

        Returns:
            True if the stay conflicts with an active reservation
        """
        start = to_local_date(proposed_start)
        end = to_local_date(proposed_end)
        if start is None or end is None:
            return False

        for day in iter_days(start, end):
            if day.isoformat() in index.blocked_days:
                return True

        return any(r.overlaps(start, end) for r in index.ranges)

    @staticmethod
    def range_covering(index: AvailabilityIndex, day: DateLike) -> UnavailabilityRange | None:
        """Get the range occupying a day.

        Ranges from different reservations may overlap; the first one in
        reservation-list order wins.

        Args:
            index: Availability index
            day: Date or ``YYYY-MM-DD`` key

        Returns:
            The covering range, or None if the day is free
        """
        target = to_local_date(day)
        if target is None:
            return None
        for unavailability_range in index.ranges:
            if unavailability_range.covers(target):
                return unavailability_range
        return None

    @staticmethod
    def booked_status_overlay(reservations: Iterable[ReservationInput]) -> dict[str, str]:
        """Build the dashboard overlay mapping date keys to status labels.

        Unlike the index, no status is filtered out. When reservations share
        a day the label with the highest priority wins (Pending > Confirmed >
        Declined > other); on equal priority the earlier reservation keeps
        the day.

        Args:
            reservations: Reservation models or raw documents

        Returns:
            Dictionary mapping ``YYYY-MM-DD`` keys to labels such as "Pending"
        """
        overlay: dict[str, str] = {}

        for reservation in AvailabilityTransformer.to_reservations(reservations):
            try:
                start, end = AvailabilityTransformer._stay_range(reservation)
            except MalformedReservation:
                continue

            label = ReservationStatusMapper.display_label(reservation.status)
            score = ReservationStatusMapper.priority(label)

            for day in iter_days(start, end):
                key = day.isoformat()
                existing = overlay.get(key)
                if existing is None or ReservationStatusMapper.priority(existing) < score:
                    overlay[key] = label

        return overlay

    @staticmethod
    def reservations_on(
        reservations: Iterable[ReservationInput],
        day: DateLike,
    ) -> list[Reservation]:
        """Filter a reservation list to the stays occupying a given night.

        Args:
            reservations: Reservation models or raw documents
            day: Selected day; None returns every readable reservation

        Returns:
            Reservations with check_in <= day < check_out, input order kept
        """
        parsed = AvailabilityTransformer.to_reservations(reservations)
        target = to_local_date(day)
        if target is None:
            return parsed
        return [r for r in parsed if r.covers(target)]

    @staticmethod
    def sort_by_created_desc(reservations: Iterable[ReservationInput]) -> list[Reservation]:
        """Order reservations newest first; undated ones sort as the epoch."""
        parsed = AvailabilityTransformer.to_reservations(reservations)
        return sorted(
            parsed,
            key=lambda r: r.created_at.timestamp() if r.created_at else 0.0,
            reverse=True,
        )
