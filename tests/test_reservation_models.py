"""Unit tests for reservation models and status mapping."""

from datetime import date

from staycal.models.reservation import Reservation
from staycal.models.reservation_status import (
    ReservationStatusMapper,
    StatusPriority,
)


class TestReservation:
    """Tests for Reservation parsing."""

    def test_parse_document(self, listing_snapshot):
        reservation = Reservation.model_validate(listing_snapshot[0])

        assert reservation.id == "r1"
        assert reservation.listing_id == "L1"
        assert reservation.check_in == date(2024, 6, 10)
        assert reservation.check_out == date(2024, 6, 12)
        assert reservation.status == "confirmed"
        assert reservation.nights == 2

    def test_status_case_preserved(self, listing_snapshot):
        reservation = Reservation.model_validate(listing_snapshot[1])

        assert reservation.status == "Pending"
        assert reservation.status_key == "pending"

    def test_timestamps_truncated_to_day(self, listing_snapshot):
        reservation = Reservation.model_validate(listing_snapshot[4])

        assert reservation.check_in == date(2024, 7, 1)
        assert reservation.check_out == date(2024, 7, 4)
        assert reservation.created_at is None

    def test_missing_dates_become_none(self, listing_snapshot):
        reservation = Reservation.model_validate(listing_snapshot[3])

        assert reservation.check_in is None
        assert reservation.has_stay_dates is False
        assert reservation.nights is None
        assert reservation.covers(date(2024, 6, 20)) is False

    def test_covers_excludes_check_out(self):
        reservation = Reservation(id=7, checkIn="2024-05-01", checkOut="2024-05-03", status=None)

        assert reservation.id == "7"
        assert reservation.status == ""
        assert reservation.covers(date(2024, 5, 1))
        assert reservation.covers(date(2024, 5, 2))
        assert not reservation.covers(date(2024, 5, 3))


class TestReservationStatusMapper:
    """Tests for ReservationStatusMapper."""

    def test_priority_order(self):
        assert ReservationStatusMapper.priority("Pending") == StatusPriority.PENDING
        assert ReservationStatusMapper.priority("CONFIRMED") == StatusPriority.CONFIRMED
        assert ReservationStatusMapper.priority("declined") == StatusPriority.DECLINED
        assert ReservationStatusMapper.priority("completed") == StatusPriority.UNSET
        assert ReservationStatusMapper.priority(None) == StatusPriority.UNSET
        assert StatusPriority.PENDING > StatusPriority.CONFIRMED > StatusPriority.DECLINED

    def test_display_label(self):
        assert ReservationStatusMapper.display_label("pending") == "Pending"
        assert ReservationStatusMapper.display_label("CONFIRMED") == "Confirmed"
        assert ReservationStatusMapper.display_label("") == "Booked"

    def test_css_class(self):
        assert ReservationStatusMapper.css_class("Pending") == "status-pending"
        assert ReservationStatusMapper.css_class("confirmed") == "status-confirmed"
        assert ReservationStatusMapper.css_class("Declined") == "status-declined"
        assert ReservationStatusMapper.css_class("cancelled") == "status-declined"
        assert ReservationStatusMapper.css_class("completed") == ""
        assert ReservationStatusMapper.css_class(None) == ""

    def test_blocking_statuses(self):
        assert ReservationStatusMapper.is_blocking("Pending")
        assert ReservationStatusMapper.is_blocking(" confirmed ")
        assert not ReservationStatusMapper.is_blocking("declined")
        assert not ReservationStatusMapper.is_blocking("refund_pending")
