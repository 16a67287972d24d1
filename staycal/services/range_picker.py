"""Check-in/check-out selection on top of the calendar navigator."""

from collections.abc import Callable
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from structlog import get_logger

from staycal.config.settings import settings
from staycal.exceptions import InvalidRangeSelection
from staycal.models.availability import AvailabilityIndex
from staycal.models.calendar import DayCell
from staycal.services.calendar_navigator import CalendarNavigator
from staycal.transformers.availability_transformer import AvailabilityTransformer
from staycal.utils.dates import DateLike, add_days, format_stay_dates, to_local_date

logger = get_logger(__name__)


class SelectionOutcome(str, Enum):
    """What a click or date input did to the selection."""

    STARTED = "started"  # new check-in, check-out cleared
    COMPLETED = "completed"  # check-out set to the clicked day
    SNAPPED = "snapped"  # check-out moved forward to the minimum stay
    UPDATED = "updated"  # direct date input accepted
    REJECTED = "rejected"  # invalid check-out, nothing changed
    IGNORED = "ignored"  # past or unavailable day, nothing changed


class SelectionResult(BaseModel):
    """Selection state after an interaction, plus any user-facing message."""

    outcome: SelectionOutcome
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    message: Optional[str] = None
    conflict: bool = False
    stay_label: Optional[str] = None  # e.g. "Mar 10 – Mar 12, 2024" once both dates are set


class RangePicker:
    """Interactive check-in/check-out range selection.

    Clicking starts a selection when nothing (or a complete range) is
    selected, and completes it otherwise. Stays shorter than the minimum
    are silently extended; a check-out at or before check-in is refused.
    Conflicts with existing reservations only produce a warning: the
    selection is still applied.
    """

    def __init__(
        self,
        index: AvailabilityIndex | None = None,
        min_stay_nights: int | None = None,
        today: Callable[[], date] = date.today,
        navigator: CalendarNavigator | None = None,
    ):
        """Initialize an empty selection.

        Args:
            index: Availability index for conflict checks and inert days
            min_stay_nights: Minimum nights (defaults to configured value)
            today: Provider of the current local date
            navigator: Optional navigator whose grid highlights the selection
        """
        self.index = index or AvailabilityIndex()
        self.min_stay_nights = (
            min_stay_nights if min_stay_nights is not None else settings.calendar.min_stay_nights
        )
        self._today = today
        self.navigator = navigator

        self.check_in: date | None = None
        self.check_out: date | None = None
        self.message: str | None = None
        self.conflict: bool = False

    def update_index(self, index: AvailabilityIndex) -> None:
        self.index = index

    def check_date_conflict(self, check_in: DateLike, check_out: DateLike) -> bool:
        """Advisory conflict check used by date-input handlers."""
        return AvailabilityTransformer.has_conflict(self.index, check_in, check_out)

    def minimum_check_out(self) -> date | None:
        """Earliest check-out allowed for the current check-in."""
        if self.check_in is None:
            return None
        return add_days(self.check_in, self.min_stay_nights)

    def reset_to_default(self) -> SelectionResult:
        """Preselect a stay starting tomorrow for the minimum number of nights."""
        self.check_in = add_days(self._today(), 1)
        self.check_out = add_days(self.check_in, self.min_stay_nights)
        return self._finish(SelectionOutcome.UPDATED, check_conflict=True)

    def is_inert(self, day: date) -> bool:
        """Past and unavailable days do not react to clicks."""
        return day < self._today() or self.index.is_blocked(day.isoformat())

    def handle_day_click(self, day: int, month: int, year: int) -> SelectionResult:
        """Navigator callback adapter taking a 1-based month."""
        return self.click(date(year, month, day))

    def click(self, day: date | DayCell) -> SelectionResult:
        """Apply a calendar click.

        Args:
            day: Clicked date, or the grid cell that was clicked

        Returns:
            SelectionResult describing the new selection
        """
        if isinstance(day, DayCell):
            inert = not day.is_clickable
            day = day.calendar_date
        else:
            inert = self.is_inert(day)

        if inert:
            return self._result(SelectionOutcome.IGNORED)

        if self.check_in is None or self.check_out is not None:
            self.check_in = day
            self.check_out = None
            return self._finish(SelectionOutcome.STARTED)

        try:
            self._validate_check_out(day)
        except InvalidRangeSelection as e:
            return self._reject(str(e))

        minimum = self.minimum_check_out()
        if day < minimum:
            self.check_out = minimum
            return self._finish(SelectionOutcome.SNAPPED, check_conflict=True)

        self.check_out = day
        return self._finish(SelectionOutcome.COMPLETED, check_conflict=True)

    def set_check_in(self, value: DateLike) -> SelectionResult:
        """Apply a check-in typed into a date input.

        Pushes check-out forward when it no longer leaves the minimum stay,
        then re-runs the conflict check.

        Args:
            value: New check-in (date-like)

        Returns:
            SelectionResult; ``conflict`` and ``message`` carry the advisory warning
        """
        new_check_in = to_local_date(value)
        if new_check_in is None:
            return self._result(SelectionOutcome.IGNORED)

        self.check_in = new_check_in
        minimum = self.minimum_check_out()
        if self.check_out is None or self.check_out < minimum:
            self.check_out = minimum

        return self._finish(SelectionOutcome.UPDATED, check_conflict=True)

    def set_check_out(self, value: DateLike) -> SelectionResult:
        """Apply a check-out typed into a date input.

        Args:
            value: New check-out (date-like)

        Returns:
            SelectionResult; REJECTED when it is not after check-in, SNAPPED
            when it was moved forward to the minimum stay
        """
        new_check_out = to_local_date(value)
        if new_check_out is None:
            return self._result(SelectionOutcome.IGNORED)

        try:
            self._validate_check_out(new_check_out)
        except InvalidRangeSelection as e:
            return self._reject(str(e))

        minimum = self.minimum_check_out()
        if minimum is not None and new_check_out < minimum:
            self.check_out = minimum
            return self._finish(SelectionOutcome.SNAPPED, check_conflict=True)

        self.check_out = new_check_out
        return self._finish(SelectionOutcome.UPDATED, check_conflict=True)

    def clear(self) -> SelectionResult:
        self.check_in = None
        self.check_out = None
        return self._finish(SelectionOutcome.UPDATED)

    def _validate_check_out(self, day: date) -> None:
        if self.check_in is not None and day <= self.check_in:
            raise InvalidRangeSelection(settings.calendar.checkout_before_checkin_message)

    def _reject(self, message: str) -> SelectionResult:
        logger.info(
            "Rejected check-out selection",
            check_in=self.check_in,
            message=message,
        )
        self.message = message
        return self._result(SelectionOutcome.REJECTED)

    def _finish(self, outcome: SelectionOutcome, check_conflict: bool = False) -> SelectionResult:
        self.conflict = False
        self.message = None

        if check_conflict and self.check_in is not None and self.check_out is not None:
            self.conflict = self.check_date_conflict(self.check_in, self.check_out)
            if self.conflict:
                self.message = settings.calendar.conflict_warning
                logger.warning(
                    "Selected dates conflict with existing reservations",
                    check_in=self.check_in,
                    check_out=self.check_out,
                )

        if self.navigator is not None:
            self.navigator.set_highlighted((self.check_in, self.check_out))

        return self._result(outcome)

    def _result(self, outcome: SelectionOutcome) -> SelectionResult:
        return SelectionResult(
            outcome=outcome,
            check_in=self.check_in,
            check_out=self.check_out,
            message=self.message,
            conflict=self.conflict,
            stay_label=format_stay_dates(self.check_in, self.check_out) or None,
        )
