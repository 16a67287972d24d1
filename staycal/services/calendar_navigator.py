"""Month-at-a-time calendar navigation and grid layout."""

from collections.abc import Callable, Iterable
from datetime import date

from structlog import get_logger

from staycal.config.settings import settings
from staycal.models.availability import AvailabilityIndex
from staycal.models.calendar import BlankCell, CalendarCell, CalendarViewState, DayCell
from staycal.models.reservation_status import ReservationStatusMapper
from staycal.transformers.availability_transformer import AvailabilityTransformer
from staycal.utils.dates import DateLike, days_in_month, first_weekday, parse_date_param, to_local_date

logger = get_logger(__name__)

# Receives (day, 1-based month, year)
DayClickCallback = Callable[[int, int, int], None]


class CalendarNavigator:
    """View state of a navigable month calendar.

    The navigator only ever changes month through prev(), next() and
    jump_to_today(); reservation data never moves it. Availability and the
    status overlay are snapshots swapped in by the owning view.

    When an ``on_day_click`` callback is given, day clicks are forwarded to
    it with a 1-based month (standalone display mode). Otherwise clicks set
    ``selected_date`` on the navigator itself.
    """

    def __init__(
        self,
        index: AvailabilityIndex | None = None,
        overlay: dict[str, str] | None = None,
        on_day_click: DayClickCallback | None = None,
        today: Callable[[], date] = date.today,
        month_names: list[str] | None = None,
    ):
        """Initialize the navigator on the current month.

        Args:
            index: Availability index used for unavailable days
            overlay: Date key to status label map for booking overlays
            on_day_click: Optional callback for day clicks
            today: Provider of the current local date
            month_names: Month names for titles, January first
        """
        self._today = today
        self.index = index or AvailabilityIndex()
        self.overlay = overlay or {}
        self.on_day_click = on_day_click
        self.month_names = month_names or settings.calendar.month_names
        self.highlighted: frozenset[date] = frozenset()
        self.state = CalendarViewState.for_date(self._today())

    @property
    def month(self) -> int:
        """Displayed month, 0-based."""
        return self.state.month

    @property
    def year(self) -> int:
        return self.state.year

    @property
    def selected_date(self) -> date | None:
        return self.state.selected_date

    @property
    def title(self) -> str:
        """Displayed month title, e.g. "January 2024"."""
        return f"{self.month_names[self.state.month]} {self.state.year}"

    def prev(self) -> CalendarViewState:
        """Move to the previous month, wrapping into the previous year.

        January of year 1 is the earliest month that can be shown.
        """
        if self.state.month == 0 and self.state.year <= date.min.year:
            logger.warning("Already at earliest displayable month", year=self.state.year)
        elif self.state.month == 0:
            self.state = self.state.model_copy(update={"month": 11, "year": self.state.year - 1})
        else:
            self.state = self.state.model_copy(update={"month": self.state.month - 1})
        return self.state

    def next(self) -> CalendarViewState:
        """Move to the next month, wrapping into the next year.

        December of year 9999 is the latest month that can be shown.
        """
        if self.state.month == 11 and self.state.year >= date.max.year:
            logger.warning("Already at latest displayable month", year=self.state.year)
        elif self.state.month == 11:
            self.state = self.state.model_copy(update={"month": 0, "year": self.state.year + 1})
        else:
            self.state = self.state.model_copy(update={"month": self.state.month + 1})
        return self.state

    def jump_to_today(self) -> CalendarViewState:
        """Show the month containing today; the selection is kept."""
        today = self._today()
        self.state = self.state.model_copy(update={"month": today.month - 1, "year": today.year})
        return self.state

    def select_day(self, day: int) -> None:
        """Handle a click on a day of the displayed month.

        Args:
            day: Day of month (1-based)
        """
        month = self.state.month + 1
        if not 1 <= day <= days_in_month(self.state.year, month):
            logger.warning(
                "Ignoring click outside displayed month",
                day=day,
                month=month,
                year=self.state.year,
            )
            return

        if self.on_day_click is not None:
            self.on_day_click(day, month, self.state.year)
        else:
            self.state = self.state.model_copy(
                update={"selected_date": date(self.state.year, month, day)}
            )

    def set_selected_date(self, value: DateLike) -> date | None:
        """Set or clear the selected day.

        Strings are read as ``YYYY-MM-DD`` deep-link parameters. Values that
        do not parse leave the current selection untouched.

        Args:
            value: Date-like value, or None to clear

        Returns:
            The selected date after the call
        """
        if value is None:
            selected = None
        elif isinstance(value, str):
            selected = parse_date_param(value)
            if selected is None:
                logger.debug("Ignoring invalid date parameter", value=value)
                return self.state.selected_date
        else:
            selected = to_local_date(value)
            if selected is None:
                return self.state.selected_date

        self.state = self.state.model_copy(update={"selected_date": selected})
        return selected

    def set_highlighted(self, dates: Iterable[date | None]) -> None:
        """Mark extra days as selected, e.g. a pending check-in/check-out pair."""
        self.highlighted = frozenset(d for d in dates if d is not None)

    def update_index(self, index: AvailabilityIndex) -> None:
        self.index = index

    def update_overlay(self, overlay: dict[str, str]) -> None:
        self.overlay = dict(overlay)

    def get_month_grid(self, month: int | None = None, year: int | None = None) -> list[CalendarCell]:
        """Lay out a month as leading blanks followed by one cell per day.

        The number of blanks is the weekday of the 1st (0 = Sunday). No
        trailing blanks are added.

        Args:
            month: Month to lay out, 1-based (defaults to the displayed month)
            year: Year to lay out (defaults to the displayed year)

        Returns:
            Ordered list of BlankCell and DayCell

        Raises:
            ValueError: If month is not in 1..12
        """
        month = self.state.month + 1 if month is None else month
        year = self.state.year if year is None else year
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")

        today = self._today()
        selected = self.state.selected_date

        cells: list[CalendarCell] = [BlankCell() for _ in range(first_weekday(year, month))]

        for day in range(1, days_in_month(year, month) + 1):
            current = date(year, month, day)
            key = current.isoformat()
            label = self.overlay.get(key)
            cells.append(
                DayCell(
                    day=day,
                    calendar_date=current,
                    date_key=key,
                    is_today=current == today,
                    is_past=current < today,
                    is_selected=current == selected or current in self.highlighted,
                    is_unavailable=self.index.is_blocked(key),
                    covering_range=AvailabilityTransformer.range_covering(self.index, current),
                    status_label=label,
                    status_class=ReservationStatusMapper.css_class(label),
                )
            )

        return cells
