"""Pydantic models for calendar view state and month grid cells."""

from datetime import date
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from staycal.models.availability import UnavailabilityRange


class CalendarViewState(BaseModel):
    """Displayed month of a calendar.

    ``month`` is 0-based (0 = January) internally; it is converted to
    1-based only at the day-click callback and the grid contract.
    """

    month: int = Field(ge=0, le=11)
    year: int
    selected_date: Optional[date] = None

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def for_date(cls, day: date) -> "CalendarViewState":
        return cls(month=day.month - 1, year=day.year)


class BlankCell(BaseModel):
    """Leading empty cell before the 1st of the month."""

    kind: Literal["blank"] = "blank"

    model_config = ConfigDict(frozen=True)


class DayCell(BaseModel):
    """One calendar day with its booking-state flags."""

    kind: Literal["day"] = "day"
    day: int
    calendar_date: date
    date_key: str
    is_today: bool = False
    is_past: bool = False
    is_selected: bool = False
    is_unavailable: bool = False
    covering_range: Optional[UnavailabilityRange] = None
    status_label: Optional[str] = None
    status_class: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def is_clickable(self) -> bool:
        """Past and unavailable days do not react to clicks in the range picker."""
        return not (self.is_past or self.is_unavailable)


CalendarCell = Union[BlankCell, DayCell]
