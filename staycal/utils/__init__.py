"""Date utilities."""

from staycal.utils.dates import (
    add_days,
    date_key,
    days_in_month,
    first_weekday,
    format_stay_dates,
    iter_days,
    nights_between,
    parse_date_param,
    to_local_date,
    to_local_datetime,
)

__all__ = [
    "add_days",
    "date_key",
    "days_in_month",
    "first_weekday",
    "format_stay_dates",
    "iter_days",
    "nights_between",
    "parse_date_param",
    "to_local_date",
    "to_local_datetime",
]
