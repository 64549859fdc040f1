"""Calendar date helpers for monthly billing"""

import calendar
from datetime import date

from dateutil.relativedelta import relativedelta


def month_start(d: date) -> date:
    """First day of the month containing d"""
    return d.replace(day=1)


def clamp_day(year: int, month: int, day: int) -> date:
    """Date for year/month with day clamped into the month's valid range"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def add_months(d: date, months: int) -> date:
    """Calendar-month addition (short months clamp to their last day)"""
    return d + relativedelta(months=months)


def day_in_month(anchor: date, months: int, day: int) -> date:
    """
    Date with the given day-of-month, `months` calendar months after anchor's month.

    The day is re-clamped for every target month, so a day of 31 gives
    Jan 31, Feb 28, Mar 31 instead of drifting to the 28th.
    """
    target = add_months(month_start(anchor), months)
    return clamp_day(target.year, target.month, day)
