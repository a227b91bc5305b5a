# core/utils/periods.py
from datetime import datetime, time, timedelta
from django.utils import timezone


def day_bounds(day):
    """
    Aware [start, end) datetimes covering one local calendar day.
    """
    start = timezone.make_aware(datetime.combine(day, time.min))
    end = timezone.make_aware(datetime.combine(day + timedelta(days=1), time.min))
    return start, end


def month_bounds(day):
    """
    Aware [start, end) datetimes covering the calendar month of ``day``.
    """
    first = day.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)

    return (
        timezone.make_aware(datetime.combine(first, time.min)),
        timezone.make_aware(datetime.combine(next_first, time.min)),
    )


def previous_month(day):
    first = day.replace(day=1)
    return first - timedelta(days=1)


def trailing_days(days, today=None):
    """
    The ``days`` local dates ending today, oldest first.
    """
    today = today or timezone.localdate()
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def get_period_dates(period: str):
    today = timezone.localdate()

    if period == "day":
        return day_bounds(today)

    if period == "month":
        return month_bounds(today)

    if period == "year":
        start = timezone.make_aware(datetime.combine(today.replace(month=1, day=1), time.min))
        end = timezone.make_aware(datetime.combine(today.replace(year=today.year + 1, month=1, day=1), time.min))
        return start, end

    raise ValueError(f"Invalid period: {period}")
