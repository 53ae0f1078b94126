"""
Month calendar grid with daily transaction totals.

The grid starts on the Sunday on or before the 1st and ends on the
Saturday on or after the last day, so its length is a multiple of 7.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from app.analytics.periods import month_bounds
from app.schemas.analytics import CalendarDay, DayTransaction


def grid_bounds(year: int, month: int) -> tuple[date, date]:
    first, last = month_bounds(date(year, month, 1))
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return start, end


def build_calendar(
    year: int, month: int, transactions: Iterable[tuple[date, DayTransaction]]
) -> list[CalendarDay]:
    by_date: dict[date, list[DayTransaction]] = {}
    for day, trx in transactions:
        by_date.setdefault(day, []).append(trx)

    start, end = grid_bounds(year, month)
    days: list[CalendarDay] = []
    current = start
    while current <= end:
        day_trx = by_date.get(current, [])
        days.append(
            CalendarDay(
                date=current,
                is_current_month=current.month == month,
                transactions=day_trx,
                total_amount=sum(t.total_amount for t in day_trx),
            )
        )
        current += timedelta(days=1)
    return days
