"""
Period windows and navigation.

Weeks run Monday through Sunday; months run from the 1st to the last day.
Everything here is a pure function of its arguments.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

WEEKLY = "weekly"
MONTHLY = "monthly"
VIEW_MODES = (WEEKLY, MONTHLY)

PREVIOUS = "previous"
NEXT = "next"
TODAY = "today"
DIRECTIONS = (PREVIOUS, NEXT, TODAY)


@dataclass(frozen=True)
class Period:
    view_mode: str
    reference_date: date
    start: date
    end: date

    @property
    def label(self) -> str:
        return period_label(self)


def week_bounds(ref: date) -> tuple[date, date]:
    monday = ref - timedelta(days=ref.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(ref: date) -> tuple[date, date]:
    last = calendar.monthrange(ref.year, ref.month)[1]
    return ref.replace(day=1), ref.replace(day=last)


def period_for(ref: date, view_mode: str) -> Period:
    if view_mode == WEEKLY:
        start, end = week_bounds(ref)
    elif view_mode == MONTHLY:
        start, end = month_bounds(ref)
    else:
        raise ValueError(f"unknown view mode: {view_mode}")
    return Period(view_mode=view_mode, reference_date=ref, start=start, end=end)


def period_start(ref: date, period_type: str) -> date:
    """Canonical first day of the week / month containing *ref* (budget key)."""
    return period_for(ref, period_type).start


def add_months(ref: date, months: int) -> date:
    """Shift by whole calendar months, clamping the day (Jan 31 + 1 → Feb 28/29)."""
    index = ref.year * 12 + (ref.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(ref.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def shift(ref: date, view_mode: str, steps: int) -> date:
    if view_mode == WEEKLY:
        return ref + timedelta(weeks=steps)
    if view_mode == MONTHLY:
        return add_months(ref, steps)
    raise ValueError(f"unknown view mode: {view_mode}")


def navigate(ref: date, view_mode: str, direction: str, today: date) -> date:
    """New reference date after a previous / next / today click."""
    if direction == PREVIOUS:
        return shift(ref, view_mode, -1)
    if direction == NEXT:
        return shift(ref, view_mode, 1)
    if direction == TODAY:
        return today
    raise ValueError(f"unknown direction: {direction}")


def period_label(period: Period) -> str:
    if period.view_mode == WEEKLY:
        s, e = period.start, period.end
        return f"{s.month}월 {s.day}일 - {e.month}월 {e.day}일"
    return f"{period.reference_date.year}년 {period.reference_date.month}월"


def month_label(ref: date) -> str:
    return f"{ref.year}년 {ref.month}월"
