"""
Multi-month spending trend.

Each month is aggregated on its own; the series is oldest-first.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from app.analytics.aggregator import UNCATEGORIZED_NAME, ItemRow
from app.analytics.periods import add_months, month_bounds, month_label
from app.schemas.analytics import CategoryColor, TrendMonth

TREND_MONTH_CHOICES = (3, 6, 12)

PALETTE = [
    "#3b82f6",  # blue
    "#10b981",  # green
    "#f59e0b",  # yellow
    "#ef4444",  # red
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#6366f1",  # indigo
    "#f97316",  # orange
]


@dataclass(frozen=True)
class MonthRange:
    label: str
    start: date
    end: date


def month_ranges(ref: date, months: int) -> list[MonthRange]:
    """*months* consecutive calendar months ending with the month of *ref*."""
    first_of_ref = ref.replace(day=1)
    ranges: list[MonthRange] = []
    for back in range(months - 1, -1, -1):
        month_start = add_months(first_of_ref, -back)
        start, end = month_bounds(month_start)
        ranges.append(MonthRange(label=month_label(start), start=start, end=end))
    return ranges


def summarize_month(rng: MonthRange, rows: Iterable[ItemRow]) -> TrendMonth:
    totals: dict[str, int] = {}
    total = 0
    for row in rows:
        amount = row.total_price or 0
        name = row.category_name or UNCATEGORIZED_NAME
        totals[name] = totals.get(name, 0) + amount
        total += amount
    return TrendMonth(
        month=rng.label,
        start_date=rng.start,
        end_date=rng.end,
        total_amount=total,
        categories=totals,
    )


def assign_colors(series: Sequence[TrendMonth]) -> list[CategoryColor]:
    """Colour per category name in first-seen order across the series."""
    names: list[str] = []
    for month in series:
        for name in month.categories:
            if name not in names:
                names.append(name)
    return [
        CategoryColor(name=name, color=PALETTE[idx % len(PALETTE)])
        for idx, name in enumerate(names)
    ]


def build_trend(
    ranges: Sequence[MonthRange], rows_per_month: Sequence[Iterable[ItemRow]]
) -> tuple[list[TrendMonth], list[CategoryColor]]:
    series = [summarize_month(rng, rows) for rng, rows in zip(ranges, rows_per_month)]
    return series, assign_colors(series)
