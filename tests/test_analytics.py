"""
Unit tests for the aggregators — periods, category buckets, budget overlay, trends, calendar.
"""
from datetime import date, timedelta

import pytest

from app.analytics.aggregator import (
    UNCATEGORIZED_ID,
    UNCATEGORIZED_NAME,
    ItemRow,
    aggregate_by_category,
    spent_for,
)
from app.analytics.budget import budget_progress
from app.analytics.calendar_view import build_calendar, grid_bounds
from app.analytics.periods import (
    add_months,
    month_bounds,
    navigate,
    period_for,
    period_start,
    week_bounds,
)
from app.analytics.trends import PALETTE, assign_colors, build_trend, month_ranges
from app.schemas import DayTransaction, TrendMonth

WEDNESDAY = date(2025, 3, 19)


# =====================================================================
# Periods
# =====================================================================
class TestPeriods:
    def test_week_is_monday_to_sunday_for_every_day_of_a_year(self):
        day = date(2024, 1, 1)
        while day.year == 2024:
            start, end = week_bounds(day)
            assert start.weekday() == 0
            assert end.weekday() == 6
            assert end - start == timedelta(days=6)
            assert start <= day <= end
            day += timedelta(days=1)

    def test_sunday_belongs_to_the_week_before(self):
        assert week_bounds(date(2025, 3, 23)) == (date(2025, 3, 17), date(2025, 3, 23))

    @pytest.mark.parametrize(
        "ref, last_day",
        [
            (date(2024, 2, 10), 29),
            (date(2023, 2, 10), 28),
            (date(2025, 4, 30), 30),
            (date(2025, 12, 1), 31),
        ],
    )
    def test_month_bounds(self, ref, last_day):
        start, end = month_bounds(ref)
        assert start == ref.replace(day=1)
        assert end.day == last_day
        assert end.month == ref.month

    def test_period_for_unknown_mode(self):
        with pytest.raises(ValueError):
            period_for(WEDNESDAY, "daily")

    def test_labels(self):
        assert period_for(WEDNESDAY, "weekly").label == "3월 17일 - 3월 23일"
        assert period_for(WEDNESDAY, "monthly").label == "2025년 3월"

    def test_weekly_previous_is_seven_days_earlier(self):
        prev = navigate(WEDNESDAY, "weekly", "previous", today=WEDNESDAY)
        assert prev == WEDNESDAY - timedelta(days=7)
        assert period_for(prev, "weekly").start == date(2025, 3, 10)

    def test_monthly_navigation_clamps_day(self):
        assert navigate(date(2024, 1, 31), "monthly", "next", today=WEDNESDAY) == date(2024, 2, 29)
        assert navigate(date(2025, 1, 15), "monthly", "previous", today=WEDNESDAY) == date(2024, 12, 15)

    def test_today_resets(self):
        assert navigate(date(2020, 1, 1), "weekly", "today", today=WEDNESDAY) == WEDNESDAY

    def test_add_months_across_years(self):
        assert add_months(date(2025, 11, 30), 3) == date(2026, 2, 28)
        assert add_months(date(2025, 1, 1), -13) == date(2023, 12, 1)

    def test_budget_period_start(self):
        assert period_start(WEDNESDAY, "weekly") == date(2025, 3, 17)
        assert period_start(WEDNESDAY, "monthly") == date(2025, 3, 1)


# =====================================================================
# Category aggregation
# =====================================================================
class TestAggregate:
    def test_buckets_sorted_with_uncategorized_once(self):
        rows = [
            ItemRow(1000, "c1", "식비"),
            ItemRow(500, None, None),
            ItemRow(3000, "c2", "교통"),
            ItemRow(700, None, None),
            ItemRow(2000, "c1", "식비"),
        ]
        stats, total = aggregate_by_category(rows)
        assert total == 7200
        assert [s.category_id for s in stats] == ["c1", "c2", UNCATEGORIZED_ID]
        uncategorized = [s for s in stats if s.category_name == UNCATEGORIZED_NAME]
        assert len(uncategorized) == 1
        assert uncategorized[0].total_amount == 1200
        assert uncategorized[0].item_count == 2

    def test_percentages_sum_to_hundred(self):
        rows = [ItemRow(1, "a", "A"), ItemRow(1, "b", "B"), ItemRow(1, "c", "C")]
        stats, _ = aggregate_by_category(rows)
        assert sum(s.percentage for s in stats) == pytest.approx(100.0)

    def test_zero_total_gives_zero_percentages(self):
        stats, total = aggregate_by_category([ItemRow(0, "a", "A"), ItemRow(0, None)])
        assert total == 0
        assert all(s.percentage == 0 for s in stats)

    def test_empty(self):
        assert aggregate_by_category([]) == ([], 0)

    def test_ties_keep_encounter_order(self):
        rows = [ItemRow(100, "z", "Z"), ItemRow(100, "a", "A"), ItemRow(100, "m", "M")]
        stats, _ = aggregate_by_category(rows)
        assert [s.category_id for s in stats] == ["z", "a", "m"]

    def test_spent_for(self):
        stats, total = aggregate_by_category([ItemRow(300, "a", "A"), ItemRow(200, None)])
        assert spent_for(stats, total, None) == 500
        assert spent_for(stats, total, "a") == 300
        assert spent_for(stats, total, "missing") == 0


# =====================================================================
# Budget overlay
# =====================================================================
class TestBudgetProgress:
    def test_over_budget(self):
        p = budget_progress(amount=100000, spent=120000)
        assert p.is_over_budget is True
        assert p.remaining == -20000
        assert p.percentage == 120.0

    def test_under_budget(self):
        p = budget_progress(amount=100000, spent=25000)
        assert p.is_over_budget is False
        assert p.remaining == 75000
        assert p.percentage == 25.0

    def test_exactly_on_budget_is_not_over(self):
        assert budget_progress(amount=5000, spent=5000).is_over_budget is False

    def test_zero_budget(self):
        p = budget_progress(amount=0, spent=1000)
        assert p.percentage == 0.0
        assert p.is_over_budget is True


# =====================================================================
# Trends
# =====================================================================
class TestTrends:
    def test_month_ranges_oldest_first(self):
        ranges = month_ranges(date(2025, 1, 15), 3)
        assert [r.label for r in ranges] == ["2024년 11월", "2024년 12월", "2025년 1월"]
        assert ranges[0].start == date(2024, 11, 1)
        assert ranges[-1].end == date(2025, 1, 31)

    @pytest.mark.parametrize("months", [3, 6, 12])
    def test_month_count(self, months):
        assert len(month_ranges(WEDNESDAY, months)) == months

    def test_build_trend(self):
        ranges = month_ranges(WEDNESDAY, 3)
        rows = [
            [ItemRow(1000, "c1", "식비")],
            [],
            [ItemRow(500, "c2", "교통"), ItemRow(700, None, None), ItemRow(300, "c1", "식비")],
        ]
        series, colors = build_trend(ranges, rows)
        assert [m.total_amount for m in series] == [1000, 0, 1500]
        assert series[2].categories == {"교통": 500, UNCATEGORIZED_NAME: 700, "식비": 300}
        assert [c.name for c in colors] == ["식비", "교통", UNCATEGORIZED_NAME]
        assert colors[0].color == PALETTE[0]

    def test_palette_cycles(self):
        names = {f"cat{i}": 1 for i in range(len(PALETTE) + 1)}
        series = [TrendMonth(month="m", start_date=WEDNESDAY, end_date=WEDNESDAY, total_amount=9, categories=names)]
        colors = assign_colors(series)
        assert colors[len(PALETTE)].color == PALETTE[0]


# =====================================================================
# Calendar
# =====================================================================
class TestCalendar:
    def test_grid_bounds(self):
        start, end = grid_bounds(2025, 3)
        assert start == date(2025, 2, 23)
        assert end == date(2025, 4, 5)
        assert start.weekday() == 6
        assert end.weekday() == 5

    def test_grid_is_whole_weeks(self):
        for month in range(1, 13):
            days = build_calendar(2025, month, [])
            assert len(days) % 7 == 0

    def test_daily_totals(self):
        trx = [
            (date(2025, 3, 3), DayTransaction(id="t1", place="A", total_amount=1000)),
            (date(2025, 3, 3), DayTransaction(id="t2", place="B", total_amount=2500)),
            (date(2025, 2, 24), DayTransaction(id="t3", place="C", total_amount=700)),
        ]
        days = {d.date: d for d in build_calendar(2025, 3, trx)}
        assert days[date(2025, 3, 3)].total_amount == 3500
        assert len(days[date(2025, 3, 3)].transactions) == 2
        assert days[date(2025, 2, 24)].is_current_month is False
        assert days[date(2025, 3, 4)].total_amount == 0
