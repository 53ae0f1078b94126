"""
통계 API

GET  /api/analytics/summary     — 주간/월간 카테고리별 지출 + 예산 대비
GET  /api/analytics/navigate    — 이전/다음/오늘 기간 계산
GET  /api/analytics/trends      — 최근 N개월 추이
GET  /api/calendar              — 월 달력 (일별 거래 합계)
POST /api/analytics/narrative   — AI 지출 분석

Every read accepts a ``generation`` stamp and echoes it back so the client
can discard responses to requests it has already superseded.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.analytics.aggregator import aggregate_by_category, spent_for
from app.analytics.budget import budget_progress
from app.analytics.calendar_view import build_calendar, grid_bounds
from app.analytics.periods import navigate, period_for, shift
from app.analytics.queries import fetch_budget, fetch_day_transactions, fetch_item_rows
from app.analytics.trends import TREND_MONTH_CHOICES, build_trend, month_ranges
from app.clients import NarrativeError, Narrator
from app.database import get_db
from app.deps import get_current_user_id, get_narrator, get_today
from app.schemas import (
    CalendarResponse,
    NarrativeRequest,
    NarrativeResponse,
    NavigationResponse,
    PeriodInfo,
    SummaryResponse,
    TrendResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

ViewModeParam = Literal["weekly", "monthly"]


def _period_info(ref: date, view_mode: str) -> PeriodInfo:
    period = period_for(ref, view_mode)
    return PeriodInfo(
        view_mode=view_mode,
        reference_date=ref,
        start_date=period.start,
        end_date=period.end,
        label=period.label,
    )


# ── GET /api/analytics/summary ───────────────────────────────────────────
@router.get("/analytics/summary", response_model=SummaryResponse)
def summary(
    view_mode: ViewModeParam = Query(default="monthly"),
    reference_date: Optional[date] = Query(default=None),
    budget_category_id: Optional[str] = Query(default=None),
    generation: Optional[int] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    ref = reference_date or today
    info = _period_info(ref, view_mode)

    rows = fetch_item_rows(db, user_id, info.start_date, info.end_date)
    stats, total = aggregate_by_category(rows)
    logger.info(
        "Summary %s %s..%s: %d items, %d buckets, %d원",
        view_mode, info.start_date, info.end_date, len(rows), len(stats), total,
    )

    overlay = None
    budget = fetch_budget(db, user_id, view_mode, info.start_date, budget_category_id)
    if budget:
        overlay = budget_progress(
            amount=budget.amount,
            spent=spent_for(stats, total, budget_category_id),
            budget_id=budget.id,
            category_id=budget.category_id,
        )

    return SummaryResponse(
        period=info,
        stats=stats,
        total_amount=total,
        budget=overlay,
        previous_date=shift(ref, view_mode, -1),
        next_date=shift(ref, view_mode, 1),
        generation=generation,
    )


# ── GET /api/analytics/navigate ──────────────────────────────────────────
@router.get("/analytics/navigate", response_model=NavigationResponse)
def navigate_period(
    direction: Literal["previous", "next", "today"],
    view_mode: ViewModeParam = Query(default="monthly"),
    reference_date: Optional[date] = Query(default=None),
    today: date = Depends(get_today),
):
    new_ref = navigate(reference_date or today, view_mode, direction, today)
    return NavigationResponse(direction=direction, period=_period_info(new_ref, view_mode))


# ── GET /api/analytics/trends ────────────────────────────────────────────
@router.get("/analytics/trends", response_model=TrendResponse)
def trends(
    months: int = Query(default=6),
    reference_date: Optional[date] = Query(default=None),
    generation: Optional[int] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    if months not in TREND_MONTH_CHOICES:
        raise HTTPException(
            status_code=400,
            detail=f"months must be one of {', '.join(str(m) for m in TREND_MONTH_CHOICES)}",
        )
    ranges = month_ranges(reference_date or today, months)
    rows_per_month = [fetch_item_rows(db, user_id, r.start, r.end) for r in ranges]
    series, colors = build_trend(ranges, rows_per_month)
    return TrendResponse(months=series, category_colors=colors, generation=generation)


# ── GET /api/calendar ────────────────────────────────────────────────────
@router.get("/calendar", response_model=CalendarResponse)
def month_calendar(
    year: Optional[int] = Query(default=None, ge=1900, le=2999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    generation: Optional[int] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    year = year or today.year
    month = month or today.month
    start, end = grid_bounds(year, month)
    transactions = fetch_day_transactions(db, user_id, start, end)
    return CalendarResponse(
        year=year,
        month=month,
        days=build_calendar(year, month, transactions),
        generation=generation,
    )


# ── POST /api/analytics/narrative ────────────────────────────────────────
@router.post("/analytics/narrative", response_model=NarrativeResponse)
def narrative(
    req: NarrativeRequest,
    user_id: str = Depends(get_current_user_id),
    narrator: Narrator = Depends(get_narrator),
):
    if not req.stats:
        raise HTTPException(status_code=400, detail="분석할 데이터가 없습니다")
    try:
        analysis = narrator.analyze(req)
    except NarrativeError as e:
        logger.error("Narrative generation failed: %s", e)
        raise HTTPException(status_code=500, detail="AI 분석 중 오류가 발생했습니다")
    return NarrativeResponse(analysis=analysis)
