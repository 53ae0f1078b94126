"""
예산 API

GET    /api/budgets          — 기간(주/월)의 예산 목록
PUT    /api/budgets          — 예산 저장 (기간·카테고리당 하나)
DELETE /api/budgets/{id}     — 예산 삭제
"""
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.analytics.periods import period_start
from app.analytics.queries import fetch_budget
from app.database import get_db
from app.deps import get_current_user_id, get_today
from app.models import BudgetModel, CategoryModel
from app.schemas import BudgetResponse, BudgetUpsert

logger = logging.getLogger(__name__)
router = APIRouter()

WHOLE_PERIOD_LABEL = "전체"


def _to_response(budget: BudgetModel) -> BudgetResponse:
    return BudgetResponse(
        id=budget.id,
        period_type=budget.period_type,
        category_id=budget.category_id,
        category_name=budget.category.name if budget.category else WHOLE_PERIOD_LABEL,
        amount=budget.amount,
        start_date=budget.start_date,
    )


# ── GET /api/budgets ─────────────────────────────────────────────────────
@router.get("/budgets", response_model=List[BudgetResponse])
def list_budgets(
    period_type: Literal["weekly", "monthly"] = Query(default="monthly"),
    reference_date: Optional[date] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    start = period_start(reference_date or today, period_type)
    rows = (
        db.query(BudgetModel)
        .filter(
            BudgetModel.user_id == user_id,
            BudgetModel.period_type == period_type,
            BudgetModel.start_date == start,
        )
        .all()
    )
    return [_to_response(b) for b in rows]


# ── PUT /api/budgets ─────────────────────────────────────────────────────
@router.put("/budgets", response_model=BudgetResponse)
def upsert_budget(
    req: BudgetUpsert,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    if req.category_id:
        owned = (
            db.query(CategoryModel)
            .filter(CategoryModel.id == req.category_id, CategoryModel.user_id == user_id)
            .first()
        )
        if not owned:
            raise HTTPException(status_code=400, detail="존재하지 않는 카테고리입니다.")

    start = period_start(req.reference_date or today, req.period_type)
    category_id = req.category_id or None

    budget = fetch_budget(db, user_id, req.period_type, start, category_id)
    if budget:
        budget.amount = req.amount
    else:
        budget = BudgetModel(
            id=str(uuid.uuid4()),
            user_id=user_id,
            period_type=req.period_type,
            start_date=start,
            category_id=category_id,
            amount=req.amount,
        )
        db.add(budget)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.exception("Error saving budget for %s", user_id)
        raise HTTPException(status_code=409, detail="예산 저장 중 오류가 발생했습니다")

    db.refresh(budget)
    logger.info("Saved %s budget %s from %s: %d원", req.period_type, budget.id, start, budget.amount)
    return _to_response(budget)


# ── DELETE /api/budgets/{budget_id} ──────────────────────────────────────
@router.delete("/budgets/{budget_id}")
def delete_budget(
    budget_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    budget = (
        db.query(BudgetModel)
        .filter(BudgetModel.id == budget_id, BudgetModel.user_id == user_id)
        .first()
    )
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    db.delete(budget)
    db.commit()
    return {"message": "Budget deleted successfully", "budget_id": budget_id}
