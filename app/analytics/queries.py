"""
Raw-row fetches for the aggregators.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.analytics.aggregator import ItemRow
from app.models import BudgetModel, CategoryModel, TransactionItemModel, TransactionModel
from app.schemas.analytics import DayTransaction


def fetch_item_rows(db: Session, user_id: str, start: date, end: date) -> list[ItemRow]:
    """Items whose parent transaction date falls in ``[start, end]``."""
    rows = (
        db.query(
            TransactionItemModel.total_price,
            TransactionItemModel.category_id,
            CategoryModel.name,
        )
        .join(TransactionModel, TransactionItemModel.transaction_id == TransactionModel.id)
        .outerjoin(CategoryModel, TransactionItemModel.category_id == CategoryModel.id)
        .filter(
            TransactionModel.user_id == user_id,
            TransactionModel.date >= start,
            TransactionModel.date <= end,
        )
        .order_by(TransactionModel.date, TransactionModel.created_at, TransactionItemModel.position)
        .all()
    )
    return [
        ItemRow(total_price=r[0] or 0, category_id=r[1], category_name=r[2])
        for r in rows
    ]


def fetch_budget(
    db: Session,
    user_id: str,
    period_type: str,
    start_date: date,
    category_id: Optional[str] = None,
) -> Optional[BudgetModel]:
    query = db.query(BudgetModel).filter(
        BudgetModel.user_id == user_id,
        BudgetModel.period_type == period_type,
        BudgetModel.start_date == start_date,
    )
    if category_id is None:
        query = query.filter(BudgetModel.category_id.is_(None))
    else:
        query = query.filter(BudgetModel.category_id == category_id)
    return query.first()


def fetch_day_transactions(
    db: Session, user_id: str, start: date, end: date
) -> list[tuple[date, DayTransaction]]:
    rows = (
        db.query(TransactionModel)
        .filter(
            TransactionModel.user_id == user_id,
            TransactionModel.date >= start,
            TransactionModel.date <= end,
        )
        .order_by(TransactionModel.date, TransactionModel.created_at)
        .all()
    )
    return [
        (t.date, DayTransaction(id=t.id, place=t.place, total_amount=t.total_amount))
        for t in rows
    ]
