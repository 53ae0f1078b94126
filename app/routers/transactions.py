"""
거래 API

POST   /api/transactions        — 거래 + 품목 저장 (한 트랜잭션)
GET    /api/transactions        — 거래 목록 (최신 날짜 순)
GET    /api/transactions/{id}   — 거래 하나
DELETE /api/transactions/{id}   — 거래 삭제 (품목 함께 삭제)
"""
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.database import get_db
from app.deps import get_current_user_id
from app.models import CategoryModel, TransactionItemModel, TransactionModel
from app.schemas import TransactionCreate, TransactionItemResponse, TransactionResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_response(trx: TransactionModel) -> TransactionResponse:
    return TransactionResponse(
        id=trx.id,
        date=trx.date,
        place=trx.place,
        total_amount=trx.total_amount,
        receipt_url=trx.receipt_url,
        created_at=trx.created_at,
        items=[
            TransactionItemResponse(
                id=it.id,
                product_name=it.product_name,
                quantity=it.quantity,
                price_per_unit=it.price_per_unit,
                total_price=it.total_price,
                category_id=it.category_id,
                category_name=it.category.name if it.category else None,
                is_manual_entry=it.is_manual_entry,
            )
            for it in trx.items
        ],
    )


def _validate(req: TransactionCreate, user_id: str, db: Session) -> None:
    """Reject bad input before anything is written."""
    if not req.place.strip():
        raise HTTPException(status_code=400, detail="장소를 입력해주세요.")
    if any(not it.product_name.strip() for it in req.items):
        raise HTTPException(status_code=400, detail="모든 품목의 상품명을 입력해주세요.")
    if any(it.price_per_unit <= 0 for it in req.items):
        raise HTTPException(status_code=400, detail="모든 품목의 가격을 입력해주세요.")
    if any(it.quantity <= 0 for it in req.items):
        raise HTTPException(status_code=400, detail="수량은 1 이상이어야 합니다.")

    category_ids = {it.category_id for it in req.items if it.category_id}
    if category_ids:
        owned = {
            row[0]
            for row in db.query(CategoryModel.id).filter(
                CategoryModel.user_id == user_id, CategoryModel.id.in_(category_ids)
            )
        }
        missing = category_ids - owned
        if missing:
            raise HTTPException(status_code=400, detail="존재하지 않는 카테고리입니다.")


def _get_owned(transaction_id: str, user_id: str, db: Session) -> TransactionModel:
    trx = (
        db.query(TransactionModel)
        .options(selectinload(TransactionModel.items))
        .filter(TransactionModel.id == transaction_id, TransactionModel.user_id == user_id)
        .first()
    )
    if not trx:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return trx


# ── POST /api/transactions ───────────────────────────────────────────────
@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    req: TransactionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    _validate(req, user_id, db)

    items = [
        TransactionItemModel(
            id=str(uuid.uuid4()),
            position=pos,
            product_name=it.product_name.strip(),
            quantity=it.quantity,
            price_per_unit=it.price_per_unit,
            total_price=it.quantity * it.price_per_unit,
            category_id=it.category_id or None,
            is_manual_entry=it.is_manual_entry,
        )
        for pos, it in enumerate(req.items)
    ]
    trx = TransactionModel(
        id=str(uuid.uuid4()),
        user_id=user_id,
        date=req.date,
        place=req.place.strip(),
        total_amount=sum(it.total_price for it in items),
        receipt_url=req.receipt_url or None,
        items=items,
    )

    # 거래와 품목을 함께 커밋: 품목 저장이 실패하면 거래도 남지 않는다
    db.add(trx)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving transaction for %s", user_id)
        raise HTTPException(status_code=500, detail="저장 중 오류가 발생했습니다.")

    logger.info("Stored transaction %s (%d items, %d원)", trx.id, len(items), trx.total_amount)
    return _to_response(_get_owned(trx.id, user_id, db))


# ── GET /api/transactions ────────────────────────────────────────────────
@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    query = (
        db.query(TransactionModel)
        .options(selectinload(TransactionModel.items))
        .filter(TransactionModel.user_id == user_id)
    )
    if start_date:
        query = query.filter(TransactionModel.date >= start_date)
    if end_date:
        query = query.filter(TransactionModel.date <= end_date)
    rows = query.order_by(TransactionModel.date.desc(), TransactionModel.created_at.desc()).all()
    logger.info("Found %d transactions for %s", len(rows), user_id)
    return [_to_response(r) for r in rows]


# ── GET /api/transactions/{transaction_id} ───────────────────────────────
@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return _to_response(_get_owned(transaction_id, user_id, db))


# ── DELETE /api/transactions/{transaction_id} ────────────────────────────
@router.delete("/transactions/{transaction_id}")
def delete_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    trx = _get_owned(transaction_id, user_id, db)
    item_count = len(trx.items)
    db.delete(trx)
    db.commit()
    logger.info("Deleted transaction %s with %d items", transaction_id, item_count)
    return {"message": "Transaction deleted successfully", "transaction_id": transaction_id}
