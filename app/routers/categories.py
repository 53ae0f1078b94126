"""
카테고리 API
"""
from __future__ import annotations

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.analytics.aggregator import UNCATEGORIZED_NAME
from app.database import get_db
from app.deps import get_current_user_id
from app.models import BudgetModel, CategoryModel, TransactionItemModel
from app.schemas import CategoryCreate, CategoryResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# ── GET /api/categories ──────────────────────────────────────────────────
@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)
):
    return (
        db.query(CategoryModel)
        .filter(CategoryModel.user_id == user_id)
        .order_by(CategoryModel.name)
        .all()
    )


# ── POST /api/categories ─────────────────────────────────────────────────
@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    req: CategoryCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    name = req.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="카테고리 이름을 입력해주세요.")
    if name == UNCATEGORIZED_NAME:
        raise HTTPException(status_code=400, detail=f"'{UNCATEGORIZED_NAME}'은(는) 사용할 수 없는 이름입니다.")

    existing = (
        db.query(CategoryModel)
        .filter(CategoryModel.user_id == user_id, CategoryModel.name == name)
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="이미 존재하는 카테고리입니다.")

    category = CategoryModel(id=str(uuid.uuid4()), user_id=user_id, name=name)
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        # 동시에 같은 이름이 들어온 경우
        db.rollback()
        raise HTTPException(status_code=409, detail="이미 존재하는 카테고리입니다.")
    db.refresh(category)
    logger.info("Created category %s for %s", category.id, user_id)
    return category


# ── DELETE /api/categories/{category_id} ─────────────────────────────────
@router.delete("/categories/{category_id}")
def delete_category(
    category_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    category = (
        db.query(CategoryModel)
        .filter(CategoryModel.id == category_id, CategoryModel.user_id == user_id)
        .first()
    )
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    # 품목은 미분류로 돌리고, 카테고리 예산은 함께 삭제
    unlinked = (
        db.query(TransactionItemModel)
        .filter(TransactionItemModel.category_id == category_id)
        .update({TransactionItemModel.category_id: None}, synchronize_session=False)
    )
    db.query(BudgetModel).filter(BudgetModel.category_id == category_id).delete(
        synchronize_session=False
    )
    db.delete(category)
    db.commit()
    logger.info("Deleted category %s and unlinked %d items", category_id, unlinked)
    return {"message": "Category deleted successfully", "category_id": category_id}
