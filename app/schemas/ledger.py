"""
거래 / 카테고리 / 예산 스키마
"""
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PeriodType = Literal["weekly", "monthly"]


class CategoryCreate(BaseModel):
    name: str


class CategoryResponse(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class TransactionItemCreate(BaseModel):
    product_name: str
    quantity: int = 1
    price_per_unit: int
    category_id: Optional[str] = None
    is_manual_entry: bool = True


class TransactionCreate(BaseModel):
    """거래 저장 요청. total_price / total_amount는 서버가 다시 계산한다."""
    date: date
    place: str
    items: list[TransactionItemCreate] = Field(..., min_length=1)
    receipt_url: Optional[str] = None


class TransactionItemResponse(BaseModel):
    id: str
    product_name: str
    quantity: int
    price_per_unit: int
    total_price: int
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    is_manual_entry: bool


class TransactionResponse(BaseModel):
    id: str
    date: date
    place: str
    total_amount: int
    receipt_url: Optional[str] = None
    created_at: datetime
    items: list[TransactionItemResponse] = Field(default_factory=list)


class BudgetUpsert(BaseModel):
    """예산 저장. reference_date가 없으면 오늘이 속한 기간에 저장한다."""
    period_type: PeriodType
    category_id: Optional[str] = None
    amount: int = Field(..., ge=0)
    reference_date: Optional[date] = None


class BudgetResponse(BaseModel):
    id: str
    period_type: PeriodType
    category_id: Optional[str] = None
    category_name: str
    amount: int
    start_date: date
