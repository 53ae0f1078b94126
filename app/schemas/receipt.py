"""
영수증 파싱 결과 스키마
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from app.schemas.base import Evidence


class CandidateItem(BaseModel):
    """파서가 추정한 품목 한 줄. 사용자가 확인하기 전까지는 추정치다."""
    product_name: str = ""
    quantity: int = 1
    price_per_unit: int = 0
    evidence: list[Evidence] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def total_price(self) -> int:
        return self.quantity * self.price_per_unit


class CandidateTransaction(BaseModel):
    """OCR 텍스트에서 추정한 거래 초안 (저장되지 않음)"""
    place: str
    date: date
    items: list[CandidateItem]
    total_amount: int
    total_source: str = Field(..., description="keyword | items")
    evidence: dict[str, Evidence] = Field(
        default_factory=dict,
        description="Evidence for place / date / total when they were found in the text",
    )


class ParseRequest(BaseModel):
    raw_text: str
    strategy: Optional[str] = Field(
        default=None, description="lookahead | lookback (default from settings)"
    )


class ScanResponse(BaseModel):
    raw_text: str
    candidate: CandidateTransaction
    receipt_url: str
