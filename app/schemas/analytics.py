"""
통계 / 추이 / 달력 / AI 분석 스키마
"""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ViewMode = Literal["weekly", "monthly"]


class PeriodInfo(BaseModel):
    view_mode: ViewMode
    reference_date: date
    start_date: date
    end_date: date
    label: str


class CategoryStat(BaseModel):
    category_id: str
    category_name: str
    total_amount: int
    item_count: int
    percentage: float


class BudgetProgress(BaseModel):
    budget_id: str
    category_id: Optional[str] = None
    amount: int
    spent: int
    remaining: int
    percentage: float
    is_over_budget: bool


class SummaryResponse(BaseModel):
    period: PeriodInfo
    stats: list[CategoryStat]
    total_amount: int
    budget: Optional[BudgetProgress] = None
    previous_date: date
    next_date: date
    generation: Optional[int] = Field(
        default=None, description="Echo of the request's generation stamp"
    )


class NavigationResponse(BaseModel):
    direction: str
    period: PeriodInfo


class TrendMonth(BaseModel):
    month: str
    start_date: date
    end_date: date
    total_amount: int
    categories: dict[str, int] = Field(default_factory=dict)


class CategoryColor(BaseModel):
    name: str
    color: str


class TrendResponse(BaseModel):
    months: list[TrendMonth]
    category_colors: list[CategoryColor]
    generation: Optional[int] = None


class DayTransaction(BaseModel):
    id: str
    place: str
    total_amount: int


class CalendarDay(BaseModel):
    date: date
    is_current_month: bool
    transactions: list[DayTransaction] = Field(default_factory=list)
    total_amount: int = 0


class CalendarResponse(BaseModel):
    year: int
    month: int
    days: list[CalendarDay]
    generation: Optional[int] = None


class NarrativeStat(BaseModel):
    category_name: str
    total_amount: int
    item_count: int
    percentage: float


class NarrativeRequest(BaseModel):
    period: str
    stats: list[NarrativeStat] = Field(default_factory=list)
    total_amount: int
    view_mode: ViewMode

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "period": "2025년 3월",
            "stats": [
                {"category_name": "식비", "total_amount": 320000, "item_count": 14, "percentage": 64.0},
                {"category_name": "교통", "total_amount": 180000, "item_count": 20, "percentage": 36.0},
            ],
            "total_amount": 500000,
            "view_mode": "monthly",
        }
    })


class NarrativeResponse(BaseModel):
    analysis: str
