"""
가계부 API의 JSON 스키마.

파서, 집계기, 라우터가 모두 이 Pydantic v2 모델을 주고받는다.
"""
from app.schemas.base import Evidence
from app.schemas.receipt import (
    CandidateItem,
    CandidateTransaction,
    ParseRequest,
    ScanResponse,
)
from app.schemas.ledger import (
    BudgetResponse,
    BudgetUpsert,
    CategoryCreate,
    CategoryResponse,
    TransactionCreate,
    TransactionItemCreate,
    TransactionItemResponse,
    TransactionResponse,
)
from app.schemas.analytics import (
    BudgetProgress,
    CalendarDay,
    CalendarResponse,
    CategoryColor,
    CategoryStat,
    DayTransaction,
    NarrativeRequest,
    NarrativeResponse,
    NarrativeStat,
    NavigationResponse,
    PeriodInfo,
    SummaryResponse,
    TrendMonth,
    TrendResponse,
)

__all__ = [
    "Evidence",
    "CandidateItem",
    "CandidateTransaction",
    "ParseRequest",
    "ScanResponse",
    "BudgetResponse",
    "BudgetUpsert",
    "CategoryCreate",
    "CategoryResponse",
    "TransactionCreate",
    "TransactionItemCreate",
    "TransactionItemResponse",
    "TransactionResponse",
    "BudgetProgress",
    "CalendarDay",
    "CalendarResponse",
    "CategoryColor",
    "CategoryStat",
    "DayTransaction",
    "NarrativeRequest",
    "NarrativeResponse",
    "NarrativeStat",
    "NavigationResponse",
    "PeriodInfo",
    "SummaryResponse",
    "TrendMonth",
    "TrendResponse",
]
