"""
Budget overlay for a period.
"""
from __future__ import annotations

from typing import Optional

from app.schemas.analytics import BudgetProgress


def budget_progress(
    amount: int,
    spent: int,
    budget_id: str = "",
    category_id: Optional[str] = None,
) -> BudgetProgress:
    return BudgetProgress(
        budget_id=budget_id,
        category_id=category_id,
        amount=amount,
        spent=spent,
        remaining=amount - spent,
        percentage=(spent * 100 / amount) if amount > 0 else 0.0,
        is_over_budget=spent > amount,
    )
