"""
Per-category aggregation of item amounts inside one period.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from app.schemas.analytics import CategoryStat

UNCATEGORIZED_ID = "uncategorized"
UNCATEGORIZED_NAME = "미분류"


@dataclass(frozen=True)
class ItemRow:
    """One persisted item as the aggregators see it."""
    total_price: int
    category_id: Optional[str] = None
    category_name: Optional[str] = None


def aggregate_by_category(rows: Iterable[ItemRow]) -> tuple[list[CategoryStat], int]:
    """Return ``(stats, grand_total)``.

    Items without a category share one ``uncategorized`` bucket. Buckets are
    sorted by amount, descending; ties keep first-seen order.
    """
    buckets: dict[str, dict] = {}
    total = 0
    for row in rows:
        key = row.category_id or UNCATEGORIZED_ID
        if key not in buckets:
            name = row.category_name if row.category_id else None
            buckets[key] = {"name": name or UNCATEGORIZED_NAME, "total": 0, "count": 0}
        amount = row.total_price or 0
        buckets[key]["total"] += amount
        buckets[key]["count"] += 1
        total += amount

    stats = [
        CategoryStat(
            category_id=key,
            category_name=b["name"],
            total_amount=b["total"],
            item_count=b["count"],
            percentage=(b["total"] * 100 / total) if total > 0 else 0.0,
        )
        for key, b in buckets.items()
    ]
    stats.sort(key=lambda s: s.total_amount, reverse=True)
    return stats, total


def spent_for(stats: list[CategoryStat], total: int, category_id: Optional[str]) -> int:
    """Spend the budget overlay compares against: whole period or one bucket."""
    if category_id is None:
        return total
    for stat in stats:
        if stat.category_id == category_id:
            return stat.total_amount
    return 0
