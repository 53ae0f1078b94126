"""
예산 모델
"""
from sqlalchemy import Column, Date, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class BudgetModel(Base):
    """주간/월간 예산. category_id가 null이면 기간 전체 예산"""
    __tablename__ = "budgets"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    period_type = Column(String, nullable=False)  # weekly, monthly
    start_date = Column(Date, nullable=False)  # 주의 월요일 또는 월의 1일
    category_id = Column(String, ForeignKey("categories.id", ondelete="CASCADE"))
    amount = Column(Integer, nullable=False, default=0)

    category = relationship("CategoryModel", lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "user_id", "period_type", "start_date", "category_id",
            name="uq_budgets_user_period_category",
        ),
        # NULL은 서로 다른 값으로 취급되므로 기간 전체 예산은 부분 인덱스로 막는다
        Index(
            "uq_budgets_user_period_whole",
            "user_id", "period_type", "start_date",
            unique=True,
            sqlite_where=category_id.is_(None),
            postgresql_where=category_id.is_(None),
        ),
    )
