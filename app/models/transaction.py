"""
거래 / 거래 품목 모델
"""
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionModel(Base):
    """거래 (영수증 한 장 또는 수기 입력 한 건)"""
    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    place = Column(String, nullable=False)
    total_amount = Column(Integer, nullable=False, default=0)  # 원 단위 정수
    receipt_url = Column(String)  # 수기 입력이면 null
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    items = relationship(
        "TransactionItemModel",
        back_populates="transaction",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TransactionItemModel.position",
    )


class TransactionItemModel(Base):
    """거래 품목"""
    __tablename__ = "transaction_items"

    id = Column(String, primary_key=True)
    transaction_id = Column(
        String, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    product_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_per_unit = Column(Integer, nullable=False, default=0)
    total_price = Column(Integer, nullable=False, default=0)  # quantity * price_per_unit
    category_id = Column(String, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    is_manual_entry = Column(Boolean, default=True, nullable=False)

    transaction = relationship("TransactionModel", back_populates="items")
    category = relationship("CategoryModel", lazy="joined")
