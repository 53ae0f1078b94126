"""
카테고리 모델
"""
from sqlalchemy import Column, String, UniqueConstraint

from app.database import Base


class CategoryModel(Base):
    """사용자별 지출 카테고리"""
    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_categories_user_name"),)

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
