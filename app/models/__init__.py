from app.models.category import CategoryModel
from app.models.transaction import TransactionItemModel, TransactionModel
from app.models.budget import BudgetModel

__all__ = ["CategoryModel", "TransactionModel", "TransactionItemModel", "BudgetModel"]
