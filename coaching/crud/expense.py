from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.expense import Expense
from coaching.schemas.finance import ExpenseCreate

class CRUDExpense(CRUDBase[Expense, ExpenseCreate, ExpenseCreate]):
    def get_all_newest_first(self, db: Session) -> List[Expense]:
        return db.query(Expense).order_by(Expense.date.desc(), Expense.id.desc()).all()

    def total_spent(self, db: Session) -> float:
        return db.query(func.coalesce(func.sum(Expense.amount), 0)).scalar()

expense = CRUDExpense(Expense)
