import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from coaching.core.constants import DEFAULT_PAYMENT_MODE, DEFAULT_FEE_REMARKS
from coaching.core.exceptions import NotFoundException
from coaching.crud.expense import expense as crud_expense
from coaching.crud.fee_record import fee_record as crud_fee_record
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.models.student_profile import StudentProfile
from coaching.schemas.finance import (
    Expense, ExpenseCreate, FeeCollect, FeeLedger, FeeRecord, FeeRecordCreate, FeeStatus,
    FinanceSummary, StudentFeeSummary
)
from coaching.schemas.user import UserContext
from coaching.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def _parse_due_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def effective_fee(fee_agreed: Optional[float], waive_off: Optional[float]) -> float:
    return max(0.0, (fee_agreed or 0) - (waive_off or 0))


def project_fee_ledger(
    *, fee_agreed: Optional[float], waive_off: Optional[float], paid: float,
    schedule: Optional[List[Dict[str, Any]]] = None
) -> FeeLedger:
    """Derive a student's fee position from the agreement and the sum of payments.

    The current installment is found by walking the schedule until the cumulative
    amount exceeds what has been paid; the shortfall is what is due now. Without a
    schedule the whole pending amount is due.
    """
    total = effective_fee(fee_agreed, waive_off)
    pending = max(0.0, total - paid)
    ledger = FeeLedger(total_fee=total, paid=paid, pending=pending, current_due=0)
    if pending <= 0:
        return ledger

    cumulative = 0.0
    for number, item in enumerate(schedule or [], start=1):
        if not isinstance(item, dict):
            continue
        cumulative += float(item.get("amount") or 0)
        if cumulative > paid:
            ledger.current_due = min(cumulative - paid, pending)
            ledger.current_due_date = _parse_due_date(item.get("due_date"))
            ledger.installment_number = number
            return ledger

    # No schedule, or the schedule is covered but the agreement is not.
    ledger.current_due = pending
    return ledger


class FinanceService:

    def _get_student_or_404(self, db: Session, student_id: int) -> StudentProfile:
        student = crud_student_profile.get(db, id=student_id)
        if not student:
            raise NotFoundException("Student not found.")
        return student

    def _ledger_for(self, student: StudentProfile) -> FeeLedger:
        paid = sum(record.amount for record in student.fees_paid)
        return project_fee_ledger(
            fee_agreed=student.fee_agreed,
            waive_off=student.waive_off,
            paid=paid,
            schedule=student.installment_schedule,
        )

    def _summary_for(self, student: StudentProfile) -> StudentFeeSummary:
        return StudentFeeSummary(
            student_id=student.id,
            user_id=student.user_id,
            username=student.user.username,
            name=student.full_name,
            batch_name=student.batch.name if student.batch else "Unassigned",
            ledger=self._ledger_for(student),
            history=[FeeRecord.model_validate(r) for r in student.fees_paid],
            installments=student.installment_schedule or [],
        )

    def collect_fee(self, db: Session, *, fee_in: FeeCollect) -> FeeRecord:
        student = self._get_student_or_404(db, fee_in.student_id)
        record_in = FeeRecordCreate(
            student_id=student.id,
            amount=fee_in.amount,
            payment_mode=fee_in.payment_mode or DEFAULT_PAYMENT_MODE,
            transaction_id=fee_in.transaction_id or f"TXN-{uuid.uuid4().hex[:12].upper()}",
            remarks=fee_in.remarks or DEFAULT_FEE_REMARKS,
            date=datetime.now(timezone.utc),
        )
        record = crud_fee_record.create(db, obj_in=record_in)
        logger.info(f"Collected {record.amount} from student {student.id} ({record.transaction_id})")
        return FeeRecord.model_validate(record)

    def check_fee(self, db: Session, *, student_id: int) -> FeeStatus:
        student = self._get_student_or_404(db, student_id)
        return FeeStatus(
            student_id=student.id,
            student_name=student.full_name,
            batch_name=student.batch.name if student.batch else None,
            fee_agreed=student.fee_agreed or 0,
            waive_off=student.waive_off or 0,
            ledger=self._ledger_for(student),
        )

    def get_my_summary(self, db: Session, *, current_user_context: UserContext) -> List[StudentFeeSummary]:
        if permission_helper.is_parent(current_user_context):
            parent = permission_helper.get_parent_profile_or_404(db, current_user_context)
            return [self._summary_for(child) for child in parent.children if child.user]

        student = permission_helper.get_student_profile_or_404(db, current_user_context)
        return [self._summary_for(student)]

    def create_expense(self, db: Session, *, expense_in: ExpenseCreate) -> Expense:
        data = expense_in.model_dump()
        if data["date"] is None:
            data["date"] = datetime.now(timezone.utc)
        expense = crud_expense.create(db, obj_in=data)
        return Expense.model_validate(expense)

    def get_expenses(self, db: Session) -> List[Expense]:
        return [Expense.model_validate(e) for e in crud_expense.get_all_newest_first(db)]

    def delete_expense(self, db: Session, *, expense_id: int) -> Expense:
        expense = crud_expense.delete(db, id=expense_id)
        if not expense:
            raise NotFoundException("Expense not found.")
        return Expense.model_validate(expense)

    def get_summary(self, db: Session) -> FinanceSummary:
        collected = float(crud_fee_record.total_collected(db) or 0)
        spent = float(crud_expense.total_spent(db) or 0)
        return FinanceSummary(total_collected=collected, total_spent=spent, net_profit=collected - spent)


finance_service = FinanceService()
