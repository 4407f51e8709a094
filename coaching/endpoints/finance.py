from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from coaching.core.constants import RoleEnum
from coaching.schemas.finance import (
    Expense, ExpenseCreate, FeeCollect, FeeRecord, FeeStatus, FinanceSummary, StudentFeeSummary
)
from coaching.schemas.response import APIResponse
from coaching.schemas.user import UserContext
from coaching.services.finance import finance_service
from coaching.utils import deps

router = APIRouter()

director_only = deps.require_roles(RoleEnum.SUPER_ADMIN)


@router.get("/my-summary", response_model=APIResponse[List[StudentFeeSummary]])
def get_my_fee_summary(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.require_roles(RoleEnum.PARENT, RoleEnum.STUDENT))
):
    summary = finance_service.get_my_summary(db, current_user_context=context)
    return APIResponse(message="Fee summary retrieved successfully", data=summary)


@router.post("/collect", response_model=APIResponse[FeeRecord], status_code=status.HTTP_201_CREATED)
def collect_fee(
    *,
    db: Session = Depends(deps.get_transactional_db),
    fee_in: FeeCollect,
    context: UserContext = Depends(director_only)
):
    record = finance_service.collect_fee(db, fee_in=fee_in)
    return APIResponse(message="Fee collected successfully", data=record)


@router.get("/check-fee/{student_id}", response_model=APIResponse[FeeStatus])
def check_fee(
    *,
    db: Session = Depends(deps.get_db),
    student_id: int,
    context: UserContext = Depends(director_only)
):
    fee_status = finance_service.check_fee(db, student_id=student_id)
    return APIResponse(message="Fee status retrieved successfully", data=fee_status)


@router.get("/expenses", response_model=APIResponse[List[Expense]])
def get_expenses(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(director_only)
):
    return APIResponse(message="Expenses retrieved successfully", data=finance_service.get_expenses(db))


@router.post("/expenses", response_model=APIResponse[Expense], status_code=status.HTTP_201_CREATED)
def create_expense(
    *,
    db: Session = Depends(deps.get_transactional_db),
    expense_in: ExpenseCreate,
    context: UserContext = Depends(director_only)
):
    expense = finance_service.create_expense(db, expense_in=expense_in)
    return APIResponse(message="Expense recorded successfully", data=expense)


@router.delete("/expenses/{expense_id}", response_model=APIResponse[Expense])
def delete_expense(
    *,
    db: Session = Depends(deps.get_transactional_db),
    expense_id: int,
    context: UserContext = Depends(director_only)
):
    expense = finance_service.delete_expense(db, expense_id=expense_id)
    return APIResponse(message="Expense deleted successfully", data=expense)


@router.get("/summary", response_model=APIResponse[FinanceSummary])
def get_finance_summary(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(director_only)
):
    return APIResponse(message="Finance summary retrieved successfully", data=finance_service.get_summary(db))
