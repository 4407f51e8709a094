from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime, date


class FeeLedger(BaseModel):
    """Derived view of a student's fee position; never persisted."""
    total_fee: float
    paid: float
    pending: float
    current_due: float
    current_due_date: Optional[date] = None
    installment_number: Optional[int] = None


class FeeRecordCreate(BaseModel):
    student_id: int
    amount: float
    payment_mode: str
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None
    date: Optional[datetime] = None


class FeeCollect(BaseModel):
    student_id: int
    amount: float = Field(gt=0)
    payment_mode: Optional[str] = None
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {"student_id": 4, "amount": 25000, "payment_mode": "UPI", "remarks": "Second installment"}
        }


class FeeRecord(BaseModel):
    id: int
    student_id: int
    amount: float
    date: Optional[datetime] = None
    payment_mode: str
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class FeeStatus(BaseModel):
    student_id: int
    student_name: str
    batch_name: Optional[str] = None
    fee_agreed: float
    waive_off: float
    ledger: FeeLedger


class StudentFeeSummary(BaseModel):
    student_id: int
    user_id: int
    username: str
    name: str
    batch_name: str
    ledger: FeeLedger
    history: List[FeeRecord] = []
    installments: List[Dict[str, Any]] = []


class ExpenseCreate(BaseModel):
    title: str
    category: str
    amount: float = Field(gt=0)
    vendor: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None


class Expense(ExpenseCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FinanceSummary(BaseModel):
    total_collected: float
    total_spent: float
    net_profit: float
