from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime, date


class InstallmentItem(BaseModel):
    amount: float = Field(ge=0)
    due_date: Optional[date] = None


class AdmissionCreate(BaseModel):
    """Payload for admitting a student, optionally together with a new parent login."""
    full_name: str
    username: str
    password: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None
    batch_id: Optional[int] = None

    fee_agreed: float = Field(default=0, ge=0)
    waive_off: float = Field(default=0, ge=0)
    late_penalty: float = Field(default=0, ge=0)
    installments: int = Field(default=1, ge=1)
    installment_schedule: List[InstallmentItem] = []
    next_payment_date: Optional[datetime] = None
    fee_agreement_date: Optional[datetime] = None

    parent_username: Optional[str] = None
    parent_password: Optional[str] = None
    parent_mobile: Optional[str] = None

    @field_validator("full_name", "username")
    def not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("parent_username")
    def parent_username_strip(cls, v):
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v


class StudentProfileCreate(BaseModel):
    user_id: int
    full_name: str
    mobile: Optional[str] = None
    address: Optional[str] = None
    batch_id: Optional[int] = None
    parent_id: Optional[int] = None
    fee_agreed: float = 0
    waive_off: float = 0
    late_penalty: float = 0
    installments: int = 1
    next_payment_date: Optional[datetime] = None
    fee_agreement_date: Optional[datetime] = None
    installment_schedule: Optional[List[Dict[str, Any]]] = None


class StudentProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None
    batch_id: Optional[int] = None
    parent_id: Optional[int] = None


class AdmissionResult(BaseModel):
    student_id: int
    user_id: int
    username: str
    parent_id: Optional[int] = None
    parent_username: Optional[str] = None


class StudentDirectoryEntry(BaseModel):
    id: int
    user_id: int
    full_name: str
    username: str
    mobile: Optional[str] = None
    batch_id: Optional[int] = None
    batch_name: Optional[str] = None
    parent_username: Optional[str] = None
    parent_mobile: Optional[str] = None
    fee_total: float
    fee_paid: float
    fee_remaining: float
    installment_schedule: List[Dict[str, Any]] = []
