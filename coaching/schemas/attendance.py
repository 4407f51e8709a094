from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict
from datetime import date as date_type

from coaching.core.constants import DEFAULT_SUBJECT


class AttendanceCreate(BaseModel):
    student_id: int
    batch_id: Optional[int] = None
    date: date_type
    is_present: bool = False
    subject: str = DEFAULT_SUBJECT


class AttendanceSave(BaseModel):
    """One batch's register for a day: student profile id mapped to presence."""
    batch_id: int
    date: date_type
    records: Dict[int, bool]
    subject: str = DEFAULT_SUBJECT


class AttendanceSaveResult(BaseModel):
    count: int


class AttendanceRecord(BaseModel):
    id: int
    date: date_type
    is_present: bool
    subject: str

    model_config = ConfigDict(from_attributes=True)


class AttendanceStat(BaseModel):
    student_id: int
    name: str
    present: int
    total: int
    percentage: int


class AttendanceHistory(BaseModel):
    present: int
    total: int
    percentage: int
    history: List[AttendanceRecord] = []
