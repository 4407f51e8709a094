from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime

from coaching.core.constants import StudentExamStatusEnum
from coaching.schemas.question import Question, StudentQuestion


class ExamBase(BaseModel):
    title: str
    description: Optional[str] = None
    batch_id: Optional[int] = None
    scheduled_at: Optional[datetime] = None
    duration_min: int = Field(default=180, gt=0)

    @field_validator('batch_id')
    @classmethod
    def validate_ids(cls, v):
        if v == 0:
            return None
        return v

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Exam title cannot be empty")
        return v.strip()


class ExamCreate(ExamBase):
    question_bank_ids: List[int] = []

    class Config:
        json_schema_extra = {
            "example": {
                "title": "JEE Mock Test 04",
                "description": "Full syllabus mock",
                "batch_id": 1,
                "scheduled_at": "2025-05-01T09:00:00Z",
                "duration_min": 180,
                "question_bank_ids": [1, 2, 3]
            }
        }


class ExamUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    batch_id: Optional[int] = None
    scheduled_at: Optional[datetime] = None
    duration_min: Optional[int] = None
    total_marks: Optional[float] = None
    is_published: Optional[bool] = None


class Exam(ExamBase):
    id: int
    total_marks: float
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ExamDetail(Exam):
    questions: List[Question] = []


class StudentExam(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    duration_min: int
    total_marks: float
    status: StudentExamStatusEnum = StudentExamStatusEnum.NOT_STARTED


class ExamInfo(BaseModel):
    title: str
    duration: int
    total_marks: float


class AttemptStart(BaseModel):
    attempt_id: int
    exam: ExamInfo
    questions: List[StudentQuestion]
    server_time: datetime
    started_at: Optional[datetime] = None
