from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List
from datetime import datetime

from coaching.core.constants import (
    DEFAULT_SUBJECT, DEFAULT_DIFFICULTY, DEFAULT_QUESTION_MARKS, DEFAULT_QUESTION_NEGATIVE
)


class QuestionBankCreate(BaseModel):
    question_text: str
    question_image: Optional[str] = None
    solution_image: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    correct_option: str
    subject: str = DEFAULT_SUBJECT
    topic: Optional[str] = None
    difficulty: str = DEFAULT_DIFFICULTY
    marks: float = DEFAULT_QUESTION_MARKS
    negative: float = DEFAULT_QUESTION_NEGATIVE
    expected_time: Optional[int] = None
    created_by_id: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "question_text": "A body of mass 2 kg moves with 3 m/s. Its kinetic energy is",
                "options": {"a": "3 J", "b": "9 J", "c": "6 J", "d": "18 J"},
                "correct_option": "b",
                "subject": "Physics",
                "difficulty": "EASY"
            }
        }
    )


class QuestionBankItem(QuestionBankCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class QuestionImportItem(BaseModel):
    """A raw question supplied inline to an import; every field is optional and defaulted on import."""
    question_text: Optional[str] = None
    question_image: Optional[str] = None
    solution_image: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    correct_option: Optional[str] = None
    subject: Optional[str] = None
    topic: Optional[str] = None
    question_type: Optional[str] = None
    difficulty: Optional[str] = None
    marks: Optional[float] = None
    negative: Optional[float] = None


class ExamImportRequest(BaseModel):
    question_bank_ids: List[int] = []
    questions: List[QuestionImportItem] = []


class ImportResult(BaseModel):
    count: int
    total_marks: float
    is_published: bool


class QuestionCreate(BaseModel):
    exam_id: int
    question_bank_id: Optional[int] = None
    question_text: str
    question_image: Optional[str] = None
    solution_image: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    correct_option: str
    subject: str
    topic: Optional[str] = None
    question_type: str
    difficulty: str
    marks: float
    negative: float
    order_index: int = Field(default=0, ge=0)


class StudentQuestion(BaseModel):
    """Question as served to a student taking the exam; never carries the answer key."""
    id: int
    question_text: str
    question_image: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    subject: str
    topic: Optional[str] = None
    question_type: str
    marks: float
    negative: float
    order_index: int

    model_config = ConfigDict(from_attributes=True)


class Question(StudentQuestion):
    exam_id: int
    question_bank_id: Optional[int] = None
    solution_image: Optional[str] = None
    correct_option: str
    difficulty: str
