from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from coaching.core.constants import AttemptStatusEnum


class AttemptBase(BaseModel):
    user_id: int
    exam_id: int
    status: AttemptStatusEnum = Field(default=AttemptStatusEnum.IN_PROGRESS)
    started_at: Optional[datetime] = None


class AttemptCreate(AttemptBase):
    pass


class AttemptUpdate(BaseModel):
    status: Optional[AttemptStatusEnum] = None
    submitted_at: Optional[datetime] = None
    total_score: Optional[float] = None
    physics: Optional[float] = None
    chemistry: Optional[float] = None
    maths: Optional[float] = None
    biology: Optional[float] = None
    correct_count: Optional[int] = None
    wrong_count: Optional[int] = None
    skipped_count: Optional[int] = None


class Attempt(AttemptBase):
    id: int
    submitted_at: Optional[datetime] = None
    total_score: float = 0
    physics: float = 0
    chemistry: float = 0
    maths: float = 0
    biology: float = 0
    correct_count: int = 0
    wrong_count: int = 0
    skipped_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class AttemptResult(Attempt):
    exam_title: Optional[str] = None
    exam_total_marks: Optional[float] = None


class AnswerCreate(BaseModel):
    attempt_id: int
    question_id: int
    selected_option: Optional[str] = None
    is_correct: bool = False
    marks_awarded: float = 0
    time_taken: int = 0


class SubmittedAnswer(BaseModel):
    question_id: int
    selected_option: Optional[str] = None
    time_taken: int = Field(default=0, ge=0)


class SubmitRequest(BaseModel):
    answers: List[SubmittedAnswer] = []

    class Config:
        json_schema_extra = {
            "example": {
                "answers": [
                    {"question_id": 11, "selected_option": "b", "time_taken": 42},
                    {"question_id": 12, "selected_option": "a,c", "time_taken": 90}
                ]
            }
        }


class SubmitResult(BaseModel):
    success: bool
    message: str
    score: float


class ReviewQuestion(BaseModel):
    question_id: int
    question_text: str
    question_image: Optional[str] = None
    solution_image: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    subject: str
    correct_option: str
    selected_option: Optional[str] = None
    is_correct: bool = False
    marks_awarded: float = 0


class AttemptReview(BaseModel):
    attempt: Attempt
    exam_title: str
    questions: List[ReviewQuestion]


class ManualMarksCreate(BaseModel):
    student_id: int
    exam_id: int
    physics: float = 0
    chemistry: float = 0
    maths: float = 0
    biology: float = 0


class RankedResult(BaseModel):
    rank: int
    attempt_id: int
    user_id: int
    student_name: str
    status: AttemptStatusEnum
    physics: float
    chemistry: float
    maths: float
    biology: float
    total_score: float
