from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.question import Question
from coaching.schemas.question import QuestionCreate, QuestionCreate as QuestionUpdate

class CRUDQuestion(CRUDBase[Question, QuestionCreate, QuestionUpdate]):
    def get_by_exam(self, db: Session, *, exam_id: int) -> List[Question]:
        return (
            db.query(self.model)
            .filter(self.model.exam_id == exam_id)
            .order_by(self.model.order_index, self.model.id)
            .all()
        )

    def count_by_exam(self, db: Session, *, exam_id: int) -> int:
        return db.query(func.count(self.model.id)).filter(self.model.exam_id == exam_id).scalar() or 0

    def sum_marks_by_exam(self, db: Session, *, exam_id: int) -> float:
        return db.query(func.coalesce(func.sum(self.model.marks), 0)).filter(self.model.exam_id == exam_id).scalar()

question = CRUDQuestion(Question)
