from sqlalchemy.orm import Session
from typing import List

from coaching.crud.base import CRUDBase
from coaching.models.answer import Answer
from coaching.schemas.test_attempt import AnswerCreate

class CRUDAnswer(CRUDBase[Answer, AnswerCreate, AnswerCreate]):

    def get_all_by_attempt(self, db: Session, *, attempt_id: int) -> List[Answer]:
        return db.query(Answer).filter(Answer.attempt_id == attempt_id).all()

    def count_by_attempt(self, db: Session, *, attempt_id: int) -> int:
        return db.query(Answer).filter(Answer.attempt_id == attempt_id).count()


answer = CRUDAnswer(Answer)
