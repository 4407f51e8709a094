from typing import List
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.question_bank import QuestionBank
from coaching.schemas.question import QuestionBankCreate, QuestionBankCreate as QuestionBankUpdate

class CRUDQuestionBank(CRUDBase[QuestionBank, QuestionBankCreate, QuestionBankUpdate]):
    def get_all_newest_first(self, db: Session, *, subject: str | None = None) -> List[QuestionBank]:
        query = db.query(QuestionBank)
        if subject:
            query = query.filter(QuestionBank.subject.ilike(f"%{subject}%"))
        return query.order_by(QuestionBank.created_at.desc(), QuestionBank.id.desc()).all()

    def get_by_ids(self, db: Session, *, ids: List[int]) -> List[QuestionBank]:
        if not ids:
            return []
        found = db.query(QuestionBank).filter(QuestionBank.id.in_(ids)).all()
        by_id = {q.id: q for q in found}
        # Keep the caller's ordering; unknown ids are dropped.
        return [by_id[i] for i in dict.fromkeys(ids) if i in by_id]

question_bank = CRUDQuestionBank(QuestionBank)
