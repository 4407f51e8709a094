from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from coaching.crud.base import CRUDBase
from coaching.models.exam import Exam
from coaching.schemas.exam import ExamCreate, ExamUpdate


class CRUDExam(CRUDBase[Exam, ExamCreate, ExamUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(Exam).options(
            selectinload(Exam.questions),
            selectinload(Exam.batch)
        )

    def get(self, db: Session, id: int) -> Optional[Exam]:
        return self._query_with_relationships(db).filter(Exam.id == id).first()

    def get_multi(self, db: Session, skip: int = 0, limit: int = 100) -> List[Exam]:
        return (
            self._query_with_relationships(db)
            .order_by(Exam.created_at.desc(), Exam.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_published(self, db: Session, skip: int = 0, limit: int = 100) -> List[Exam]:
        return (
            self._query_with_relationships(db)
            .filter(Exam.is_published == True)
            .order_by(Exam.scheduled_at.desc(), Exam.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

exam = CRUDExam(Exam)
