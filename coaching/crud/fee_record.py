from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.fee_record import FeeRecord
from coaching.schemas.finance import FeeRecordCreate

class CRUDFeeRecord(CRUDBase[FeeRecord, FeeRecordCreate, FeeRecordCreate]):
    """Append-only: there is deliberately no update or delete path used for fee records."""

    def get_by_student(self, db: Session, *, student_id: int) -> List[FeeRecord]:
        return (
            db.query(FeeRecord)
            .filter(FeeRecord.student_id == student_id)
            .order_by(FeeRecord.date.desc(), FeeRecord.id.desc())
            .all()
        )

    def total_collected(self, db: Session) -> float:
        return db.query(func.coalesce(func.sum(FeeRecord.amount), 0)).scalar()

fee_record = CRUDFeeRecord(FeeRecord)
