from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from coaching.crud.base import CRUDBase
from coaching.models.student_profile import StudentProfile
from coaching.models.parent_profile import ParentProfile
from coaching.models.user import User
from coaching.schemas.student import StudentProfileCreate, StudentProfileUpdate

class CRUDStudentProfile(CRUDBase[StudentProfile, StudentProfileCreate, StudentProfileUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(StudentProfile).options(
            selectinload(StudentProfile.user),
            selectinload(StudentProfile.batch),
            selectinload(StudentProfile.parent).selectinload(ParentProfile.user),
            selectinload(StudentProfile.fees_paid),
        )

    def get(self, db: Session, id: int) -> Optional[StudentProfile]:
        return self._query_with_relationships(db).filter(StudentProfile.id == id).first()

    def get_by_user(self, db: Session, *, user_id: int) -> Optional[StudentProfile]:
        return self._query_with_relationships(db).filter(StudentProfile.user_id == user_id).first()

    def get_all_ordered(self, db: Session) -> List[StudentProfile]:
        return self._query_with_relationships(db).order_by(StudentProfile.full_name.asc()).all()

    def get_by_batch(self, db: Session, *, batch_id: int) -> List[StudentProfile]:
        return (
            self._query_with_relationships(db)
            .filter(StudentProfile.batch_id == batch_id)
            .order_by(StudentProfile.full_name.asc())
            .all()
        )

    def get_user_ids_by_batch(self, db: Session, *, batch_id: int, active_only: bool = False) -> List[int]:
        query = (
            db.query(StudentProfile.user_id)
            .join(User, User.id == StudentProfile.user_id)
            .filter(StudentProfile.batch_id == batch_id)
        )
        if active_only:
            query = query.filter(User.is_active == True)
        rows = query.all()
        return [row[0] for row in rows]

student_profile = CRUDStudentProfile(StudentProfile)
