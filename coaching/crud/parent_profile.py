from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from coaching.crud.base import CRUDBase
from coaching.models.parent_profile import ParentProfile
from coaching.models.student_profile import StudentProfile
from coaching.schemas.user import ParentProfileCreate, ParentProfileUpdate

class CRUDParentProfile(CRUDBase[ParentProfile, ParentProfileCreate, ParentProfileUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(ParentProfile).options(
            selectinload(ParentProfile.user),
            selectinload(ParentProfile.children).selectinload(StudentProfile.user),
            selectinload(ParentProfile.children).selectinload(StudentProfile.batch),
            selectinload(ParentProfile.children).selectinload(StudentProfile.fees_paid),
        )

    def get(self, db: Session, id: int) -> Optional[ParentProfile]:
        return self._query_with_relationships(db).filter(ParentProfile.id == id).first()

    def get_by_user(self, db: Session, *, user_id: int) -> Optional[ParentProfile]:
        return self._query_with_relationships(db).filter(ParentProfile.user_id == user_id).first()

    def get_all(self, db: Session) -> List[ParentProfile]:
        return self._query_with_relationships(db).order_by(ParentProfile.id).all()

    def set_visibility_for_all(self, db: Session, *, is_visible: bool) -> int:
        count = db.query(ParentProfile).update({"is_mobile_visible": is_visible}, synchronize_session="fetch")
        db.flush()
        return count

parent_profile = CRUDParentProfile(ParentProfile)
