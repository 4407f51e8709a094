from typing import Optional
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.teacher_profile import TeacherProfile
from coaching.schemas.user import TeacherProfileCreate

class CRUDTeacherProfile(CRUDBase[TeacherProfile, TeacherProfileCreate, TeacherProfileCreate]):
    def get_by_user(self, db: Session, *, user_id: int) -> Optional[TeacherProfile]:
        return db.query(TeacherProfile).filter(TeacherProfile.user_id == user_id).first()

teacher_profile = CRUDTeacherProfile(TeacherProfile)
