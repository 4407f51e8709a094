from sqlalchemy.orm import Session

from coaching.core.constants import RoleEnum
from coaching.core.exceptions import ForbiddenException, NotFoundException
from coaching.crud.parent_profile import parent_profile as crud_parent_profile
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.models.parent_profile import ParentProfile
from coaching.models.student_profile import StudentProfile
from coaching.schemas.user import UserContext


class PermissionHelper:
    @staticmethod
    def is_super_admin(context: UserContext) -> bool:
        return context.role == RoleEnum.SUPER_ADMIN

    @staticmethod
    def is_teacher(context: UserContext) -> bool:
        return context.role == RoleEnum.TEACHER

    @staticmethod
    def is_student(context: UserContext) -> bool:
        return context.role == RoleEnum.STUDENT

    @staticmethod
    def is_parent(context: UserContext) -> bool:
        return context.role == RoleEnum.PARENT

    @staticmethod
    def is_parent_of(parent: ParentProfile, student_user_id: int) -> bool:
        return student_user_id in [child.user_id for child in parent.children]

    @staticmethod
    def get_student_profile_or_404(db: Session, context: UserContext) -> StudentProfile:
        profile = crud_student_profile.get_by_user(db, user_id=context.user.id)
        if not profile:
            raise NotFoundException("Student profile not found.")
        return profile

    @staticmethod
    def get_parent_profile_or_404(db: Session, context: UserContext) -> ParentProfile:
        profile = crud_parent_profile.get_by_user(db, user_id=context.user.id)
        if not profile:
            raise NotFoundException("Parent profile not found.")
        return profile

    @staticmethod
    def require_parent_of(parent: ParentProfile, student_user_id: int):
        if not PermissionHelper.is_parent_of(parent, student_user_id):
            raise ForbiddenException("You can only view your own children's results.")


permission_helper = PermissionHelper()
