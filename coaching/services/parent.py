from typing import List

from sqlalchemy.orm import Session

from coaching.crud.test_attempt import test_attempt as crud_test_attempt
from coaching.schemas.test_attempt import AttemptResult
from coaching.schemas.user import UserContext
from coaching.services.exam_attempt import to_attempt_result
from coaching.utils.permission import PermissionHelper as permission_helper


class ParentService:
    def get_child_attempts(self, db: Session, *, student_user_id: int,
                           current_user_context: UserContext) -> List[AttemptResult]:
        parent = permission_helper.get_parent_profile_or_404(db, current_user_context)
        permission_helper.require_parent_of(parent, student_user_id)
        attempts = crud_test_attempt.get_completed_by_user(db, user_id=student_user_id)
        return [to_attempt_result(a) for a in attempts]


parent_service = ParentService()
