from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coaching.core.constants import RoleEnum
from coaching.schemas.response import APIResponse
from coaching.schemas.test_attempt import AttemptResult
from coaching.schemas.user import UserContext
from coaching.services.parent import parent_service
from coaching.utils import deps

router = APIRouter()


@router.get("/children/{student_user_id}/attempts", response_model=APIResponse[List[AttemptResult]])
def get_child_attempts(
    *,
    db: Session = Depends(deps.get_db),
    student_user_id: int,
    context: UserContext = Depends(deps.require_roles(RoleEnum.PARENT))
):
    attempts = parent_service.get_child_attempts(db, student_user_id=student_user_id, current_user_context=context)
    return APIResponse(message="Attempts retrieved successfully", data=attempts)
