from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coaching.core.constants import RoleEnum
from coaching.schemas.attendance import AttendanceHistory
from coaching.schemas.content import Resource
from coaching.schemas.response import APIResponse
from coaching.schemas.user import UserContext
from coaching.services.attendance import attendance_service
from coaching.services.content import content_service
from coaching.utils import deps

router = APIRouter()

student_only = deps.require_roles(RoleEnum.STUDENT)


@router.get("/resources", response_model=APIResponse[List[Resource]])
def get_my_resources(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(student_only)
):
    resources = content_service.get_my_resources(db, current_user_context=context)
    return APIResponse(message="Resources retrieved successfully", data=resources)


@router.get("/attendance", response_model=APIResponse[AttendanceHistory])
def get_my_attendance(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(student_only)
):
    history = attendance_service.get_my_history(db, current_user_context=context)
    return APIResponse(message="Attendance retrieved successfully", data=history)
