from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coaching.core.constants import RoleEnum
from coaching.schemas.exam import AttemptStart, StudentExam
from coaching.schemas.response import APIResponse
from coaching.schemas.test_attempt import AttemptResult, AttemptReview, SubmitRequest, SubmitResult
from coaching.schemas.user import UserContext
from coaching.services.exam_attempt import exam_attempt_service
from coaching.utils import deps

router = APIRouter()

student_only = deps.require_roles(RoleEnum.STUDENT)


@router.get("/", response_model=APIResponse[List[StudentExam]])
def get_available_exams(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(student_only),
    skip: int = 0,
    limit: int = 100
):
    exams = exam_attempt_service.get_student_exams(db, current_user_context=context, skip=skip, limit=limit)
    return APIResponse(message="Exams retrieved successfully", data=exams)


@router.get("/results", response_model=APIResponse[List[AttemptResult]])
def get_my_results(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(student_only)
):
    results = exam_attempt_service.get_my_results(db, current_user_context=context)
    return APIResponse(message="Results retrieved successfully", data=results)


@router.get("/attempts/{attempt_id}/review", response_model=APIResponse[AttemptReview])
def review_attempt(
    *,
    db: Session = Depends(deps.get_db),
    attempt_id: int,
    context: UserContext = Depends(student_only)
):
    review = exam_attempt_service.get_attempt_review(db, attempt_id=attempt_id, current_user_context=context)
    return APIResponse(message="Attempt review retrieved successfully", data=review)


@router.post("/{exam_id}/attempt", response_model=APIResponse[AttemptStart])
def start_exam_attempt(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_id: int,
    context: UserContext = Depends(student_only)
):
    attempt = exam_attempt_service.start_attempt(db, exam_id=exam_id, current_user_context=context)
    return APIResponse(message="Exam attempt started", data=attempt)


@router.post("/{exam_id}/submit", response_model=APIResponse[SubmitResult])
def submit_exam(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_id: int,
    submission: SubmitRequest,
    context: UserContext = Depends(student_only)
):
    result = exam_attempt_service.submit_attempt(db, exam_id=exam_id, submission=submission, current_user_context=context)
    return APIResponse(message=result.message, data=result)
