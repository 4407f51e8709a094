from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from coaching.core.constants import ADMIN_ROLES
from coaching.schemas.attendance import AttendanceSave, AttendanceSaveResult, AttendanceStat
from coaching.schemas.exam import Exam, ExamCreate, ExamDetail
from coaching.schemas.question import ExamImportRequest, ImportResult, QuestionBankCreate, QuestionBankItem
from coaching.schemas.response import APIResponse
from coaching.schemas.test_attempt import Attempt, ManualMarksCreate, RankedResult
from coaching.schemas.user import UserContext
from coaching.services.attendance import attendance_service
from coaching.services.exam import exam_service
from coaching.utils import deps

router = APIRouter()

staff = deps.require_roles(*ADMIN_ROLES)


@router.get("/exams", response_model=APIResponse[List[Exam]])
def get_all_exams(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff),
    skip: int = 0,
    limit: int = 100
):
    exams = exam_service.get_all_exams(db, skip=skip, limit=limit)
    return APIResponse(message="Exams retrieved successfully", data=exams)


@router.post("/exams", response_model=APIResponse[ExamDetail], status_code=status.HTTP_201_CREATED)
def create_exam(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_in: ExamCreate,
    context: UserContext = Depends(staff)
):
    new_exam = exam_service.create_exam(db, exam_in=exam_in)
    return APIResponse(message="Exam created successfully", data=new_exam)


@router.get("/exams/{exam_id}", response_model=APIResponse[ExamDetail])
def get_exam(
    *,
    db: Session = Depends(deps.get_db),
    exam_id: int,
    context: UserContext = Depends(staff)
):
    exam = exam_service.get_exam(db, exam_id=exam_id)
    return APIResponse(message="Exam retrieved successfully", data=exam)


@router.post("/exams/{exam_id}/import", response_model=APIResponse[ImportResult])
def import_questions(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_id: int,
    import_in: ExamImportRequest,
    context: UserContext = Depends(staff)
):
    """Copy question-bank entries and/or inline questions into an exam and publish it."""
    result = exam_service.import_questions(db, exam_id=exam_id, import_in=import_in)
    return APIResponse(message=f"{result.count} questions imported", data=result)


@router.get("/questions", response_model=APIResponse[List[QuestionBankItem]])
def get_question_bank(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff),
    subject: Optional[str] = Query(None)
):
    questions = exam_service.get_bank_questions(db, subject=subject)
    return APIResponse(message="Question bank retrieved successfully", data=questions)


@router.post("/questions", response_model=APIResponse[QuestionBankItem], status_code=status.HTTP_201_CREATED)
def create_bank_question(
    *,
    db: Session = Depends(deps.get_transactional_db),
    question_in: QuestionBankCreate,
    context: UserContext = Depends(staff)
):
    question = exam_service.create_bank_question(db, question_in=question_in, current_user_context=context)
    return APIResponse(message="Question added to bank", data=question)


@router.get("/academics/results", response_model=APIResponse[List[RankedResult]])
def get_exam_results(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff),
    exam_id: int = Query(...),
    batch_id: Optional[int] = Query(None)
):
    results = exam_service.get_ranked_results(db, exam_id=exam_id, batch_id=batch_id)
    return APIResponse(message="Results retrieved successfully", data=results)


@router.post("/marks", response_model=APIResponse[Attempt])
def record_marks(
    *,
    db: Session = Depends(deps.get_transactional_db),
    marks_in: ManualMarksCreate,
    context: UserContext = Depends(staff)
):
    attempt = exam_service.record_manual_marks(db, marks_in=marks_in)
    return APIResponse(message="Marks updated successfully", data=attempt)


@router.post("/attendance", response_model=APIResponse[AttendanceSaveResult])
def save_attendance(
    *,
    db: Session = Depends(deps.get_transactional_db),
    attendance_in: AttendanceSave,
    context: UserContext = Depends(staff)
):
    result = attendance_service.save_attendance(db, attendance_in=attendance_in)
    return APIResponse(message="Attendance saved successfully", data=result)


@router.get("/academics/attendance", response_model=APIResponse[List[AttendanceStat]])
def get_attendance_stats(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff),
    batch_id: int = Query(...)
):
    stats = attendance_service.get_batch_stats(db, batch_id=batch_id)
    return APIResponse(message="Attendance statistics retrieved successfully", data=stats)
