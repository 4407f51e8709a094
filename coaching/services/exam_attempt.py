import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coaching.core.constants import AttemptStatusEnum, StudentExamStatusEnum, TERMINAL_ATTEMPT_STATUSES
from coaching.core.exceptions import (
    AlreadySubmittedException, ForbiddenException, InvalidStateException, NoActiveAttemptException,
    NotFoundException
)
from coaching.crud.answer import answer as crud_answer
from coaching.crud.exam import exam as crud_exam
from coaching.crud.test_attempt import test_attempt as crud_test_attempt
from coaching.models.test_attempt import TestAttempt
from coaching.schemas.exam import AttemptStart, ExamInfo, StudentExam
from coaching.schemas.question import StudentQuestion
from coaching.schemas.test_attempt import (
    AnswerCreate, Attempt, AttemptCreate, AttemptResult, AttemptReview, AttemptUpdate, ReviewQuestion,
    SubmitRequest, SubmitResult
)
from coaching.schemas.user import UserContext
from coaching.services.grading import grade_submission

logger = logging.getLogger(__name__)


def to_attempt_result(attempt: TestAttempt) -> AttemptResult:
    result = AttemptResult.model_validate(attempt)
    if attempt.exam is not None:
        result.exam_title = attempt.exam.title
        result.exam_total_marks = attempt.exam.total_marks
    return result


class ExamAttemptService:

    def _get_or_create_attempt(self, db: Session, *, user_id: int, exam_id: int) -> TestAttempt:
        attempt = crud_test_attempt.get_by_user_and_exam(db, user_id=user_id, exam_id=exam_id)
        if attempt is None:
            attempt_in = AttemptCreate(user_id=user_id, exam_id=exam_id, started_at=datetime.now(timezone.utc))
            try:
                # Savepoint: losing the (user_id, exam_id) race only undoes this insert.
                with db.begin_nested():
                    attempt = crud_test_attempt.create(db, obj_in=attempt_in)
            except IntegrityError:
                attempt = crud_test_attempt.get_by_user_and_exam(db, user_id=user_id, exam_id=exam_id)
                if attempt is None:
                    raise
            else:
                logger.info(f"User {user_id} started exam {exam_id} (attempt {attempt.id})")

        if attempt.status in TERMINAL_ATTEMPT_STATUSES:
            raise AlreadySubmittedException()
        return attempt

    def start_attempt(self, db: Session, *, exam_id: int, current_user_context: UserContext) -> AttemptStart:
        exam = crud_exam.get(db, id=exam_id)
        if not exam:
            raise NotFoundException("Exam not found.")
        if not exam.is_published:
            raise InvalidStateException("Exam is not active.")
        if not exam.questions:
            raise InvalidStateException("This exam has no questions configured.")

        attempt = self._get_or_create_attempt(db, user_id=current_user_context.user.id, exam_id=exam.id)

        return AttemptStart(
            attempt_id=attempt.id,
            exam=ExamInfo(title=exam.title, duration=exam.duration_min, total_marks=exam.total_marks),
            questions=[StudentQuestion.model_validate(q) for q in exam.questions],
            server_time=datetime.now(timezone.utc),
            started_at=attempt.started_at,
        )

    def submit_attempt(self, db: Session, *, exam_id: int, submission: SubmitRequest,
                       current_user_context: UserContext) -> SubmitResult:
        """Grade and persist a submission.

        Nothing here commits: every Answer row and the attempt update ride on the
        request's transaction, so a failure leaves the attempt IN_PROGRESS. The
        status flip is a conditional update made before any answer is written, so
        of two concurrent submissions only one gets to insert answers.
        """
        exam = crud_exam.get(db, id=exam_id)
        if not exam:
            raise NotFoundException("Exam not found.")

        attempt = crud_test_attempt.get_in_progress(db, user_id=current_user_context.user.id, exam_id=exam.id)
        if not attempt:
            raise NoActiveAttemptException()

        responses = {a.question_id: (a.selected_option, a.time_taken) for a in submission.answers}
        card = grade_submission(exam.questions, responses)

        claimed = crud_test_attempt.mark_submitted(db, attempt_id=attempt.id, obj_in=AttemptUpdate(
            status=AttemptStatusEnum.SUBMITTED,
            submitted_at=datetime.now(timezone.utc),
            total_score=card.total_score,
            physics=card.physics,
            chemistry=card.chemistry,
            maths=card.maths,
            biology=card.biology,
            correct_count=card.correct_count,
            wrong_count=card.wrong_count,
            skipped_count=card.skipped_count,
        ))
        if not claimed:
            raise NoActiveAttemptException()

        crud_answer.create_multi(db, objs_in=[
            AnswerCreate(attempt_id=attempt.id, **graded.model_dump()) for graded in card.answers
        ])
        logger.info(f"Attempt {attempt.id} submitted with score {card.total_score}")

        return SubmitResult(success=True, message="Exam submitted successfully", score=card.total_score)

    def get_attempt_review(self, db: Session, *, attempt_id: int, current_user_context: UserContext) -> AttemptReview:
        attempt = crud_test_attempt.get(db, id=attempt_id)
        if not attempt:
            raise NotFoundException("Exam attempt not found.")
        if attempt.user_id != current_user_context.user.id:
            raise ForbiddenException("You can only review your own exam attempts.")
        if attempt.status not in TERMINAL_ATTEMPT_STATUSES:
            raise InvalidStateException("Submit the exam before reviewing it.")

        answers = {a.question_id: a for a in attempt.answers}
        questions = []
        for question in attempt.exam.questions:
            answer = answers.get(question.id)
            questions.append(ReviewQuestion(
                question_id=question.id,
                question_text=question.question_text,
                question_image=question.question_image,
                solution_image=question.solution_image,
                options=question.options,
                subject=question.subject,
                correct_option=question.correct_option,
                selected_option=answer.selected_option if answer else None,
                is_correct=answer.is_correct if answer else False,
                marks_awarded=answer.marks_awarded if answer else 0,
            ))
        return AttemptReview(attempt=Attempt.model_validate(attempt), exam_title=attempt.exam.title, questions=questions)

    def get_my_results(self, db: Session, *, current_user_context: UserContext) -> List[AttemptResult]:
        attempts = crud_test_attempt.get_completed_by_user(db, user_id=current_user_context.user.id)
        return [to_attempt_result(a) for a in attempts]

    def get_student_exams(self, db: Session, *, current_user_context: UserContext,
                          skip: int = 0, limit: int = 100) -> List[StudentExam]:
        statuses = crud_test_attempt.get_user_statuses(db, user_id=current_user_context.user.id)
        exams = []
        for exam in crud_exam.get_published(db, skip=skip, limit=limit):
            status = statuses.get(exam.id)
            exams.append(StudentExam(
                id=exam.id,
                title=exam.title,
                description=exam.description,
                scheduled_at=exam.scheduled_at,
                duration_min=exam.duration_min,
                total_marks=exam.total_marks,
                status=StudentExamStatusEnum(status.value) if status else StudentExamStatusEnum.NOT_STARTED,
            ))
        return exams


exam_attempt_service = ExamAttemptService()
