import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from coaching.core.constants import (
    AttemptStatusEnum, DEFAULT_CORRECT_OPTION, DEFAULT_DIFFICULTY, DEFAULT_QUESTION_MARKS,
    DEFAULT_QUESTION_NEGATIVE, DEFAULT_QUESTION_TYPE, DEFAULT_SUBJECT, DEFAULT_TOPIC
)
from coaching.core.exceptions import NotFoundException
from coaching.crud.batch import batch as crud_batch
from coaching.crud.exam import exam as crud_exam
from coaching.crud.question import question as crud_question
from coaching.crud.question_bank import question_bank as crud_question_bank
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.crud.teacher_profile import teacher_profile as crud_teacher_profile
from coaching.crud.test_attempt import test_attempt as crud_test_attempt
from coaching.models.exam import Exam as ExamModel
from coaching.schemas.exam import Exam, ExamCreate, ExamDetail
from coaching.schemas.question import (
    ExamImportRequest, ImportResult, QuestionBankCreate, QuestionBankItem, QuestionCreate
)
from coaching.schemas.test_attempt import Attempt, ManualMarksCreate, RankedResult
from coaching.schemas.user import UserContext
from coaching.utils.text import clean_text

logger = logging.getLogger(__name__)


class ExamService:

    def _get_exam_or_404(self, db: Session, exam_id: int) -> ExamModel:
        exam = crud_exam.get(db, id=exam_id)
        if not exam:
            raise NotFoundException("Exam not found.")
        return exam

    def create_exam(self, db: Session, *, exam_in: ExamCreate) -> ExamDetail:
        if exam_in.batch_id is not None and not crud_batch.get(db, id=exam_in.batch_id):
            raise NotFoundException("Batch not found.")

        data = exam_in.model_dump(exclude={"question_bank_ids"})
        if data["scheduled_at"] is None:
            data.pop("scheduled_at")
        new_exam = crud_exam.create(db, obj_in=data)
        logger.info(f"Exam {new_exam.id} '{new_exam.title}' created")

        if exam_in.question_bank_ids:
            self.import_questions(
                db, exam_id=new_exam.id,
                import_in=ExamImportRequest(question_bank_ids=exam_in.question_bank_ids)
            )
        return self.get_exam(db, exam_id=new_exam.id)

    def get_all_exams(self, db: Session, skip: int = 0, limit: int = 100) -> List[Exam]:
        return [Exam.model_validate(e) for e in crud_exam.get_multi(db, skip=skip, limit=limit)]

    def get_exam(self, db: Session, *, exam_id: int) -> ExamDetail:
        exam = self._get_exam_or_404(db, exam_id)
        db.refresh(exam)
        return ExamDetail.model_validate(exam)

    def _snapshot(self, exam_id: int, source: Dict[str, Any], *, order_index: int,
                  question_bank_id: Optional[int] = None) -> QuestionCreate:
        options = source.get("options")
        if isinstance(options, dict):
            options = {clean_text(k, ""): clean_text(v, "") for k, v in options.items()}
        else:
            options = None

        marks = source.get("marks")
        negative = source.get("negative")
        return QuestionCreate(
            exam_id=exam_id,
            question_bank_id=question_bank_id,
            question_text=clean_text(source.get("question_text"), ""),
            question_image=clean_text(source.get("question_image")),
            solution_image=clean_text(source.get("solution_image")),
            options=options,
            correct_option=clean_text(source.get("correct_option"), DEFAULT_CORRECT_OPTION),
            subject=clean_text(source.get("subject"), DEFAULT_SUBJECT),
            topic=clean_text(source.get("topic"), DEFAULT_TOPIC),
            question_type=clean_text(source.get("question_type"), DEFAULT_QUESTION_TYPE),
            difficulty=clean_text(source.get("difficulty"), DEFAULT_DIFFICULTY),
            marks=DEFAULT_QUESTION_MARKS if marks is None else marks,
            negative=DEFAULT_QUESTION_NEGATIVE if negative is None else negative,
            order_index=order_index,
        )

    def import_questions(self, db: Session, *, exam_id: int, import_in: ExamImportRequest) -> ImportResult:
        """Snapshot bank questions and inline questions into an exam, then publish it.

        Runs on the caller's transaction: inserts, the total_marks recomputation and
        publication are committed together or not at all.
        """
        exam = self._get_exam_or_404(db, exam_id)

        sources = []
        for bank_item in crud_question_bank.get_by_ids(db, ids=import_in.question_bank_ids):
            data = {c.name: getattr(bank_item, c.name) for c in bank_item.__table__.columns}
            sources.append((data, bank_item.id))
        for raw in import_in.questions:
            sources.append((raw.model_dump(), None))

        if not sources:
            return ImportResult(count=0, total_marks=exam.total_marks, is_published=exam.is_published)

        start_index = crud_question.count_by_exam(db, exam_id=exam.id)
        questions_in = [
            self._snapshot(exam.id, data, order_index=start_index + offset, question_bank_id=bank_id)
            for offset, (data, bank_id) in enumerate(sources)
        ]
        crud_question.create_multi(db, objs_in=questions_in)

        total_marks = float(crud_question.sum_marks_by_exam(db, exam_id=exam.id) or 0)
        crud_exam.update(db, db_obj=exam, obj_in={"total_marks": total_marks, "is_published": True})
        logger.info(f"Imported {len(questions_in)} questions into exam {exam.id}; total marks {total_marks}")

        return ImportResult(count=len(questions_in), total_marks=total_marks, is_published=True)

    def create_bank_question(self, db: Session, *, question_in: QuestionBankCreate,
                             current_user_context: UserContext) -> QuestionBankItem:
        data = question_in.model_dump()
        if data["created_by_id"] is None:
            teacher = crud_teacher_profile.get_by_user(db, user_id=current_user_context.user.id)
            data["created_by_id"] = teacher.id if teacher else None
        item = crud_question_bank.create(db, obj_in=data)
        return QuestionBankItem.model_validate(item)

    def get_bank_questions(self, db: Session, *, subject: Optional[str] = None) -> List[QuestionBankItem]:
        return [QuestionBankItem.model_validate(q) for q in crud_question_bank.get_all_newest_first(db, subject=subject)]

    def get_ranked_results(self, db: Session, *, exam_id: int, batch_id: Optional[int] = None) -> List[RankedResult]:
        self._get_exam_or_404(db, exam_id)
        user_ids = None
        if batch_id is not None:
            user_ids = crud_student_profile.get_user_ids_by_batch(db, batch_id=batch_id)

        attempts = crud_test_attempt.get_ranked_by_exam(db, exam_id=exam_id, user_ids=user_ids)
        results = []
        for rank, attempt in enumerate(attempts, start=1):
            profile = attempt.user.student_profile
            results.append(RankedResult(
                rank=rank,
                attempt_id=attempt.id,
                user_id=attempt.user_id,
                student_name=profile.full_name if profile else attempt.user.username,
                status=attempt.status,
                physics=attempt.physics,
                chemistry=attempt.chemistry,
                maths=attempt.maths,
                biology=attempt.biology,
                total_score=attempt.total_score,
            ))
        return results

    def record_manual_marks(self, db: Session, *, marks_in: ManualMarksCreate) -> Attempt:
        student = crud_student_profile.get(db, id=marks_in.student_id)
        if not student:
            raise NotFoundException("Student not found.")
        self._get_exam_or_404(db, marks_in.exam_id)

        buckets = marks_in.model_dump(include={"physics", "chemistry", "maths", "biology"})
        data = {
            **buckets,
            "total_score": sum(buckets.values()),
            "status": AttemptStatusEnum.EVALUATED,
        }

        existing = crud_test_attempt.get_by_user_and_exam(db, user_id=student.user_id, exam_id=marks_in.exam_id)
        if existing:
            if existing.submitted_at is None:
                data["submitted_at"] = datetime.now(timezone.utc)
            attempt = crud_test_attempt.update(db, db_obj=existing, obj_in=data)
        else:
            now = datetime.now(timezone.utc)
            attempt = crud_test_attempt.create(db, obj_in={
                **data,
                "user_id": student.user_id,
                "exam_id": marks_in.exam_id,
                "started_at": now,
                "submitted_at": now,
            })
        logger.info(f"Marks recorded for student {student.id} on exam {marks_in.exam_id}")
        return Attempt.model_validate(attempt)


exam_service = ExamService()
