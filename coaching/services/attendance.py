import logging
from typing import List

from sqlalchemy.orm import Session

from coaching.core.exceptions import NotFoundException
from coaching.crud.attendance import attendance as crud_attendance
from coaching.crud.batch import batch as crud_batch
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.schemas.attendance import (
    AttendanceCreate, AttendanceHistory, AttendanceRecord, AttendanceSave, AttendanceSaveResult, AttendanceStat
)
from coaching.schemas.user import UserContext
from coaching.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def _percentage(present: int, total: int) -> int:
    return round(present / total * 100) if total > 0 else 0


class AttendanceService:

    def save_attendance(self, db: Session, *, attendance_in: AttendanceSave) -> AttendanceSaveResult:
        if not crud_batch.get(db, id=attendance_in.batch_id):
            raise NotFoundException("Batch not found.")

        count = 0
        for student_id, is_present in attendance_in.records.items():
            if not crud_student_profile.get(db, id=student_id):
                raise NotFoundException(f"Student {student_id} not found.")
            existing = crud_attendance.get_by_student_and_date(db, student_id=student_id, on=attendance_in.date)
            if existing:
                crud_attendance.update(db, db_obj=existing, obj_in={"is_present": is_present})
            else:
                crud_attendance.create(db, obj_in=AttendanceCreate(
                    student_id=student_id,
                    batch_id=attendance_in.batch_id,
                    date=attendance_in.date,
                    is_present=is_present,
                    subject=attendance_in.subject,
                ))
            count += 1
        logger.info(f"Attendance saved for {count} students of batch {attendance_in.batch_id} on {attendance_in.date}")
        return AttendanceSaveResult(count=count)

    def get_batch_stats(self, db: Session, *, batch_id: int) -> List[AttendanceStat]:
        stats = []
        for student in crud_student_profile.get_by_batch(db, batch_id=batch_id):
            total = len(student.attendance)
            present = sum(1 for record in student.attendance if record.is_present)
            stats.append(AttendanceStat(
                student_id=student.id,
                name=student.full_name,
                present=present,
                total=total,
                percentage=_percentage(present, total),
            ))
        return stats

    def get_my_history(self, db: Session, *, current_user_context: UserContext) -> AttendanceHistory:
        student = permission_helper.get_student_profile_or_404(db, current_user_context)
        records = crud_attendance.get_by_student(db, student_id=student.id)
        present = sum(1 for record in records if record.is_present)
        return AttendanceHistory(
            present=present,
            total=len(records),
            percentage=_percentage(present, len(records)),
            history=[AttendanceRecord.model_validate(r) for r in records],
        )


attendance_service = AttendanceService()
