from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.attendance import Attendance
from coaching.schemas.attendance import AttendanceCreate

class CRUDAttendance(CRUDBase[Attendance, AttendanceCreate, AttendanceCreate]):
    def get_by_student_and_date(self, db: Session, *, student_id: int, on: date) -> Optional[Attendance]:
        return (
            db.query(Attendance)
            .filter(Attendance.student_id == student_id, Attendance.date == on)
            .first()
        )

    def get_by_student(self, db: Session, *, student_id: int) -> List[Attendance]:
        return (
            db.query(Attendance)
            .filter(Attendance.student_id == student_id)
            .order_by(Attendance.date.desc())
            .all()
        )

attendance = CRUDAttendance(Attendance)
