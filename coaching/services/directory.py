import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from coaching.core.config import settings
from coaching.core.constants import MASKED_MOBILE_SUFFIX, RoleEnum
from coaching.core.exceptions import ConflictException, NotFoundException
from coaching.core.security import get_password_hash
from coaching.crud.batch import batch as crud_batch
from coaching.crud.parent_profile import parent_profile as crud_parent_profile
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.crud.teacher_profile import teacher_profile as crud_teacher_profile
from coaching.crud.user import user as crud_user
from coaching.models.parent_profile import ParentProfile
from coaching.models.student_profile import StudentProfile
from coaching.models.user import User as UserModel
from coaching.schemas.batch import Batch, BatchCreate
from coaching.schemas.student import AdmissionCreate, AdmissionResult, StudentDirectoryEntry, StudentProfileCreate
from coaching.schemas.user import (
    ParentDirectoryEntry, ParentProfileCreate, SystemAdmin, SystemAdminCreate, TeacherProfileCreate,
    UserCreate, VisibilityResult
)
from coaching.services.finance import project_fee_ledger

logger = logging.getLogger(__name__)

SYSTEM_ROLES = [RoleEnum.SUPER_ADMIN, RoleEnum.TEACHER, RoleEnum.SECURITY_ADMIN]


def mask_mobile(mobile: Optional[str], is_visible: bool) -> Optional[str]:
    if not mobile or is_visible:
        return mobile
    return f"{mobile[:3]}{MASKED_MOBILE_SUFFIX}"


class DirectoryService:

    def _create_user(self, db: Session, *, username: str, password: str, role: RoleEnum) -> UserModel:
        if crud_user.get_by_username(db, username=username):
            raise ConflictException(f"Username '{username}' is already taken.")
        return crud_user.create(db, obj_in=UserCreate(
            username=username, hashed_password=get_password_hash(password), role=role
        ))

    # --- Batches ---

    def create_batch(self, db: Session, *, batch_in: BatchCreate) -> Batch:
        batch = crud_batch.create(db, obj_in=batch_in)
        logger.info(f"Batch {batch.id} '{batch.name}' created")
        return Batch.model_validate(batch)

    def get_batches(self, db: Session) -> List[Batch]:
        return [Batch.model_validate(b) for b in crud_batch.get_all_ordered(db)]

    # --- Admissions & student directory ---

    def _resolve_parent(self, db: Session, admission_in: AdmissionCreate) -> Optional[ParentProfile]:
        if not admission_in.parent_username:
            return None

        existing = crud_user.get_by_username(db, username=admission_in.parent_username)
        if existing:
            if existing.role != RoleEnum.PARENT or not existing.parent_profile:
                raise ConflictException(f"Username '{existing.username}' belongs to a non-parent account.")
            return existing.parent_profile

        parent_user = self._create_user(
            db,
            username=admission_in.parent_username,
            password=admission_in.parent_password or settings.DEFAULT_PARENT_PASSWORD,
            role=RoleEnum.PARENT,
        )
        return crud_parent_profile.create(db, obj_in=ParentProfileCreate(
            user_id=parent_user.id, mobile=admission_in.parent_mobile
        ))

    def admit_student(self, db: Session, *, admission_in: AdmissionCreate) -> AdmissionResult:
        """Create the student login and profile, linking or creating the parent, in one transaction."""
        if admission_in.batch_id is not None and not crud_batch.get(db, id=admission_in.batch_id):
            raise NotFoundException("Batch not found.")
        if crud_user.get_by_username(db, username=admission_in.username):
            raise ConflictException(f"Username '{admission_in.username}' is already taken.")

        parent = self._resolve_parent(db, admission_in)
        student_user = self._create_user(
            db,
            username=admission_in.username,
            password=admission_in.password or settings.DEFAULT_STUDENT_PASSWORD,
            role=RoleEnum.STUDENT,
        )
        profile = crud_student_profile.create(db, obj_in=StudentProfileCreate(
            user_id=student_user.id,
            full_name=admission_in.full_name,
            mobile=admission_in.mobile,
            address=admission_in.address,
            batch_id=admission_in.batch_id,
            parent_id=parent.id if parent else None,
            fee_agreed=admission_in.fee_agreed,
            waive_off=admission_in.waive_off,
            late_penalty=admission_in.late_penalty,
            installments=admission_in.installments,
            next_payment_date=admission_in.next_payment_date,
            fee_agreement_date=admission_in.fee_agreement_date,
            installment_schedule=[item.model_dump(mode="json") for item in admission_in.installment_schedule],
        ))
        logger.info(f"Admitted student {profile.id} ({student_user.username})")

        return AdmissionResult(
            student_id=profile.id,
            user_id=student_user.id,
            username=student_user.username,
            parent_id=parent.id if parent else None,
            parent_username=parent.user.username if parent else None,
        )

    def _directory_entry(self, student: StudentProfile) -> StudentDirectoryEntry:
        paid = sum(record.amount for record in student.fees_paid)
        ledger = project_fee_ledger(
            fee_agreed=student.fee_agreed, waive_off=student.waive_off, paid=paid,
            schedule=student.installment_schedule,
        )
        parent = student.parent
        return StudentDirectoryEntry(
            id=student.id,
            user_id=student.user_id,
            full_name=student.full_name,
            username=student.user.username,
            mobile=student.mobile,
            batch_id=student.batch_id,
            batch_name=student.batch.name if student.batch else None,
            parent_username=parent.user.username if parent else None,
            parent_mobile=mask_mobile(parent.mobile, parent.is_mobile_visible) if parent else None,
            fee_total=ledger.total_fee,
            fee_paid=ledger.paid,
            fee_remaining=ledger.pending,
            installment_schedule=student.installment_schedule or [],
        )

    def get_students(self, db: Session, *, batch_id: Optional[int] = None) -> List[StudentDirectoryEntry]:
        if batch_id is not None:
            students = crud_student_profile.get_by_batch(db, batch_id=batch_id)
        else:
            students = crud_student_profile.get_all_ordered(db)
        return [self._directory_entry(s) for s in students]

    # --- System admins & security panel ---

    def create_system_admin(self, db: Session, *, admin_in: SystemAdminCreate) -> SystemAdmin:
        new_user = self._create_user(db, username=admin_in.username, password=admin_in.password, role=admin_in.role)
        profile = None
        if admin_in.role == RoleEnum.TEACHER:
            profile = crud_teacher_profile.create(db, obj_in=TeacherProfileCreate(
                user_id=new_user.id,
                full_name=admin_in.full_name or admin_in.username,
                qualification=admin_in.qualification,
            ))
        logger.info(f"System admin {new_user.id} created with role {new_user.role.value}")
        return SystemAdmin(
            id=new_user.id,
            username=new_user.username,
            role=new_user.role,
            is_active=new_user.is_active,
            full_name=profile.full_name if profile else admin_in.full_name,
            qualification=profile.qualification if profile else None,
            created_at=new_user.created_at,
        )

    def get_system_admins(self, db: Session) -> List[SystemAdmin]:
        admins = []
        for admin in crud_user.get_by_roles(db, roles=SYSTEM_ROLES):
            profile = admin.teacher_profile
            admins.append(SystemAdmin(
                id=admin.id,
                username=admin.username,
                role=admin.role,
                is_active=admin.is_active,
                full_name=profile.full_name if profile else None,
                qualification=profile.qualification if profile else None,
                created_at=admin.created_at,
            ))
        return admins

    def get_parent_directory(self, db: Session) -> List[ParentDirectoryEntry]:
        return [
            ParentDirectoryEntry(
                id=parent.id,
                user_id=parent.user_id,
                username=parent.user.username,
                mobile=parent.mobile,
                is_mobile_visible=parent.is_mobile_visible,
                children=[child.full_name for child in parent.children],
            )
            for parent in crud_parent_profile.get_all(db)
        ]

    def set_mobile_visibility(self, db: Session, *, parent_id: int, is_visible: bool) -> VisibilityResult:
        parent = crud_parent_profile.get(db, id=parent_id)
        if not parent:
            raise NotFoundException("Parent not found.")
        crud_parent_profile.update(db, db_obj=parent, obj_in={"is_mobile_visible": is_visible})
        logger.info(f"Parent {parent_id} mobile visibility set to {is_visible}")
        return VisibilityResult(updated=1, is_visible=is_visible)

    def set_mobile_visibility_for_all(self, db: Session, *, is_visible: bool) -> VisibilityResult:
        count = crud_parent_profile.set_visibility_for_all(db, is_visible=is_visible)
        logger.info(f"Mobile visibility set to {is_visible} for {count} parents")
        return VisibilityResult(updated=count, is_visible=is_visible)


directory_service = DirectoryService()
