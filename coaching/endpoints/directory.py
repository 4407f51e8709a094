from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from coaching.core.constants import ADMIN_ROLES, RoleEnum, SECURITY_ROLES
from coaching.schemas.batch import Batch, BatchCreate
from coaching.schemas.response import APIResponse
from coaching.schemas.student import AdmissionCreate, AdmissionResult, StudentDirectoryEntry
from coaching.schemas.user import (
    MobileVisibilityAll, MobileVisibilityUpdate, ParentDirectoryEntry, SystemAdmin, SystemAdminCreate,
    UserContext, VisibilityResult
)
from coaching.services.directory import directory_service
from coaching.utils import deps

router = APIRouter()

director_only = deps.require_roles(RoleEnum.SUPER_ADMIN)
staff = deps.require_roles(*ADMIN_ROLES)
security_staff = deps.require_roles(*SECURITY_ROLES)


@router.get("/batches", response_model=APIResponse[List[Batch]])
def get_batches(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff)
):
    return APIResponse(message="Batches retrieved successfully", data=directory_service.get_batches(db))


@router.post("/batches", response_model=APIResponse[Batch], status_code=status.HTTP_201_CREATED)
def create_batch(
    *,
    db: Session = Depends(deps.get_transactional_db),
    batch_in: BatchCreate,
    context: UserContext = Depends(director_only)
):
    new_batch = directory_service.create_batch(db, batch_in=batch_in)
    return APIResponse(message="Batch created successfully", data=new_batch)


@router.post("/admissions", response_model=APIResponse[AdmissionResult], status_code=status.HTTP_201_CREATED)
def admit_student(
    *,
    db: Session = Depends(deps.get_transactional_db),
    admission_in: AdmissionCreate,
    context: UserContext = Depends(director_only)
):
    """Admit a student. Student, parent and their profiles are created together or not at all."""
    result = directory_service.admit_student(db, admission_in=admission_in)
    return APIResponse(message="Student admitted successfully", data=result)


@router.get("/students", response_model=APIResponse[List[StudentDirectoryEntry]])
def get_students(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff),
    batch_id: Optional[int] = Query(None)
):
    students = directory_service.get_students(db, batch_id=batch_id)
    return APIResponse(message="Students retrieved successfully", data=students)


@router.get("/security/admins", response_model=APIResponse[List[SystemAdmin]])
def get_system_admins(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(security_staff)
):
    return APIResponse(message="System admins retrieved successfully", data=directory_service.get_system_admins(db))


@router.post("/security/admins", response_model=APIResponse[SystemAdmin], status_code=status.HTTP_201_CREATED)
def create_system_admin(
    *,
    db: Session = Depends(deps.get_transactional_db),
    admin_in: SystemAdminCreate,
    context: UserContext = Depends(security_staff)
):
    new_admin = directory_service.create_system_admin(db, admin_in=admin_in)
    return APIResponse(message="System admin created successfully", data=new_admin)


@router.get("/security/directory", response_model=APIResponse[List[ParentDirectoryEntry]])
def get_parent_directory(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(security_staff)
):
    return APIResponse(message="Parent directory retrieved successfully", data=directory_service.get_parent_directory(db))


@router.patch("/security/mobile-visibility", response_model=APIResponse[VisibilityResult])
def set_mobile_visibility(
    *,
    db: Session = Depends(deps.get_transactional_db),
    visibility_in: MobileVisibilityUpdate,
    context: UserContext = Depends(security_staff)
):
    result = directory_service.set_mobile_visibility(
        db, parent_id=visibility_in.parent_id, is_visible=visibility_in.is_visible
    )
    return APIResponse(message="Mobile visibility updated", data=result)


@router.patch("/security/mobile-visibility/all", response_model=APIResponse[VisibilityResult])
def set_mobile_visibility_for_all(
    *,
    db: Session = Depends(deps.get_transactional_db),
    visibility_in: MobileVisibilityAll,
    context: UserContext = Depends(security_staff)
):
    result = directory_service.set_mobile_visibility_for_all(db, is_visible=visibility_in.is_visible)
    return APIResponse(message="Mobile visibility updated for all parents", data=result)
