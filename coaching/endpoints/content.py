from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from coaching.core.constants import ADMIN_ROLES, RoleEnum
from coaching.schemas.content import Enquiry, EnquiryCreate, EnquiryStatusUpdate, Resource, ResourceCreate
from coaching.schemas.notice import Notice, NoticeCreate, NoticeCreated
from coaching.schemas.response import APIResponse
from coaching.schemas.user import UserContext
from coaching.services.content import content_service
from coaching.services.notice import notice_service
from coaching.utils import deps
from coaching.utils.events import event_bus, NOTICE_CREATED

router = APIRouter()

director_only = deps.require_roles(RoleEnum.SUPER_ADMIN)
staff = deps.require_roles(*ADMIN_ROLES)


@router.get("/enquiries", response_model=APIResponse[List[Enquiry]])
def get_enquiries(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(director_only)
):
    return APIResponse(message="Enquiries retrieved successfully", data=content_service.get_enquiries(db))


@router.post("/enquiries", response_model=APIResponse[Enquiry], status_code=status.HTTP_201_CREATED)
def create_enquiry(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enquiry_in: EnquiryCreate,
    context: UserContext = Depends(director_only)
):
    enquiry = content_service.create_enquiry(db, enquiry_in=enquiry_in)
    return APIResponse(message="Enquiry recorded successfully", data=enquiry)


@router.patch("/enquiries/{enquiry_id}/status", response_model=APIResponse[Enquiry])
def update_enquiry_status(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enquiry_id: int,
    update_in: EnquiryStatusUpdate,
    context: UserContext = Depends(director_only)
):
    enquiry = content_service.update_enquiry_status(db, enquiry_id=enquiry_id, update_in=update_in)
    return APIResponse(message="Enquiry updated successfully", data=enquiry)


@router.get("/resources", response_model=APIResponse[List[Resource]])
def get_resources(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff)
):
    return APIResponse(message="Resources retrieved successfully", data=content_service.get_resources(db))


@router.post("/resources", response_model=APIResponse[Resource], status_code=status.HTTP_201_CREATED)
def create_resource(
    *,
    db: Session = Depends(deps.get_transactional_db),
    resource_in: ResourceCreate,
    context: UserContext = Depends(staff)
):
    resource = content_service.create_resource(db, resource_in=resource_in)
    return APIResponse(message="Resource created successfully", data=resource)


@router.delete("/resources/{resource_id}", response_model=APIResponse[Resource])
def delete_resource(
    *,
    db: Session = Depends(deps.get_transactional_db),
    resource_id: int,
    context: UserContext = Depends(staff)
):
    resource = content_service.delete_resource(db, resource_id=resource_id)
    return APIResponse(message="Resource deleted successfully", data=resource)


@router.get("/notices", response_model=APIResponse[List[Notice]])
def get_notices(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(staff)
):
    return APIResponse(message="Notices retrieved successfully", data=notice_service.get_notices(db))


@router.post("/notices", response_model=APIResponse[NoticeCreated], status_code=status.HTTP_201_CREATED)
def create_notice(
    *,
    db: Session = Depends(deps.get_transactional_db),
    notice_in: NoticeCreate,
    background_tasks: BackgroundTasks,
    context: UserContext = Depends(staff)
):
    """Create a notice for its resolved audience; push delivery runs after the response."""
    new_notice, event = notice_service.create_notice(db, notice_in=notice_in)
    background_tasks.add_task(event_bus.publish, NOTICE_CREATED, event)
    return APIResponse(message="Notice created successfully", data=new_notice)


@router.delete("/notices/{notice_id}", response_model=APIResponse[Notice])
def delete_notice(
    *,
    db: Session = Depends(deps.get_transactional_db),
    notice_id: int,
    context: UserContext = Depends(staff)
):
    deleted = notice_service.delete_notice(db, notice_id=notice_id)
    return APIResponse(message="Notice deleted successfully", data=deleted)
