import logging
from typing import List

from sqlalchemy.orm import Session

from coaching.core.constants import EnquiryStatusEnum
from coaching.core.exceptions import NotFoundException
from coaching.crud.batch import batch as crud_batch
from coaching.crud.enquiry import enquiry as crud_enquiry
from coaching.crud.resource import resource as crud_resource
from coaching.models.resource import Resource as ResourceModel
from coaching.schemas.content import Enquiry, EnquiryCreate, EnquiryStatusUpdate, Resource, ResourceCreate
from coaching.schemas.user import UserContext
from coaching.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def _to_resource(resource: ResourceModel) -> Resource:
    result = Resource.model_validate(resource)
    result.batch_name = resource.batch.name if resource.batch else None
    return result


class ContentService:
    """Study resources and admission enquiries."""

    def create_resource(self, db: Session, *, resource_in: ResourceCreate) -> Resource:
        if resource_in.batch_id is not None and not crud_batch.get(db, id=resource_in.batch_id):
            raise NotFoundException("Batch not found.")
        resource = crud_resource.create(db, obj_in=resource_in)
        return _to_resource(resource)

    def get_resources(self, db: Session) -> List[Resource]:
        return [_to_resource(r) for r in crud_resource.get_all_newest_first(db)]

    def delete_resource(self, db: Session, *, resource_id: int) -> Resource:
        existing = crud_resource.get(db, id=resource_id)
        if not existing:
            raise NotFoundException("Resource not found.")
        result = _to_resource(existing)
        crud_resource.delete(db, id=resource_id)
        return result

    def get_my_resources(self, db: Session, *, current_user_context: UserContext) -> List[Resource]:
        student = permission_helper.get_student_profile_or_404(db, current_user_context)
        return [_to_resource(r) for r in crud_resource.get_for_batch(db, batch_id=student.batch_id)]

    def create_enquiry(self, db: Session, *, enquiry_in: EnquiryCreate) -> Enquiry:
        data = enquiry_in.model_dump()
        data["status"] = EnquiryStatusEnum.PENDING
        enquiry = crud_enquiry.create(db, obj_in=data)
        logger.info(f"Enquiry {enquiry.id} recorded for {enquiry.student_name}")
        return Enquiry.model_validate(enquiry)

    def get_enquiries(self, db: Session) -> List[Enquiry]:
        return [Enquiry.model_validate(e) for e in crud_enquiry.get_all_newest_first(db)]

    def update_enquiry_status(self, db: Session, *, enquiry_id: int, update_in: EnquiryStatusUpdate) -> Enquiry:
        enquiry = crud_enquiry.get(db, id=enquiry_id)
        if not enquiry:
            raise NotFoundException("Enquiry not found.")
        enquiry = crud_enquiry.update(db, db_obj=enquiry, obj_in=update_in)
        return Enquiry.model_validate(enquiry)


content_service = ContentService()
