from typing import List
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.enquiry import Enquiry
from coaching.schemas.content import EnquiryCreate, EnquiryStatusUpdate

class CRUDEnquiry(CRUDBase[Enquiry, EnquiryCreate, EnquiryStatusUpdate]):
    def get_all_newest_first(self, db: Session) -> List[Enquiry]:
        return db.query(Enquiry).order_by(Enquiry.created_at.desc(), Enquiry.id.desc()).all()

enquiry = CRUDEnquiry(Enquiry)
