from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from coaching.core.database import Base
from coaching.core.constants import EnquiryStatusEnum

class Enquiry(Base):
    __tablename__ = "enquiries"

    id = Column(Integer, primary_key=True, index=True)
    student_name = Column(String, nullable=False)
    mobile = Column(String, nullable=False)
    course = Column(String, nullable=True)
    source = Column(String, nullable=True)
    alloted_to = Column(String, nullable=True)
    remarks = Column(String, nullable=True)
    status = Column(Enum(EnquiryStatusEnum), nullable=False, default=EnquiryStatusEnum.PENDING)
    follow_up_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
