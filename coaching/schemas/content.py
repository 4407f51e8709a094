from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from coaching.core.constants import EnquiryStatusEnum


class ResourceCreate(BaseModel):
    title: str
    url: str
    resource_type: str = "VIDEO"
    batch_id: Optional[int] = None

    @field_validator('batch_id')
    @classmethod
    def validate_ids(cls, v):
        if v == 0:
            return None
        return v


class Resource(ResourceCreate):
    id: int
    batch_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EnquiryCreate(BaseModel):
    student_name: str
    mobile: str
    course: Optional[str] = None
    source: Optional[str] = None
    alloted_to: Optional[str] = None
    remarks: Optional[str] = None


class EnquiryStatusUpdate(BaseModel):
    status: Optional[EnquiryStatusEnum] = None
    follow_up_count: Optional[int] = Field(default=None, ge=0)
    alloted_to: Optional[str] = None
    remarks: Optional[str] = None


class Enquiry(EnquiryCreate):
    id: int
    status: EnquiryStatusEnum
    follow_up_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
