from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime


class BatchBase(BaseModel):
    name: str
    start_year: Optional[str] = None
    strength: int = Field(default=0, ge=0)
    fee: float = Field(default=0, ge=0)

    @field_validator("name")
    def name_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Batch name cannot be empty")
        return v.strip()


class BatchCreate(BatchBase):
    pass


class BatchUpdate(BaseModel):
    name: Optional[str] = None
    start_year: Optional[str] = None
    strength: Optional[int] = None
    fee: Optional[float] = None


class Batch(BatchBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
