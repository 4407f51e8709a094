from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime

from coaching.core.constants import RoleEnum


class UserBase(BaseModel):
    """Base user schema with common fields."""
    username: str
    role: RoleEnum = RoleEnum.STUDENT


class UserCreate(UserBase):
    """Schema for creating a user row; the password is already hashed by the service."""
    hashed_password: str
    is_active: bool = True


class UserUpdate(BaseModel):
    hashed_password: Optional[str] = None
    is_active: Optional[bool] = None


class User(UserBase):
    """Main user schema for reading user data."""
    id: int
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class UserContext(BaseModel):
    """The authenticated caller, resolved from the bearer token."""
    user: User
    role: RoleEnum

    model_config = ConfigDict(from_attributes=True)


class TeacherProfileCreate(BaseModel):
    user_id: int
    full_name: str
    qualification: Optional[str] = None


class ParentProfileCreate(BaseModel):
    user_id: int
    mobile: Optional[str] = None
    is_mobile_visible: bool = False


class ParentProfileUpdate(BaseModel):
    mobile: Optional[str] = None
    is_mobile_visible: Optional[bool] = None


class SystemAdminCreate(BaseModel):
    username: str
    password: str
    role: RoleEnum
    full_name: Optional[str] = None
    qualification: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "physics.teacher",
                "password": "changeme123",
                "role": "TEACHER",
                "full_name": "R. Sharma",
                "qualification": "M.Sc Physics"
            }
        }
    )

    @field_validator("username")
    def username_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        return v

    @field_validator("role")
    def validate_role(cls, v):
        if v not in (RoleEnum.SUPER_ADMIN, RoleEnum.TEACHER):
            raise ValueError("System admins can only be created as SUPER_ADMIN or TEACHER.")
        return v


class SystemAdmin(User):
    full_name: Optional[str] = None
    qualification: Optional[str] = None
    created_at: Optional[datetime] = None


class ParentDirectoryEntry(BaseModel):
    """A parent as seen from the security panel."""
    id: int
    user_id: int
    username: str
    mobile: Optional[str] = None
    is_mobile_visible: bool
    children: List[str] = []


class MobileVisibilityUpdate(BaseModel):
    parent_id: int
    is_visible: bool


class MobileVisibilityAll(BaseModel):
    is_visible: bool


class VisibilityResult(BaseModel):
    updated: int
    is_visible: bool
