from pydantic import BaseModel
from typing import Optional

from coaching.core.constants import RoleEnum


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenPayload(BaseModel):
    sub: str
    username: str
    role: RoleEnum
    jti: Optional[str] = None
    exp: Optional[int] = None

    @property
    def user_id(self) -> int:
        return int(self.sub)


class LoginUser(BaseModel):
    id: int
    username: str
    role: RoleEnum


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: LoginUser
