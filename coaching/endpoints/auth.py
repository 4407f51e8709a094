from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coaching.schemas.response import APIResponse
from coaching.schemas.token import LoginRequest, LoginResponse
from coaching.schemas.user import User, UserContext
from coaching.services.auth import auth_service
from coaching.utils import deps

router = APIRouter()

@router.post("/login", response_model=APIResponse[LoginResponse])
def login_for_access_token(
    request: LoginRequest,
    db: Session = Depends(deps.get_db)
):
    """Exchange a username and password for a bearer token."""
    login_response = auth_service.login(db, username=request.username, password=request.password)
    return APIResponse(message="Login successful", data=login_response)

@router.get("/me", response_model=APIResponse[User])
def read_current_user(
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    return APIResponse(message="User retrieved successfully", data=auth_service.get_me(context))
