import logging
from sqlalchemy.orm import Session

from coaching.core.exceptions import UnauthorizedException
from coaching.core.security import verify_password, create_access_token
from coaching.crud.user import user as crud_user
from coaching.schemas.token import LoginResponse, LoginUser
from coaching.schemas.user import User, UserContext

logger = logging.getLogger(__name__)


class AuthService:
    def login(self, db: Session, *, username: str, password: str) -> LoginResponse:
        user = crud_user.get_by_username(db, username=username.strip())
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Failed login attempt for username '{username}'")
            raise UnauthorizedException("Incorrect username or password")

        if not user.is_active:
            raise UnauthorizedException("User account is inactive")

        access_token = create_access_token(user_id=user.id, username=user.username, role=user.role.value)
        logger.info(f"User {user.id} logged in as {user.role.value}")

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            user=LoginUser(id=user.id, username=user.username, role=user.role)
        )

    def get_me(self, current_user_context: UserContext) -> User:
        return current_user_context.user


auth_service = AuthService()
