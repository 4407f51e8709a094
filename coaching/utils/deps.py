from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from coaching.core.database import SessionLocal
from coaching.core.constants import RoleEnum
from coaching.core.exceptions import ForbiddenException, UnauthorizedException
from coaching.core.security import decode_access_token
from coaching.crud.user import user as user_crud
from coaching.schemas.token import TokenPayload
from coaching.schemas.user import User, UserContext

http_bearer = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_current_user_with_context(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(http_bearer)
) -> UserContext:
    if credentials is None:
        raise UnauthorizedException("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
        token_data = TokenPayload(**payload)
        user_id = token_data.user_id
    except JWTError:
        raise UnauthorizedException("Could not validate credentials")
    except (ValidationError, ValueError):
        raise UnauthorizedException("Invalid token payload")

    user = user_crud.get(db, id=user_id)
    if not user:
        raise UnauthorizedException("User not found")

    if not user.is_active:
        raise UnauthorizedException("User account is inactive")

    return UserContext(user=User.model_validate(user), role=user.role)

def require_roles(*roles: RoleEnum):
    """Dependency that checks the caller holds one of ``roles`` and returns their context."""
    allowed = set(roles)

    def _verify_role(context: UserContext = Depends(get_current_user_with_context)) -> UserContext:
        if context.role not in allowed:
            raise ForbiddenException("You do not have permission to perform this action.")
        return context
    return _verify_role
