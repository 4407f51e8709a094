from typing import List, Optional
from sqlalchemy.orm import Session

from coaching.core.constants import RoleEnum
from coaching.crud.base import CRUDBase
from coaching.models.user import User
from coaching.schemas.user import UserCreate, UserUpdate

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def get_by_roles(self, db: Session, *, roles: List[RoleEnum]) -> List[User]:
        return db.query(User).filter(User.role.in_(roles)).order_by(User.username).all()

    def get_active_ids_by_role(self, db: Session, *, role: RoleEnum) -> List[int]:
        rows = db.query(User.id).filter(User.role == role, User.is_active == True).all()
        return [row[0] for row in rows]

user = CRUDUser(User)
