from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from coaching.crud.base import CRUDBase
from coaching.models.resource import Resource
from coaching.schemas.content import ResourceCreate

class CRUDResource(CRUDBase[Resource, ResourceCreate, ResourceCreate]):
    def get_all_newest_first(self, db: Session) -> List[Resource]:
        return (
            db.query(Resource)
            .options(selectinload(Resource.batch))
            .order_by(Resource.created_at.desc(), Resource.id.desc())
            .all()
        )

    def get_for_batch(self, db: Session, *, batch_id: Optional[int]) -> List[Resource]:
        query = db.query(Resource).options(selectinload(Resource.batch))
        if batch_id is None:
            query = query.filter(Resource.batch_id.is_(None))
        else:
            query = query.filter(or_(Resource.batch_id.is_(None), Resource.batch_id == batch_id))
        return query.order_by(Resource.created_at.desc(), Resource.id.desc()).all()

resource = CRUDResource(Resource)
