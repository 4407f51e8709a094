from typing import List
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.batch import Batch
from coaching.schemas.batch import BatchCreate, BatchUpdate

class CRUDBatch(CRUDBase[Batch, BatchCreate, BatchUpdate]):
    def get_all_ordered(self, db: Session) -> List[Batch]:
        return db.query(Batch).order_by(Batch.name.asc()).all()

batch = CRUDBatch(Batch)
