from typing import List, Optional
from sqlalchemy.orm import Session

from coaching.crud.base import CRUDBase
from coaching.models.push_subscription import PushSubscription
from coaching.schemas.notice import PushSubscriptionCreate

class CRUDPushSubscription(CRUDBase[PushSubscription, PushSubscriptionCreate, PushSubscriptionCreate]):
    def get_by_endpoint(self, db: Session, *, endpoint: str) -> Optional[PushSubscription]:
        return db.query(PushSubscription).filter(PushSubscription.endpoint == endpoint).first()

    def get_for_users(self, db: Session, *, user_ids: List[int]) -> List[PushSubscription]:
        if not user_ids:
            return []
        return db.query(PushSubscription).filter(PushSubscription.user_id.in_(user_ids)).all()

push_subscription = CRUDPushSubscription(PushSubscription)
