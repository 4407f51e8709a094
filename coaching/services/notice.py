import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from coaching.core.config import settings
from coaching.core.constants import NoticeTargetEnum, RoleEnum
from coaching.core.exceptions import InvalidStateException, NotFoundException
from coaching.crud.batch import batch as crud_batch
from coaching.crud.notice import notice as crud_notice
from coaching.crud.push_subscription import push_subscription as crud_push_subscription
from coaching.crud.student_profile import student_profile as crud_student_profile
from coaching.crud.user import user as crud_user
from coaching.schemas.notice import (
    Notice, NoticeCreate, NoticeCreated, PushSubscription, PushSubscriptionCreate, PushSubscriptionIn
)
from coaching.schemas.user import UserContext

logger = logging.getLogger(__name__)


class NoticeService:

    def resolve_recipients(self, db: Session, *, notice_in: NoticeCreate) -> Tuple[List[int], Dict[str, Any]]:
        """Resolve a notice target to user ids, plus the scoping key stored on the notice row."""
        if notice_in.target == NoticeTargetEnum.GLOBAL:
            return crud_user.get_active_ids_by_role(db, role=RoleEnum.STUDENT), {}

        if notice_in.target == NoticeTargetEnum.BATCH:
            if not crud_batch.get(db, id=notice_in.batch_id):
                raise NotFoundException("Batch not found.")
            user_ids = crud_student_profile.get_user_ids_by_batch(db, batch_id=notice_in.batch_id, active_only=True)
            return user_ids, {"batch_id": notice_in.batch_id}

        student = crud_student_profile.get(db, id=notice_in.student_id)
        if not student:
            raise NotFoundException("Student not found.")

        if notice_in.target == NoticeTargetEnum.STUDENT:
            return [student.user_id], {"student_id": student.id}

        if not student.parent:
            raise InvalidStateException("This student has no parent linked.")
        return [student.parent.user_id], {"parent_id": student.parent.id}

    def create_notice(self, db: Session, *, notice_in: NoticeCreate) -> Tuple[NoticeCreated, Dict[str, Any]]:
        """Persist a notice with its frozen audience.

        Returns the notice and the push event to publish once the transaction has
        committed.
        """
        user_ids, scope = self.resolve_recipients(db, notice_in=notice_in)
        user_ids = list(dict.fromkeys(user_ids))

        new_notice = crud_notice.create(db, obj_in={
            "title": notice_in.title,
            "content": notice_in.content,
            "target": notice_in.target,
            **scope,
        })
        crud_notice.add_recipients(db, notice_id=new_notice.id, user_ids=user_ids)
        logger.info(f"Notice {new_notice.id} ({notice_in.target.value}) created for {len(user_ids)} recipients")

        subscriptions = crud_push_subscription.get_for_users(db, user_ids=user_ids)
        event = {
            "notice_id": new_notice.id,
            "title": new_notice.title,
            "body": new_notice.content,
            "url": notice_in.url or settings.PUSH_DEFAULT_URL,
            "subscriptions": [
                {"endpoint": s.endpoint, "keys": {"p256dh": s.p256dh, "auth": s.auth}}
                for s in subscriptions
            ],
        }
        created = NoticeCreated(**Notice.model_validate(new_notice).model_dump(), recipient_count=len(user_ids))
        return created, event

    def get_notices(self, db: Session) -> List[Notice]:
        return [Notice.model_validate(n) for n in crud_notice.get_all_newest_first(db)]

    def delete_notice(self, db: Session, *, notice_id: int) -> Notice:
        existing = crud_notice.get(db, id=notice_id)
        if not existing:
            raise NotFoundException("Notice not found.")
        result = Notice.model_validate(existing)
        crud_notice.delete(db, id=notice_id)
        return result

    def get_my_notices(self, db: Session, *, current_user_context: UserContext,
                       skip: int = 0, limit: int = 100) -> List[Notice]:
        notices = crud_notice.get_for_user(db, user_id=current_user_context.user.id, skip=skip, limit=limit)
        return [Notice.model_validate(n) for n in notices]

    def subscribe(self, db: Session, *, subscription_in: PushSubscriptionIn,
                  current_user_context: UserContext) -> PushSubscription:
        data = PushSubscriptionCreate(
            user_id=current_user_context.user.id,
            endpoint=subscription_in.endpoint,
            p256dh=subscription_in.keys.p256dh,
            auth=subscription_in.keys.auth,
        )
        existing = crud_push_subscription.get_by_endpoint(db, endpoint=subscription_in.endpoint)
        if existing:
            subscription = crud_push_subscription.update(db, db_obj=existing, obj_in=data)
        else:
            subscription = crud_push_subscription.create(db, obj_in=data)
        return PushSubscription.model_validate(subscription)


notice_service = NoticeService()
