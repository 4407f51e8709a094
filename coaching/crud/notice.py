from sqlalchemy.orm import Session, selectinload
from typing import List

from coaching.crud.base import CRUDBase
from coaching.models.notice import Notice, NoticeRecipient
from coaching.schemas.notice import NoticeCreate

class CRUDNotice(CRUDBase[Notice, NoticeCreate, NoticeCreate]):
    """CRUD operations for Notices."""

    def get_all_newest_first(self, db: Session) -> List[Notice]:
        return (
            db.query(Notice)
            .options(selectinload(Notice.batch))
            .order_by(Notice.created_at.desc(), Notice.id.desc())
            .all()
        )

    def get_for_user(self, db: Session, *, user_id: int, skip: int = 0, limit: int = 100) -> List[Notice]:
        return (
            db.query(Notice)
            .join(NoticeRecipient, NoticeRecipient.notice_id == Notice.id)
            .filter(NoticeRecipient.user_id == user_id)
            .order_by(Notice.created_at.desc(), Notice.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def add_recipients(self, db: Session, *, notice_id: int, user_ids: List[int]) -> List[NoticeRecipient]:
        recipients = [NoticeRecipient(notice_id=notice_id, user_id=user_id) for user_id in user_ids]
        db.add_all(recipients)
        db.flush()
        return recipients

    def get_recipient_ids(self, db: Session, *, notice_id: int) -> List[int]:
        rows = db.query(NoticeRecipient.user_id).filter(NoticeRecipient.notice_id == notice_id).all()
        return [row[0] for row in rows]

notice = CRUDNotice(Notice)
