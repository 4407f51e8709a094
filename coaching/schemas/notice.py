from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional, List
from datetime import datetime

from coaching.core.constants import NoticeTargetEnum


class NoticeCreate(BaseModel):
    """A notice and its audience.

    GLOBAL takes no key, BATCH takes ``batch_id``, STUDENT takes ``student_id``
    and PARENT takes the ``student_id`` whose parent should be notified.
    """
    title: str
    content: str
    target: NoticeTargetEnum = NoticeTargetEnum.GLOBAL
    batch_id: Optional[int] = None
    student_id: Optional[int] = None
    url: Optional[str] = None

    @model_validator(mode='after')
    def check_target_keys(self):
        if self.target == NoticeTargetEnum.GLOBAL:
            if self.batch_id is not None or self.student_id is not None:
                raise ValueError("A GLOBAL notice cannot be scoped to a batch or student")
        elif self.target == NoticeTargetEnum.BATCH:
            if self.batch_id is None or self.student_id is not None:
                raise ValueError("A BATCH notice requires batch_id only")
        elif self.batch_id is not None or self.student_id is None:
            raise ValueError(f"A {self.target.value} notice requires student_id only")
        return self


class Notice(BaseModel):
    id: int
    title: str
    content: str
    target: NoticeTargetEnum
    batch_id: Optional[int] = None
    student_id: Optional[int] = None
    parent_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NoticeCreated(Notice):
    recipient_count: int


class PushKeys(BaseModel):
    p256dh: str
    auth: str


class PushSubscriptionIn(BaseModel):
    """Browser PushSubscription JSON, as produced by ``subscription.toJSON()``."""
    endpoint: str
    keys: PushKeys


class PushSubscriptionCreate(BaseModel):
    user_id: int
    endpoint: str
    p256dh: str
    auth: str


class PushSubscription(BaseModel):
    id: int
    user_id: int
    endpoint: str

    model_config = ConfigDict(from_attributes=True)
