from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from coaching.schemas.notice import Notice, PushSubscription, PushSubscriptionIn
from coaching.schemas.response import APIResponse
from coaching.schemas.user import UserContext
from coaching.services.notice import notice_service
from coaching.utils import deps

router = APIRouter()


@router.get("/mine", response_model=APIResponse[List[Notice]])
def get_my_notices(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context),
    skip: int = 0,
    limit: int = 100
):
    notices = notice_service.get_my_notices(db, current_user_context=context, skip=skip, limit=limit)
    return APIResponse(message="Notices retrieved successfully", data=notices)


@router.post("/subscribe", response_model=APIResponse[PushSubscription], status_code=status.HTTP_201_CREATED)
def subscribe_to_push(
    *,
    db: Session = Depends(deps.get_transactional_db),
    subscription_in: PushSubscriptionIn,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    subscription = notice_service.subscribe(db, subscription_in=subscription_in, current_user_context=context)
    return APIResponse(message="Push subscription saved", data=subscription)
