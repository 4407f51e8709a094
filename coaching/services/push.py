import json
import logging
from typing import Any, Dict

from pywebpush import webpush, WebPushException

from coaching.core.config import settings

logger = logging.getLogger(__name__)


class PushService:
    """Best-effort Web Push delivery. Failures are logged, never raised, never retried."""

    @property
    def enabled(self) -> bool:
        return bool(settings.VAPID_PRIVATE_KEY)

    def send(self, subscription_info: Dict[str, Any], payload: Dict[str, Any]) -> bool:
        if not self.enabled:
            logger.debug("VAPID_PRIVATE_KEY not configured; skipping push delivery")
            return False
        try:
            webpush(
                subscription_info=subscription_info,
                data=json.dumps(payload),
                vapid_private_key=settings.VAPID_PRIVATE_KEY,
                vapid_claims={"sub": f"mailto:{settings.VAPID_CLAIMS_EMAIL}"},
            )
            return True
        except WebPushException as e:
            logger.warning(f"Push delivery to {subscription_info.get('endpoint')} failed: {e}")
            return False
        except Exception:
            # Transport errors and malformed keys must not stop the remaining deliveries.
            logger.exception(f"Push delivery to {subscription_info.get('endpoint')} raised unexpectedly")
            return False

    def handle_notice_created(self, data: Dict[str, Any]):
        subscriptions = data.get("subscriptions") or []
        if not subscriptions:
            return
        payload = {"title": data["title"], "body": data["body"], "url": data["url"]}
        delivered = sum(1 for subscription in subscriptions if self.send(subscription, payload))
        logger.info(f"Notice {data.get('notice_id')}: pushed to {delivered}/{len(subscriptions)} subscriptions")


push_service = PushService()
