import logging
import uuid
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.models.enums import NotificationType

logger = logging.getLogger(__name__)

SERVICE_KEY_HEADER = "X-Service-Key"


class NotificationDeliveryClient:
    """
    Best-effort delivery of a notification to another user.

    Calls the privileged create endpoint over HTTP. ``deliver`` never raises;
    any failure is logged and reported through its return value so the write
    that triggered it is unaffected.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.APP_URL).rstrip("/")
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}{settings.API_V1_STR}/notifications/create-admin"

    async def deliver(
        self,
        user_id: uuid.UUID | str,
        title: str,
        message: str,
        type: str = NotificationType.PHARMACY.value,
        data: Optional[Dict[str, Any]] = None,
    ) -> bool:
        if not settings.SERVICE_ROLE_KEY:
            logger.error("Cannot deliver notification: SERVICE_ROLE_KEY is not configured")
            return False

        payload = {
            "user_id": str(user_id),
            "title": title,
            "message": message,
            "type": type,
            "data": data,
        }
        headers = {SERVICE_KEY_HEADER: settings.SERVICE_ROLE_KEY}

        logger.info(f"Delivering notification to user {user_id}")
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=settings.DELIVERY_TIMEOUT_SECONDS) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except Exception as e:
            logger.error(f"Error delivering notification to user {user_id}: {e}")
            return False

        if response.is_success:
            logger.info(f"Notification delivered to user {user_id}")
            return True

        logger.error(f"Failed to deliver notification to user {user_id}: {response.status_code} {response.text}")
        return False


delivery_client = NotificationDeliveryClient()
