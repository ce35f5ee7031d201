from typing import Annotated
from datetime import datetime, timezone
import logging
import uuid
from fastapi import APIRouter, Depends, Query, Request

from app.api.deps import get_notification_gateway, get_privileged_writer
from app.core.rate_limit import limiter, API_LIMIT, LIST_LIMIT
from app.models.enums import NotificationType
from app.schemas.notification import (
    BulkResult,
    MarkReadRequest,
    NotificationAdminCreate,
    NotificationCreate,
    NotificationList,
    NotificationRead,
    NotificationTestCreate,
    UnreadCount,
)
from app.schemas.response import APIResponse
from app.services.notifications import NotificationGateway, PrivilegedNotificationWriter

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/", response_model=APIResponse[NotificationList])
@limiter.limit(LIST_LIMIT)
async def get_notifications(
    request: Request,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
    limit: Annotated[int | None, Query(ge=1, description="Maximum number of notifications")] = None,
):
    """
    Retrieve the current user's most recent notifications and the unread count.
    """
    notifications = await gateway.list(limit)
    unread = await gateway.unread_count()
    return APIResponse(
        message="Notifications retrieved",
        data=NotificationList(
            notifications=[NotificationRead.model_validate(n) for n in notifications],
            unread=unread,
        ),
    )

@router.get("/unread-count", response_model=APIResponse[UnreadCount])
@limiter.limit(API_LIMIT)
async def get_unread_count(
    request: Request,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
):
    count = await gateway.unread_count()
    return APIResponse(message="Unread count retrieved", data=UnreadCount(count=count))

@router.post("/", response_model=APIResponse[NotificationRead])
@limiter.limit(API_LIMIT)
async def create_notification(
    request: Request,
    notification_in: NotificationCreate,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
):
    """
    Create a notification for the current user.

    The owner is always the authenticated caller; a client-supplied ``userId`` is ignored.
    """
    if notification_in.user_id and notification_in.user_id != str(gateway.caller_id):
        logger.warning(f"Ignoring client-supplied owner {notification_in.user_id} for user {gateway.caller_id}")

    notification = await gateway.create_self(
        notification_in.title,
        notification_in.message,
        notification_in.type,
        notification_in.data,
    )
    return APIResponse(message="Notification created", data=notification)

@router.post("/test", response_model=APIResponse[NotificationRead])
@limiter.limit(API_LIMIT)
async def create_test_notification(
    request: Request,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
    notification_in: NotificationTestCreate | None = None,
):
    """
    Create a diagnostic notification for the current user.
    """
    notification_in = notification_in or NotificationTestCreate()
    notification = await gateway.create_self(
        notification_in.title,
        notification_in.message,
        NotificationType.TEST.value,
        {"test": True, "timestamp": datetime.now(timezone.utc).isoformat()},
    )
    return APIResponse(message="Test notification created", data=notification)

@router.post("/create-admin", response_model=APIResponse[NotificationRead])
async def create_notification_for_user(
    notification_in: NotificationAdminCreate,
    writer: Annotated[PrivilegedNotificationWriter, Depends(get_privileged_writer)],
):
    """
    Create a notification on behalf of another user.

    Requires the server-held service key in the ``X-Service-Key`` header.
    """
    notification = await writer.create(
        notification_in.user_id,
        notification_in.title,
        notification_in.message,
        notification_in.type,
        notification_in.data,
    )
    return APIResponse(message="Notification created", data=notification)

@router.post("/mark-read", response_model=APIResponse[dict])
@limiter.limit(API_LIMIT)
async def mark_as_read(
    request: Request,
    body: MarkReadRequest,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
):
    """
    Mark one of the current user's notifications as read.
    """
    await gateway.mark_as_read(body.id)
    return APIResponse(message="Marked as read", data={})

@router.post("/mark-all-read", response_model=APIResponse[BulkResult])
@limiter.limit(API_LIMIT)
async def mark_all_as_read(
    request: Request,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
):
    updated = await gateway.mark_all_as_read()
    return APIResponse(message="All notifications marked as read", data=BulkResult(updated=updated))

@router.delete("/{notification_id}", response_model=APIResponse[dict])
@limiter.limit(API_LIMIT)
async def delete_notification(
    request: Request,
    notification_id: uuid.UUID,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
):
    await gateway.delete(notification_id)
    return APIResponse(message="Notification deleted", data={})

@router.delete("/", response_model=APIResponse[BulkResult])
@limiter.limit(API_LIMIT)
async def delete_all_notifications(
    request: Request,
    gateway: Annotated[NotificationGateway, Depends(get_notification_gateway)],
):
    deleted = await gateway.delete_all()
    return APIResponse(message="All notifications deleted", data=BulkResult(deleted=deleted))
