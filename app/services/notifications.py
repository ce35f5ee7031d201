"""
Notification access gateway.

Two capability objects write notifications:

* ``NotificationGateway`` is built from a resolved caller and every statement
  it issues is filtered on ``user_id = caller.id``.
* ``PrivilegedNotificationWriter`` is built from the server-held service key
  and may insert rows owned by any user. It never reads, updates or deletes.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import settings
from app.core.errors import (
    Forbidden,
    MissingServiceCredential,
    NotFound,
    ServiceNotConfigured,
    StoreError,
    Unauthenticated,
    ValidationFailed,
)
from app.core.security import service_key_matches
from app.models.enums import NotificationType
from app.models.notification import Notification
from app.models.user import User

logger = logging.getLogger(__name__)


def build_notification(
    owner_id: uuid.UUID | str | None,
    title: str | None,
    message: str | None,
    type: str | None = None,
    data: dict[str, Any] | None = None,
) -> Notification:
    """
    Validate the required fields and build an unread notification row.
    """
    missing = [
        name
        for name, value in (("user_id", owner_id), ("title", title), ("message", message))
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationFailed(f"Missing required fields: {', '.join(missing)}")

    try:
        owner = owner_id if isinstance(owner_id, uuid.UUID) else uuid.UUID(str(owner_id))
    except ValueError:
        raise ValidationFailed("user_id is not a valid identifier")

    return Notification(
        user_id=owner,
        title=title,
        message=message,
        type=type or NotificationType.PHARMACY.value,
        read=False,
        data=data,
    )


class _StoreMixin:
    session: AsyncSession

    async def _run(self, stmt, *, commit: bool = False):
        try:
            result = await self.session.execute(stmt)
            if commit:
                await self.session.commit()
            return result
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Notification store error: {e}")
            raise StoreError(str(e.__class__.__name__)) from e

    async def _insert(self, notification: Notification) -> Notification:
        try:
            self.session.add(notification)
            await self.session.commit()
            await self.session.refresh(notification)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to insert notification: {e}")
            raise StoreError(str(e.__class__.__name__)) from e
        return notification


class NotificationGateway(_StoreMixin):
    """
    Caller-scoped notification operations.
    """

    def __init__(self, session: AsyncSession, caller: User | None):
        if caller is None:
            raise Unauthenticated()
        self.session = session
        self.caller_id = caller.id

    def _owned(self, stmt):
        return stmt.where(Notification.user_id == self.caller_id)

    async def list(self, limit: int | None = None) -> list[Notification]:
        limit = min(limit or settings.NOTIFICATIONS_PAGE_SIZE, settings.NOTIFICATIONS_MAX_PAGE_SIZE)
        stmt = (
            self._owned(select(Notification))
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        result = await self._run(stmt)
        return list(result.scalars().all())

    async def unread_count(self) -> int:
        stmt = self._owned(
            select(func.count()).select_from(Notification)
        ).where(Notification.read == False)  # noqa: E712
        result = await self._run(stmt)
        return result.scalar_one()

    async def mark_as_read(self, notification_id: uuid.UUID) -> None:
        # A row owned by someone else simply does not match.
        stmt = (
            self._owned(update(Notification))
            .where(Notification.id == notification_id)
            .values(read=True, updated_at=datetime.now(timezone.utc))
        )
        await self._run(stmt, commit=True)

    async def mark_all_as_read(self) -> int:
        stmt = (
            self._owned(update(Notification))
            .where(Notification.read == False)  # noqa: E712
            .values(read=True, updated_at=datetime.now(timezone.utc))
        )
        result = await self._run(stmt, commit=True)
        return result.rowcount

    async def delete(self, notification_id: uuid.UUID) -> None:
        stmt = self._owned(delete(Notification)).where(Notification.id == notification_id)
        await self._run(stmt, commit=True)

    async def delete_all(self) -> int:
        result = await self._run(self._owned(delete(Notification)), commit=True)
        return result.rowcount

    async def create_self(
        self,
        title: str | None,
        message: str | None,
        type: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        notification = build_notification(self.caller_id, title, message, type, data)
        notification = await self._insert(notification)
        logger.info(f"Notification {notification.id} created by user {self.caller_id} for themself")
        return notification


class PrivilegedNotificationWriter(_StoreMixin):
    """
    Cross-user notification inserts, gated by the service key.
    """

    def __init__(self, session: AsyncSession, credential: str | None):
        if not settings.SERVICE_ROLE_KEY:
            raise ServiceNotConfigured()
        if not credential:
            raise MissingServiceCredential()
        if not service_key_matches(credential):
            raise Forbidden("Invalid service credential")
        self.session = session

    async def create(
        self,
        target_user_id: uuid.UUID | str | None,
        title: str | None,
        message: str | None,
        type: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        notification = build_notification(target_user_id, title, message, type, data)

        target = await self.session.get(User, notification.user_id)
        if target is None:
            raise NotFound("User not found")

        notification = await self._insert(notification)
        logger.info(f"Notification {notification.id} delivered to user {notification.user_id} (type={notification.type})")
        return notification
