from typing import Annotated
import uuid
from fastapi import Depends, Header, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import security
from app.core.errors import Forbidden, Unauthenticated
from app.db.session import get_db
from app.models.enums import UserRole
from app.models.user import User
from app.services.delivery import NotificationDeliveryClient, SERVICE_KEY_HEADER, delivery_client
from app.services.notifications import NotificationGateway, PrivilegedNotificationWriter

class PageParams:
    def __init__(
        self,
        page: Annotated[int, Query(ge=1, description="Page number")] = 1,
        limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

reuseable_oauth2 = HTTPBearer(auto_error=False)

async def get_current_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(reuseable_oauth2)],
) -> User:
    if token is None:
        raise Unauthenticated()

    subject = security.verify_token(token.credentials)
    if subject is None:
        raise Unauthenticated("Could not validate credentials")

    try:
        user_id = uuid.UUID(subject)
    except ValueError:
        raise Unauthenticated("Could not validate credentials")

    user = await session.get(User, user_id)
    if not user:
        raise Unauthenticated("User not found")
    if not user.is_active:
        raise Forbidden("Inactive user")
    return user

async def get_current_pharmacy(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    if current_user.role != UserRole.PHARMACY:
        raise Forbidden("Only pharmacy accounts can perform this action")
    return current_user

async def get_notification_gateway(
    session: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> NotificationGateway:
    return NotificationGateway(session, current_user)

async def get_privileged_writer(
    session: Annotated[AsyncSession, Depends(get_db)],
    service_key: Annotated[str | None, Header(alias=SERVICE_KEY_HEADER)] = None,
) -> PrivilegedNotificationWriter:
    return PrivilegedNotificationWriter(session, service_key)

def get_delivery_client() -> NotificationDeliveryClient:
    return delivery_client
