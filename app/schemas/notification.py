import uuid
from datetime import datetime
from typing import Any
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

class NotificationRead(SQLModel):
    """
    Schema for reading a notification.
    """
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    message: str
    type: str
    read: bool
    data: dict[str, Any] | None = None
    created_at: datetime

class NotificationFields(SQLModel):
    title: str
    message: str
    type: str | None = None
    data: dict[str, Any] | None = None

    @field_validator("title", "message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

class NotificationCreate(NotificationFields):
    """
    Self-serve create. ``userId`` is accepted for compatibility but the owner
    is always the authenticated caller.
    """
    user_id: str | None = Field(default=None, alias="userId")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "userId": "3f2c0d7e-2b1a-4c55-9a36-3f2f1f9e6b11",
                "title": "Prescription received",
                "message": "Your prescription was sent to nearby pharmacies.",
                "type": "pharmacy",
            }
        },
    )

class NotificationAdminCreate(NotificationFields):
    """
    Privileged create on behalf of another user.
    """
    user_id: uuid.UUID

class NotificationTestCreate(SQLModel):
    title: str = "Test notification"
    message: str = "This is a test notification"

class MarkReadRequest(SQLModel):
    id: uuid.UUID

class NotificationList(SQLModel):
    notifications: list[NotificationRead]
    unread: int

class UnreadCount(SQLModel):
    count: int

class BulkResult(SQLModel):
    updated: int | None = None
    deleted: int | None = None
