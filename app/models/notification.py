import uuid
from datetime import datetime, timezone
from typing import Any, Optional
from sqlmodel import SQLModel, Field, JSON, Column, DateTime
from app.models.enums import NotificationType

class Notification(SQLModel, table=True):
    """
    Model for user notifications.

    ``user_id`` is the owner and is never changed after insert.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, description="Unique identifier for the notification")
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True, description="ID of the user receiving the notification")
    title: str = Field(description="Notification title")
    message: str = Field(description="Content of the notification")
    type: str = Field(default=NotificationType.PHARMACY.value, description="Type of notification (e.g., 'pharmacy', 'test')")
    read: bool = Field(default=False, index=True, description="Whether the notification has been read")
    data: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True), description="Optional structured payload")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
