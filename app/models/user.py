import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field, DateTime
from pydantic import EmailStr
from app.models.enums import UserRole

class UserBase(SQLModel):
    """
    Base User model containing shared attributes.
    """
    email: EmailStr = Field(unique=True, index=True, description="User's email address")
    full_name: str = Field(description="User's full name")
    phone: str | None = Field(default=None, description="User's phone number")
    role: UserRole = Field(default=UserRole.USER, description="Account role (user, pharmacy, admin)")
    is_active: bool = Field(default=True, description="Whether the user account is active")
    is_verified: bool = Field(default=False, description="Whether the email address is verified")

class User(UserBase, table=True):
    """
    User database model.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, description="Unique identifier for the user")
    hashed_password: str = Field(description="Hashed version of the user's password")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), description="Timestamp when the user was created")
