import uuid
from datetime import datetime
from pydantic import EmailStr
from sqlmodel import SQLModel, Field
from app.models.enums import UserRole

class LoginRequest(SQLModel):
    """
    Schema for user login request.
    """
    email: EmailStr
    password: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "patient@example.com",
                "password": "securepassword123"
            }
        }
    }

class UserCreate(SQLModel):
    email: EmailStr
    password: str = Field(min_length=8)
    full_name: str = Field(min_length=1)
    phone: str | None = None
    role: UserRole = UserRole.USER

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "patient@example.com",
                "password": "securepassword123",
                "full_name": "Sara Ali",
                "phone": "+201000000000",
                "role": "user"
            }
        }
    }

class UserRead(SQLModel):
    id: uuid.UUID
    email: EmailStr
    full_name: str
    phone: str | None
    role: UserRole
    is_active: bool
    is_verified: bool
    created_at: datetime

class VerificationResult(SQLModel):
    verified: bool
