import uuid
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field
from app.models.enums import PrescriptionStatus

class Medicine(SQLModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    available: bool = True

class PrescriptionCreate(SQLModel):
    image_urls: list[str] = Field(min_length=1)
    notes: str | None = None
    user_latitude: Decimal | None = None
    user_longitude: Decimal | None = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "image_urls": ["https://storage.dawai.app/prescriptions/abc.jpg"],
                "notes": "Needed before tonight",
            }
        }
    }

class PrescriptionRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    image_urls: list[str]
    notes: str | None
    status: PrescriptionStatus
    user_latitude: Decimal | None = None
    user_longitude: Decimal | None = None
    created_at: datetime

class PrescriptionRespond(SQLModel):
    """
    Schema for a pharmacy responding to a prescription.
    """
    prescription_id: uuid.UUID
    medicines: list[Medicine]
    total_price: Decimal = Field(ge=0)
    notes: str | None = None
    estimated_time: str | None = None

class PrescriptionResponseRead(SQLModel):
    id: uuid.UUID
    prescription_id: uuid.UUID
    pharmacy_id: uuid.UUID
    available_medicines: list[Medicine]
    total_price: Decimal
    notes: str | None
    estimated_ready_time: str | None
    created_at: datetime
