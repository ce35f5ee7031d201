import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from sqlmodel import SQLModel, Field, JSON, Column, DateTime
from app.models.enums import PrescriptionStatus

class Prescription(SQLModel, table=True):
    """
    A prescription uploaded by a patient, waiting for pharmacy responses.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, description="Unique identifier for the prescription")
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True, description="ID of the patient who uploaded it")
    image_urls: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False), description="Storage URLs of the prescription images")
    notes: str | None = Field(default=None, description="Notes from the patient")
    status: PrescriptionStatus = Field(default=PrescriptionStatus.PENDING, description="Current status of the prescription")
    user_latitude: Decimal | None = Field(default=None, max_digits=10, decimal_places=8)
    user_longitude: Decimal | None = Field(default=None, max_digits=11, decimal_places=8)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))

class PrescriptionResponse(SQLModel, table=True):
    """
    A pharmacy's answer to a prescription: available medicines and pricing.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, description="Unique identifier for the response")
    prescription_id: uuid.UUID = Field(foreign_key="prescription.id", index=True, description="ID of the prescription")
    pharmacy_id: uuid.UUID = Field(foreign_key="user.id", description="ID of the responding pharmacy account")
    available_medicines: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False), description="Medicines with price and availability")
    total_price: Decimal = Field(max_digits=10, decimal_places=2, description="Total price quoted")
    notes: str | None = Field(default=None, description="Notes from the pharmacy")
    estimated_ready_time: str | None = Field(default=None, description="e.g. '30 minutes'")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
