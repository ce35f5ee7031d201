from typing import Annotated, List
from datetime import datetime, timezone
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api import deps
from app.api.deps import get_current_pharmacy, get_db, get_delivery_client
from app.core.errors import NotFound, ValidationFailed
from app.core.rate_limit import limiter, API_LIMIT, LIST_LIMIT
from app.models.enums import NotificationType, PrescriptionStatus
from app.models.prescription import Prescription, PrescriptionResponse
from app.models.user import User
from app.schemas.prescription import PrescriptionRead, PrescriptionRespond, PrescriptionResponseRead
from app.schemas.response import APIResponse
from app.services.delivery import NotificationDeliveryClient

router = APIRouter()
logger = logging.getLogger(__name__)

RESPONSE_NOTIFICATION_TITLE = "New response from a pharmacy"
RESPONSE_NOTIFICATION_MESSAGE = "A pharmacy responded to your prescription. Open it to see the details."
OPEN_STATUSES = (PrescriptionStatus.PENDING, PrescriptionStatus.RESPONDED)

@router.get("/prescriptions", response_model=APIResponse[List[PrescriptionRead]])
@limiter.limit(LIST_LIMIT)
async def get_open_prescriptions(
    request: Request,
    current_pharmacy: Annotated[User, Depends(get_current_pharmacy)],
    session: Annotated[AsyncSession, Depends(get_db)],
    pagination: Annotated[deps.PageParams, Depends()]
):
    """
    Prescriptions a pharmacy can still respond to.
    """
    query = (
        select(Prescription)
        .where(Prescription.status.in_(OPEN_STATUSES))
        .order_by(Prescription.created_at.desc())
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    result = await session.execute(query)
    return APIResponse(message="Prescriptions retrieved", data=result.scalars().all())

@router.post("/prescriptions/respond", response_model=APIResponse[PrescriptionResponseRead])
@limiter.limit(API_LIMIT)
async def respond_to_prescription(
    request: Request,
    respond_in: PrescriptionRespond,
    background_tasks: BackgroundTasks,
    current_pharmacy: Annotated[User, Depends(get_current_pharmacy)],
    session: Annotated[AsyncSession, Depends(get_db)],
    delivery: Annotated[NotificationDeliveryClient, Depends(get_delivery_client)],
):
    """
    Respond to a prescription with available medicines and pricing.

    The patient is notified after the response is stored; a failed
    notification does not affect this request.
    """
    prescription = await session.get(Prescription, respond_in.prescription_id)
    if not prescription:
        raise NotFound("Prescription not found")
    if prescription.status not in OPEN_STATUSES:
        raise ValidationFailed(f"Prescription is {prescription.status.value} and no longer accepts responses")

    response = PrescriptionResponse(
        prescription_id=prescription.id,
        pharmacy_id=current_pharmacy.id,
        available_medicines=[m.model_dump(mode="json") for m in respond_in.medicines],
        total_price=respond_in.total_price,
        notes=respond_in.notes,
        estimated_ready_time=respond_in.estimated_time,
    )
    prescription.status = PrescriptionStatus.RESPONDED
    prescription.updated_at = datetime.now(timezone.utc)
    session.add(response)
    session.add(prescription)
    await session.commit()
    await session.refresh(response)

    logger.info(f"Pharmacy {current_pharmacy.id} responded to prescription {prescription.id}")

    background_tasks.add_task(
        delivery.deliver,
        user_id=prescription.user_id,
        title=RESPONSE_NOTIFICATION_TITLE,
        message=RESPONSE_NOTIFICATION_MESSAGE,
        type=NotificationType.PHARMACY.value,
        data={
            "prescription_id": str(prescription.id),
            "pharmacy_id": str(current_pharmacy.id),
            "total_price": float(respond_in.total_price),
            "has_medicines": len(respond_in.medicines) > 0,
        },
    )
    return APIResponse(message="Response submitted", data=response)
