from typing import Annotated, List
import uuid
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api import deps
from app.api.deps import get_current_user, get_db
from app.core.errors import NotFound
from app.core.rate_limit import limiter, PRESCRIPTION_LIMIT, LIST_LIMIT
from app.models.prescription import Prescription, PrescriptionResponse
from app.models.user import User
from app.schemas.prescription import PrescriptionCreate, PrescriptionRead, PrescriptionResponseRead
from app.schemas.response import APIResponse

router = APIRouter()

@router.post("/", response_model=APIResponse[PrescriptionRead])
@limiter.limit(PRESCRIPTION_LIMIT)
async def create_prescription(
    request: Request,
    prescription_in: PrescriptionCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_db)]
):
    """
    Upload a new prescription. It starts in the ``pending`` status.
    """
    prescription = Prescription.model_validate(prescription_in, update={"user_id": current_user.id})
    session.add(prescription)
    await session.commit()
    await session.refresh(prescription)
    return APIResponse(message="Prescription created", data=prescription)

@router.get("/", response_model=APIResponse[List[PrescriptionRead]])
@limiter.limit(LIST_LIMIT)
async def get_my_prescriptions(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_db)],
    pagination: Annotated[deps.PageParams, Depends()]
):
    query = (
        select(Prescription)
        .where(Prescription.user_id == current_user.id)
        .order_by(Prescription.created_at.desc())
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    result = await session.execute(query)
    return APIResponse(message="Prescriptions retrieved", data=result.scalars().all())

@router.get("/{prescription_id}/responses", response_model=APIResponse[List[PrescriptionResponseRead]])
@limiter.limit(LIST_LIMIT)
async def get_prescription_responses(
    request: Request,
    prescription_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_db)]
):
    """
    Pharmacy responses to one of the current user's prescriptions.
    """
    result = await session.execute(
        select(Prescription).where(Prescription.id == prescription_id, Prescription.user_id == current_user.id)
    )
    if not result.scalars().first():
        raise NotFound("Prescription not found")

    query = (
        select(PrescriptionResponse)
        .where(PrescriptionResponse.prescription_id == prescription_id)
        .order_by(PrescriptionResponse.created_at.desc())
    )
    result = await session.execute(query)
    return APIResponse(message="Responses retrieved", data=result.scalars().all())
