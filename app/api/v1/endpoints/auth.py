from typing import Annotated, Any
import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api import deps
from app.core import security
from app.core.rate_limit import limiter, AUTH_LIMIT
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.response import APIResponse
from app.schemas.token import Token
from app.schemas.user import UserCreate, UserRead, LoginRequest, VerificationResult
from app.services.email import email_service, VERIFY_EMAIL_TEMPLATE
from app.worker import send_email_task

router = APIRouter()
logger = logging.getLogger(__name__)

def queue_verification_email(user: User) -> None:
    token = security.create_verification_token(user.id)
    try:
        send_email_task.delay(
            email_to=user.email,
            subject="Verify your email",
            html_template=VERIFY_EMAIL_TEMPLATE,
            environment=email_service.verification_context(user.full_name, token),
        )
    except Exception as e:
        logger.error(f"Could not queue verification email for user {user.id}: {e}")

@router.post("/signup", response_model=APIResponse[UserRead])
@limiter.limit(AUTH_LIMIT)
async def create_user(
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db)],
    user_in: UserCreate,
) -> Any:
    if user_in.role == UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="Admin accounts cannot be self-registered")

    result = await session.execute(select(User).where(User.email == user_in.email))
    if result.scalars().first():
        raise HTTPException(
            status_code=400,
            detail="The user with this email already exists in the system.",
        )

    user = User(
        **user_in.model_dump(exclude={"password"}),
        hashed_password=security.get_password_hash(user_in.password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)

    queue_verification_email(user)
    return APIResponse(message="User created successfully", data=user)

@router.post("/login", response_model=APIResponse[Token])
@limiter.limit(AUTH_LIMIT)
async def login_access_token(
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db)],
    form_data: LoginRequest,
) -> Any:
    result = await session.execute(select(User).where(User.email == form_data.email))
    user = result.scalars().first()
    if not user or not security.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=400, detail="Incorrect email or password")
    elif not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    token = Token(access_token=security.create_access_token(user.id), token_type="bearer")
    return APIResponse(message="Login successful", data=token)

@router.post("/verify-email", response_model=APIResponse[VerificationResult])
async def verify_email(
    session: Annotated[AsyncSession, Depends(deps.get_db)],
    token: str,
) -> Any:
    """
    Confirm an email address from the link sent at signup.
    """
    subject = security.verify_token(token, security.VERIFICATION_TOKEN_TYPE)
    if subject is None:
        raise HTTPException(status_code=400, detail="Invalid or expired verification token")

    try:
        user_id = uuid.UUID(subject)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid or expired verification token")

    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if not user.is_verified:
        user.is_verified = True
        session.add(user)
        await session.commit()
        logger.info(f"User {user.id} verified their email")

    return APIResponse(message="Email verified successfully", data=VerificationResult(verified=True))

@router.post("/resend-verification", response_model=APIResponse[dict])
@limiter.limit(AUTH_LIMIT)
async def resend_verification(
    request: Request,
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> Any:
    if current_user.is_verified:
        raise HTTPException(status_code=400, detail="Email already verified")

    queue_verification_email(current_user)
    return APIResponse(message="Verification email sent", data={})
