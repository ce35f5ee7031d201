from datetime import datetime, timedelta, timezone
from typing import Any
import hmac
import bcrypt

from jose import jwt, JWTError
from app.core.config import settings

ACCESS_TOKEN_TYPE = "access"
VERIFICATION_TOKEN_TYPE = "verification"

def create_access_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """
    Creates a JWT access token for the given subject.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject), "type": ACCESS_TOKEN_TYPE}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plain password against a hashed password using bcrypt.
    """
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

def get_password_hash(password: str) -> str:
    """
    Hashes a password using bcrypt.
    """
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

def create_verification_token(subject: str | Any) -> str:
    """
    Creates a JWT email verification token for the given subject.
    """
    expire = datetime.now(timezone.utc) + timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS)
    to_encode = {"exp": expire, "sub": str(subject), "type": VERIFICATION_TOKEN_TYPE}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt

def verify_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> str | None:
    """
    Verifies a token of the given type and returns the subject (user_id) if valid.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != token_type:
        return None
    return payload.get("sub")

def service_key_matches(presented: str) -> bool:
    """
    Constant-time comparison of a presented service key against the configured one.
    """
    if not settings.SERVICE_ROLE_KEY:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), settings.SERVICE_ROLE_KEY.encode("utf-8"))
