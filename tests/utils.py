import uuid
from datetime import datetime
from httpx import AsyncClient
from app.core.config import settings
from app.models.notification import Notification
from app.models.user import User

async def create_user(client: AsyncClient, email: str = None, password: str = "password123", role: str = "user"):
    if not email:
        email = f"user_{uuid.uuid4().hex[:8]}@example.com"

    register_data = {
        "email": email,
        "password": password,
        "full_name": "Test User",
        "phone": f"+20{uuid.uuid4().int % 10000000000:010d}",
        "role": role,
    }

    resp = await client.post(f"{settings.API_V1_STR}/auth/signup", json=register_data)
    assert resp.status_code == 200, resp.text
    register_data["id"] = resp.json()["data"]["id"]
    return register_data

async def get_auth_headers(client: AsyncClient, email: str, password: str = "password123"):
    resp = await client.post(f"{settings.API_V1_STR}/auth/login", json={
        "email": email,
        "password": password
    })
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}

async def create_user_and_get_headers(client: AsyncClient, role: str = "user"):
    user_data = await create_user(client, role=role)
    headers = await get_auth_headers(client, user_data["email"], user_data["password"])
    return user_data, headers

async def seed_user(session, role: str = "user") -> User:
    user = User(
        email=f"seed_{uuid.uuid4().hex[:8]}@example.com",
        full_name="Seeded User",
        role=role,
        hashed_password="not-a-real-hash",
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user

async def seed_notification(session, user_id, title: str = "Hello", read: bool = False, created_at: datetime | None = None) -> Notification:
    notification = Notification(
        user_id=uuid.UUID(str(user_id)),
        title=title,
        message=f"{title} message",
        read=read,
    )
    if created_at:
        notification.created_at = created_at
    session.add(notification)
    await session.commit()
    await session.refresh(notification)
    return notification
