import os

# Test configuration must be in place before app.core.config is imported
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["SERVICE_ROLE_KEY"] = "test-service-key"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["SMTP_HOST"] = ""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from fastapi import FastAPI
from app.core.config import settings
from app.core.exception_handlers import register_exception_handlers
from app.api.v1.api import api_router
from app.api.deps import get_db
from app.core.rate_limit import limiter
from app.db.session import create_tables

# Disable rate limiting globally for tests
limiter.enabled = False

# Use NullPool to ensure connections are closed and not shared across event loops
engine = create_async_engine(str(settings.DATABASE_URL), poolclass=NullPool)
TestingSessionLocal = async_sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

@pytest.fixture
async def session():
    await create_tables(engine)
    async with TestingSessionLocal() as session:
        yield session
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

@pytest.fixture
def test_app(session):
    # Fresh app per test so dependency overrides do not leak
    new_app = FastAPI()
    new_app.state.limiter = limiter
    register_exception_handlers(new_app)
    new_app.include_router(api_router, prefix=settings.API_V1_STR)

    async def override_get_db():
        yield session

    new_app.dependency_overrides[get_db] = override_get_db
    return new_app

@pytest.fixture
async def client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as c:
        yield c

@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    task = MagicMock()
    monkeypatch.setattr("app.api.v1.endpoints.auth.send_email_task", task)
    return task.delay
