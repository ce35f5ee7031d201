from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel
from app.core.config import settings

engine = create_async_engine(str(settings.DATABASE_URL))
AsyncSessionLocal = async_sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

async def get_db():
    async with AsyncSessionLocal() as session:
        yield session

async def create_tables(bind=engine) -> None:
    # Import models so they register on SQLModel.metadata
    from app.models import notification, prescription, user  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
