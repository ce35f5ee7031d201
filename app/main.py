import logging
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exception_handlers import register_exception_handlers
from app.core.monitoring import configure_logging, init_sentry
from app.core.rate_limit import limiter
from app.schemas.response import ValidationErrorResponse, HTTPErrorResponse

from contextlib import asynccontextmanager

configure_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    from app.db.session import create_tables

    init_sentry()
    # Create tables on startup
    await create_tables()

    logger.info(f"{settings.PROJECT_NAME} running at {settings.APP_URL}")
    logger.info(f"Swagger UI: {settings.APP_URL}/docs")
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation Error"},
        401: {"model": HTTPErrorResponse, "description": "Unauthorized"},
        403: {"model": HTTPErrorResponse, "description": "Forbidden"},
        404: {"model": HTTPErrorResponse, "description": "Not Found"},
        500: {"model": HTTPErrorResponse, "description": "Internal Server Error"},
    }
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_V1_STR)
