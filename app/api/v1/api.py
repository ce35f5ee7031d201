from fastapi import APIRouter
from app.api.v1.endpoints import auth, notifications, pharmacy, prescriptions, users

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(prescriptions.router, prefix="/prescriptions", tags=["prescriptions"])
api_router.include_router(pharmacy.router, prefix="/pharmacy", tags=["pharmacy"])
