"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from app.api.routes import auth, bookings, error_reports, images, institutions, resources, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(institutions.router)
api_router.include_router(resources.router)
api_router.include_router(bookings.router)
api_router.include_router(error_reports.router)
api_router.include_router(images.router)
