"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from app.api.routes import users, trips, organizers, bookings, stats

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(organizers.router)
api_router.include_router(bookings.router)
api_router.include_router(stats.router)
