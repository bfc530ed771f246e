from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth,
    events,
    registrations,
    attendance,
    certificates,
    feedback,
    announcements,
    analytics
)

api_router = APIRouter()

# Register routes
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(registrations.router, prefix="/registrations", tags=["Registrations"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(certificates.router, prefix="/certificates", tags=["Certificates"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
api_router.include_router(announcements.router, prefix="/announcements", tags=["Announcements"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
