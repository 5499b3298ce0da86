"""Routes / Routes."""

from fastapi import APIRouter

from app.api import (
    auth,
    pages,
    schedules,
    availabilities,
    comments,
)

api_router = APIRouter()

api_router.include_router(pages.router, tags=["pages"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(availabilities.router, prefix="/schedules", tags=["availabilities"])
api_router.include_router(comments.router, prefix="/schedules", tags=["comments"])
