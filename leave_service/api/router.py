from fastapi import APIRouter

from leave_service.api.auth import auth_router
from leave_service.api.holidays import holidays_router
from leave_service.api.leave_requests import admin_leave_requests_router, leave_requests_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(leave_requests_router)
api_router.include_router(admin_leave_requests_router)
api_router.include_router(holidays_router)
