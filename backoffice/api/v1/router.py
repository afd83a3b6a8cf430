"""API v1 router: aggregates all sub-routers."""

from fastapi import APIRouter

from backoffice.api.v1 import admin, customers, staff

api_router = APIRouter()

api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])
api_router.include_router(staff.public_router, prefix="/staff", tags=["Staff"])
api_router.include_router(staff.router, prefix="/staff", tags=["Staff"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
