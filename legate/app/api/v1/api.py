from fastapi import APIRouter

from legate.app.api.v1.endpoints import estates, health, invoices

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(estates.router, prefix="/estates", tags=["estates"])
