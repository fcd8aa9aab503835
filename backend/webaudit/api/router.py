"""
API router aggregating all endpoints.
"""
from fastapi import APIRouter

from webaudit.api.audit import router as audit_router

api_router = APIRouter()

api_router.include_router(audit_router)
