"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.auth_routes import router as auth_router
from jobboard.api.routes.applicant_routes import router as applicant_router
from jobboard.api.routes.job_routes import router as job_router
from jobboard.api.routes.admin_routes import router as admin_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(applicant_router)
api_router.include_router(job_router)
api_router.include_router(admin_router)
