"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.auth_routes import router as auth_router
from jobboard.api.routes.job_routes import router as job_router
from jobboard.api.routes.application_routes import router as application_router
from jobboard.api.routes.user_routes import router as user_router
from jobboard.api.routes.admin_routes import router as admin_router
from jobboard.api.routes.employer_routes import router as employer_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(user_router)
api_router.include_router(admin_router)
api_router.include_router(employer_router)
