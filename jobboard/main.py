"""
Job Board - Main Application

FastAPI backend with:
- A relational store (PostgreSQL in production, SQLite locally)
- JWT authentication for job seekers, employers and admins
- Admin moderation of employers and flagged listings

Run: uvicorn jobboard.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.api.routes import api_router
from jobboard.core.auth import hash_password
from jobboard.core.config import get_settings
from jobboard.core.errors import JobBoardError, PayloadValidationError
from jobboard.core.logging import configure_logging
from jobboard.core.validation import field_errors_from
from jobboard.db.database import init_db, test_db_connection
from jobboard.db.store import JobBoardStore, get_store
from jobboard.schemas.schemas import ErrorResponse, UserCreate, UserRole

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Board",
    description="""
    Job seekers browse and apply to listings, employers post and manage
    listings, administrators moderate users and content.

    ## Features
    - **Authentication**: JWT-based auth for job seekers, employers and admins
    - **Jobs**: Search, filter, post and apply
    - **Applications**: Status tracking and summaries
    - **Admin**: Employer approval and flagged-job moderation
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(
    api_router,
    prefix="/api",
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404)},
)


@app.exception_handler(JobBoardError)
async def jobboard_error_handler(request: Request, exc: JobBoardError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Same {message, errors: [{field, message}]} shape as PayloadValidationError
    error = PayloadValidationError(field_errors_from(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def ensure_admin_account(store: JobBoardStore) -> None:
    """Create the configured admin account if it does not exist yet."""
    if store.get_user_by_username(settings.admin_username):
        return
    data = UserCreate(
        username=settings.admin_username,
        password=settings.admin_password,
        email=settings.admin_email,
        name="Admin User",
        role=UserRole.admin,
        bio="System administrator",
    )
    store.create_user(data, password_hash=hash_password(data.password), is_approved=True)
    logger.info("Seeded admin account '%s'", settings.admin_username)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables and the admin account."""
    init_db()
    if settings.seed_admin:
        ensure_admin_account(get_store())


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "database": "connected" if test_db_connection() else "disconnected",
    }
