"""
HVAC Pro - Main Application Entry Point
Multi-tenant HVAC contractor workspace with the Atlas sales pipeline
"""

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
import structlog

from hvacpro import __version__
from hvacpro.api import (
    activities, appointments, atlas, auth, contacts, contractors,
    invoices, jobs, messages, public, reviews, users
)
from hvacpro.core.config import get_settings
from hvacpro.core.database import engine, get_session, init_db
from hvacpro.core.exceptions import StorageError
from hvacpro.core.logging import configure_logging
from hvacpro.services.provisioning import ensure_admin_user
from hvacpro.storage import DatabaseStorage

configure_logging()
logger = structlog.get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info(f"Initializing {settings.APP_NAME} backend ({settings.ENVIRONMENT})")
    init_db()

    if settings.SEED_ADMIN:
        with Session(engine) as session:
            ensure_admin_user(
                DatabaseStorage(session),
                settings.SEED_ADMIN_USERNAME,
                settings.SEED_ADMIN_PASSWORD,
                settings.SEED_ADMIN_EMAIL,
            )

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME} backend")


# Create FastAPI application
app = FastAPI(
    title="HVAC Pro API",
    description="Multi-tenant HVAC contractor workspace and sales pipeline",
    version=__version__,
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.warning(f"Storage conflict on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "The change conflicts with existing data"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include routers
api = settings.API_PREFIX
app.include_router(auth.router, prefix=api, tags=["auth"])
app.include_router(public.router, prefix=api, tags=["public"])
app.include_router(users.router, prefix=f"{api}/admin/users", tags=["admin"])
app.include_router(contractors.router, prefix=f"{api}/contractors", tags=["contractors"])
app.include_router(atlas.router, prefix=f"{api}/atlas", tags=["atlas"])
app.include_router(contacts.router, prefix=f"{api}/contacts", tags=["contacts"])
app.include_router(jobs.router, prefix=f"{api}/jobs", tags=["jobs"])
app.include_router(appointments.router, prefix=f"{api}/appointments", tags=["appointments"])
app.include_router(invoices.router, prefix=f"{api}/invoices", tags=["invoices"])
app.include_router(reviews.router, prefix=f"{api}/reviews", tags=["reviews"])
app.include_router(messages.router, prefix=f"{api}/messages", tags=["messages"])
app.include_router(activities.router, prefix=api, tags=["activities"])


@app.get(f"{api}/db-test")
async def db_test(session: Session = Depends(get_session)):
    """Database connectivity probe"""
    try:
        count = DatabaseStorage(session).count_users()
    except SQLAlchemyError as e:
        logger.error(f"Database test failed: {e}")
        content = {"success": False, "message": "Database connection failed"}
        if settings.DEBUG:
            content["error"] = str(e)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    return {"success": True, "message": "Database connection successful", "userCount": count}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "hvacpro-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "HVAC Pro API",
        "version": __version__,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hvacpro.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
