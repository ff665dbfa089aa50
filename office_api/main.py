# ================================
# MAIN APPLICATION (main.py)
# ================================

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy import text

# Core imports
from office_api.config import settings
from office_api.core.database import engine
from office_api.core.exceptions import AppException, ValidationError
from office_api.core.middleware import RequestContextMiddleware, AuditMiddleware
from office_api.api import api_router, API_VERSION, API_DESCRIPTION
from office_api.models import Base

import logging
import uvicorn

# ================================
# LOGGING CONFIGURATION
# ================================

logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ================================
# APPLICATION LIFECYCLE
# ================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""

    logger.info(f"Starting {settings.APP_NAME}")
    await initialize_database()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    engine.dispose()

async def initialize_database():
    """Checks the database connection; creates tables in debug mode"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection established")

        # Schema migrations are managed outside the app; debug gets a ready schema
        if settings.DEBUG:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables ensured (debug mode)")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

# ================================
# FASTAPI APPLICATION
# ================================

app = FastAPI(
    title=settings.APP_NAME,
    version=API_VERSION,
    description=API_DESCRIPTION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

# ================================
# MIDDLEWARE CONFIGURATION
# ================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time"]
)

# Audit logging runs inside the request context
app.add_middleware(AuditMiddleware)
app.add_middleware(RequestContextMiddleware)

# ================================
# EXCEPTION HANDLERS
# ================================

def _error_content(request: Request, detail, error_code=None, field_errors=None) -> dict:
    content = {
        "detail": detail,
        "error_code": error_code,
        "request_id": getattr(request.state, "request_id", None)
    }
    if field_errors:
        content["field_errors"] = field_errors
    return content

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handler for application-specific exceptions"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(
            request, exc.detail, exc.error_code,
            exc.field_errors if isinstance(exc, ValidationError) else None
        )
    )

@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler for payload validation errors, grouped by field"""
    field_errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        field_errors.setdefault(field, []).append(error.get("msg", "Invalid value"))

    error = ValidationError(field_errors=field_errors)
    return JSONResponse(
        status_code=error.status_code,
        content=_error_content(request, error.detail, error.error_code, field_errors)
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handler for standard HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.detail)
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handler for unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content=_error_content(
            request,
            "Internal server error" if not settings.DEBUG else str(exc),
            "INTERNAL_ERROR"
        )
    )

# ================================
# HEALTH CHECK ENDPOINTS
# ================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": API_VERSION
    }

@app.get("/ready", tags=["Health"])
async def readiness_check():
    """Readiness probe"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        return {"status": "ready"}
    except Exception:
        raise HTTPException(status_code=503, detail="Service not ready")

# ================================
# API ROUTES
# ================================

app.include_router(api_router)

# ================================
# DEVELOPMENT SERVER
# ================================

if __name__ == "__main__":
    uvicorn.run(
        "office_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True
    )
