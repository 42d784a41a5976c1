"""
FranchiseNexus - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import re

from franchisenexus.api import applications, auth, businesses, franchises, public, users
from franchisenexus.config import settings
from franchisenexus.db import init_db, close_db
from franchisenexus.domain.errors import DomainError, UnauthenticatedError
from franchisenexus.schemas import ErrorResponse
from franchisenexus.version import __version__

APP_NAME = "FranchiseNexus"

JWT_PATTERN = re.compile(r'eyJ[A-Za-z0-9_-]*\.eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*')
PASSWORD_PATTERN = re.compile(r"(['\"]?password['\"]?\s*[:=]\s*['\"]?)([^'\",\s}]+)", re.IGNORECASE)


# Custom logging filter to redact sensitive data
class SensitiveDataFilter(logging.Filter):
    """Filter to redact bearer tokens and passwords from logs"""

    def filter(self, record):
        if hasattr(record, 'msg'):
            msg = str(record.msg)

            # Redact JWT tokens
            if 'eyJ' in msg:
                msg = JWT_PATTERN.sub('[JWT_REDACTED]', msg)

            # Redact password values in dict/JSON/form representations
            if 'password' in msg.lower():
                msg = PASSWORD_PATTERN.sub(r'\1[REDACTED]', msg)

            record.msg = msg
        return True


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Add filter to all loggers
for handler in logging.root.handlers:
    handler.addFilter(SensitiveDataFilter())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown"""
    # Startup
    logger.info(f"🚀 Starting {APP_NAME}")
    logger.info(f"📦 Version: {__version__}")
    logger.info(f"📝 Environment: {settings.environment}")

    await init_db()

    if settings.application_status_allowlist:
        logger.info(f"Application statuses restricted to: {settings.application_status_allowlist}")

    logger.info("✅ Configuration loaded successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title=APP_NAME,
    description="Franchise marketplace: businesses, franchise offerings and applications",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


# ============================================
# CORS Middleware Configuration
# ============================================

# Development origins (local frontend dev server)
dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
]

# Set CORS_ORIGINS env var as comma-separated list: "https://example.com,https://www.example.com"
production_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

allowed_origins = dev_origins + production_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(f"✅ CORS configured for origins: {allowed_origins}")


# ============================================
# Error handlers
# ============================================

def _error_body(status_code: int, message: str) -> dict:
    return ErrorResponse(status=status_code, message=message).model_dump()


# Documented error bodies for every API route
ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
        status.HTTP_404_NOT_FOUND,
    )
}


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Map domain errors to {status, message} with their HTTP status"""
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.message),
        headers=headers
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return a {field: message} map with 400"""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))

    logger.info(f"Validation error for {request.method} {request.url.path}: {errors}")

    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and other framework-level errors"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything unexpected: generic 500, details only in the log"""
    logger.error(f"Unhandled error for {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(500, "An unexpected error occurred")
    )


# Register routes
app.include_router(auth.router, prefix="/api/auth", tags=["auth"], responses=ERROR_RESPONSES)
app.include_router(users.router, prefix="/api/users", tags=["users"], responses=ERROR_RESPONSES)
app.include_router(businesses.router, prefix="/api/businesses", tags=["businesses"], responses=ERROR_RESPONSES)
app.include_router(franchises.router, prefix="/api/franchises", tags=["franchises"], responses=ERROR_RESPONSES)
app.include_router(applications.router, prefix="/api/applications", tags=["applications"], responses=ERROR_RESPONSES)
app.include_router(public.router, prefix="/api/public", tags=["public"], responses=ERROR_RESPONSES)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": APP_NAME,
        "version": __version__,
        "status": "running",
        "environment": settings.environment
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment
    }
