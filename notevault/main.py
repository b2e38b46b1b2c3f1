"""FastAPI application entry point."""

import logging
import traceback
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import TimeoutError as SQLAlchemyTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .database import check_connection, create_tables, engine
from .routers import auth_router, folders_router, notes_router, shared_router, versions_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks."""
    # Startup
    if settings.create_tables_on_startup:
        logger.info("Creating database tables...")
        await create_tables()

    logger.info("Notes API ready")

    yield

    # Shutdown
    logger.info("Disposing database engine...")
    await engine.dispose()
    logger.info("Database engine disposed")


# Create FastAPI application
app = FastAPI(
    title="Notes API",
    description="Personal notes with folders, version history and public share links",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    """Uniform error body: {"error": "<message>"}."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": ...}."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error(exc.status_code, message, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400 with field-level messages."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "Invalid value")
        messages.append(f"{location}: {msg}" if location else msg)
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


# Database pool exhaustion handler - return 503 so clients can retry
@app.exception_handler(SQLAlchemyTimeoutError)
async def db_pool_exhausted_handler(request: Request, exc: SQLAlchemyTimeoutError):
    """Handle database connection pool exhaustion with 503 Service Unavailable."""
    logger.warning(f"Database pool exhausted on {request.method} {request.url}: {exc}")
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Service temporarily unavailable. Please retry.",
        headers={"Retry-After": "5"},
    )


# Global exception handler to log errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log all unhandled exceptions with full traceback."""
    logger.error(f"Unhandled exception on {request.method} {request.url}:")
    logger.error(f"Exception type: {type(exc).__name__}")
    logger.error(f"Traceback:\n{traceback.format_exc()}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(folders_router, prefix=settings.api_prefix)
app.include_router(notes_router, prefix=settings.api_prefix)
app.include_router(versions_router, prefix=settings.api_prefix)
app.include_router(shared_router, prefix=settings.api_prefix)


@app.get(f"{settings.api_prefix}/health")
async def health_check():
    """Health check endpoint for monitoring."""
    database_ok = await check_connection()
    return {
        "status": "ok" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "timestamp": datetime.utcnow().isoformat(),
    }
