"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.talentdesk.config import settings
from src.talentdesk.features.auth import router as auth_router
from src.talentdesk.features.jobs import router as jobs_router
from src.talentdesk.features.resumes import router as resumes_router
from src.talentdesk.features.vendors import router as vendors_router
from src.talentdesk.services.database import close_database, init_database
from src.talentdesk.services.rate_limiter import limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    # Startup
    if not settings.supabase_url:
        logger.error(
            "Supabase configuration is missing. Please check your environment variables.",
            extra={"error_type": "supabase_config_missing"},
        )

    try:
        await init_database(settings.mongodb_uri, settings.mongodb_database)
    except Exception as e:
        logger.error(
            f"MongoDB connection error: {e}",
            exc_info=True,
            extra={"error_type": "database_init_failed"},
        )
        raise

    yield

    # Shutdown
    logger.info("Shutting down server...")
    try:
        await close_database()
    except Exception as e:
        logger.error(f"Error closing MongoDB connection: {e}", exc_info=True)


app = FastAPI(
    title="TalentDesk API",
    description="API for resumes, jobs and vendors with Supabase authentication",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    response.headers.setdefault("Cross-Origin-Resource-Policy", "cross-origin")
    return response


origins = settings.cors_origin_list
logger.info(f"Origins : {origins}")

# Added last so it is outermost and also answers preflights
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    max_age=86400,
)

app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
app.include_router(resumes_router, prefix=f"{settings.api_prefix}/resumes", tags=["resumes"])
app.include_router(jobs_router, prefix=f"{settings.api_prefix}/jobs", tags=["jobs"])
app.include_router(vendors_router, prefix=f"{settings.api_prefix}/vendors", tags=["vendors"])


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"error": <message>}``."""
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for errors that escaped route handlers."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Something went wrong"})


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str
    message: str


@app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponse)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(status="ok", message="API is running")


@app.get("/", response_class=PlainTextResponse)
@limiter.exempt
async def root(request: Request) -> str:
    return "Backend is live"
