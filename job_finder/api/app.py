"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from job_finder.api.deps import clear_state
from job_finder.api.limiter import limiter
from job_finder.config import settings
from job_finder.errors import InvalidTransitionError, ValidationError
from job_finder.store import dispose_engine, init_db

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize logging and the preference tables on startup."""
    logging.basicConfig(level=settings.log_level.upper())
    try:
        init_db()
    except ValueError as e:
        logger.warning(f"Preference database unavailable: {e}")
    yield
    clear_state()
    dispose_engine()


app = FastAPI(
    title="Resume Job Finder API",
    description="Resume analysis and grounded job search",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Input rejected before any model call (bad file type, empty location)."""
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    """Operation not allowed in the wizard's current step."""
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "step": exc.step.value},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-User-ID"],
)


# Import and include routers
from job_finder.api.routes import bookmarks, preferences, wizard  # noqa: E402

app.include_router(wizard.router, prefix="/wizard", tags=["Wizard"])
app.include_router(bookmarks.router, prefix="/bookmarks", tags=["Bookmarks"])
app.include_router(preferences.router, prefix="/preferences", tags=["Preferences"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
