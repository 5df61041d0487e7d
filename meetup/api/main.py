"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
import os
import secrets

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)

from meetup.api.auth import CSRF_COOKIE, CSRF_HEADER, extract_bearer_token
from meetup.api.errors import ValidationFailed, error_body
from meetup.api.session import router as session_router
from meetup.api.groups import router as groups_router
from meetup.api.memberships import router as memberships_router
from meetup.api.venues import router as venues_router
from meetup.api.events import router as events_router
from meetup.api.attendances import router as attendances_router
from meetup.api.images import router as images_router
from meetup.api.audits import router as audits_router
from meetup.utils.runtime import app_env, cors_origins, csrf_protection_enabled, is_production

# Database schema is managed by Alembic migrations.

logger.info("app_startup: log_level=%s env=%s production=%s", LOG_LEVEL_NAME, app_env(), is_production())

app = FastAPI(
    title="Meetup Service",
    description="API for groups, memberships, venues, events and attendances.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

UNSAFE_METHODS = ("POST", "PUT", "PATCH", "DELETE")


# Middleware: double-submit CSRF check for cookie-authenticated writes
@app.middleware("http")
async def enforce_csrf_token(request: Request, call_next):
    if (
        request.method in UNSAFE_METHODS
        and request.url.path.startswith("/api/")
        and csrf_protection_enabled()
        and not extract_bearer_token(request)
    ):
        cookie_token = request.cookies.get(CSRF_COOKIE) or ""
        header_token = request.headers.get(CSRF_HEADER) or ""
        if not cookie_token or not secrets.compare_digest(cookie_token.encode(), header_token.encode()):
            logger.warning("csrf_rejected: method=%s path=%s", request.method, request.url.path)
            return JSONResponse(error_body("Invalid CSRF token", status.HTTP_403_FORBIDDEN), status_code=status.HTTP_403_FORBIDDEN)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    errors = exc.errors if isinstance(exc, ValidationFailed) else None
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        error_body(message, exc.status_code, errors),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors[".".join(loc) or "body"] = err.get("msg", "Invalid value")
    return JSONResponse(
        error_body("Validation error", status.HTTP_400_BAD_REQUEST, errors),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_error: method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        error_body("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


for router in (
    session_router,
    groups_router,
    memberships_router,
    venues_router,
    events_router,
    attendances_router,
    images_router,
    audits_router,
):
    app.include_router(router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}

