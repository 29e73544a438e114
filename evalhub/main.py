"""Main FastAPI application."""
import logging
from datetime import datetime, timezone
from time import monotonic, perf_counter
import uuid

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from evalhub.core.config import settings
from evalhub.core.database import SessionLocal
from evalhub.core.limiter import limiter
from evalhub.core.logging import configure_logging
from evalhub.api import admin, auth, dashboard, evaluations, forms, notifications, users

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

STARTED_AT = monotonic()

# Create FastAPI app
app = FastAPI(
    title="Evaluation Hub API",
    description="Multi-party evaluation forms with tokenized participant links",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


def _error_payload(
    request: Request,
    *,
    code: str,
    message: str,
    retriable: bool,
) -> dict:
    return {
        "success": False,
        "code": code,
        "message": message,
        "retriable": retriable,
        "request_id": getattr(request.state, "request_id", "unknown"),
    }


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    request.state.request_id = request_id
    start = perf_counter()

    response = await call_next(request)

    elapsed_ms = (perf_counter() - start) * 1000
    response.headers["X-Request-Id"] = request_id
    logger.debug(
        "%s %s -> %s in %.1fms [%s]",
        request.method, request.url.path, response.status_code, elapsed_ms, request_id,
    )
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail
    if isinstance(detail, dict):
        code = str(detail.get("code") or f"http_{exc.status_code}")
        message = str(detail.get("message") or "Request failed")
        retriable = bool(
            detail.get("retriable")
            if detail.get("retriable") is not None
            else exc.status_code in {408, 425, 429} or exc.status_code >= 500
        )
    else:
        code = f"http_{exc.status_code}"
        message = str(detail)
        retriable = exc.status_code in {408, 425, 429} or exc.status_code >= 500

    headers = dict(exc.headers or {})
    headers["X-Request-Id"] = getattr(request.state, "request_id", "unknown")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(
            request,
            code=code,
            message=message,
            retriable=retriable,
        ),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    content = _error_payload(
        request,
        code="validation_error",
        message="Request validation failed",
        retriable=False,
    )
    content["errors"] = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=content,
        headers={"X-Request-Id": getattr(request.state, "request_id", "unknown")},
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=_error_payload(
            request,
            code="rate_limited",
            message="Too many requests",
            retriable=True,
        ),
        headers={"X-Request-Id": getattr(request.state, "request_id", "unknown")},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error on %s %s [%s]",
        request.method, request.url.path, getattr(request.state, "request_id", "unknown"),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_payload(
            request,
            code="internal_error",
            message="Unexpected server error",
            retriable=True,
        ),
        headers={"X-Request-Id": getattr(request.state, "request_id", "unknown")},
    )

# Rate limiter
app.state.limiter = limiter

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "X-Requested-With", "X-Request-Id"],
)

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(forms.router, prefix="/api")
app.include_router(evaluations.router, prefix="/api")     # Token holders
app.include_router(notifications.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")
app.include_router(admin.router, prefix="/api")


@app.get("/")
def root():
    return {
        "message": "Evaluation Hub API",
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/api/health")
def health():
    """Health check endpoint with real DB connectivity test."""
    result = {
        "status": "healthy",
        "database": "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(monotonic() - STARTED_AT, 3),
    }
    http_status = 200

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
            result["database"] = "connected"
        finally:
            db.close()
    except Exception as exc:
        logger.error("Health check database failure: %s", exc)
        result["status"] = "degraded"
        result["database"] = f"error: {str(exc)[:120]}"
        http_status = 503

    return JSONResponse(content=result, status_code=http_status)
