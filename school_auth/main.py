import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .domain.errors import AuthError
from .infrastructure.db import engine
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.rate_limit import limiter, rate_limit_exceeded_handler
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import health as health_router

VERSION = "1.0.0"

# Structured logging: JSON in production, readable console output otherwise
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
renderer = (
    structlog.processors.JSONRenderer()
    if settings.is_production
    else structlog.dev.ConsoleRenderer()
)
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        renderer,
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(
    title="City School Auth API",
    description="Multi-tenant authentication for the school management API",
    version=VERSION,
    docs_url="/api/docs",
)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def observe_request(request: Request, call_next):
    start_time = time.time()
    method = request.method

    response = await call_next(request)

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    # Route template, not the raw path
    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)
    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=request.url.path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return _error(400, f"{field}: {message}" if field else message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return _error(500, "Server Error")


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.on_event("startup")
def on_startup():
    logger.info("Starting auth service", version=VERSION, environment=settings.ENVIRONMENT)
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready")


@app.get("/")
def index():
    return {
        "message": "Welcome to City School API (v1)",
        "documentation": "/api/docs",
        "health": "/api/v1/health",
    }


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(health_router.router)
app.include_router(auth_router.router)
