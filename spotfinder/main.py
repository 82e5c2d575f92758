# spotfinder/main.py
"""
FastAPI application entry point.
Includes request logging, structured error handlers, and all routers.
Every error response is {"error": <displayable message>, "code": ..., ...}.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match
from spotfinder.routers import locations, occupancy, users, health
from spotfinder.database import create_tables
from spotfinder.config import settings
from spotfinder.exceptions import AppError, MethodNotAllowedError
from spotfinder.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="SpotFinder API",
    description="Location catalog with tag filtering and proximity-verified occupancy reports.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers or None)


API_PREFIX = "/api"
API_ROUTERS = [locations.router, occupancy.router, users.router, health.router]


def _allowed_methods(request: Request) -> set:
    """Every method registered for this path, across all API routes that match it."""
    path = request.url.path
    if not path.startswith(API_PREFIX + "/"):
        return set()
    scope = {**request.scope, "path": path[len(API_PREFIX):], "root_path": ""}
    allowed = set()
    for router in API_ROUTERS:
        for route in router.routes:
            methods = getattr(route, "methods", None)
            if not methods:
                continue
            match, _ = route.matches(scope)
            if match != Match.NONE:
                allowed |= methods
    return allowed


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(p for p in first.get("loc", ()) if isinstance(p, str) and p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"{field}: {message}" if field else message, "code": "validation_error"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return _error_response(MethodNotAllowedError(_allowed_methods(request)))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": f"http_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "code": "internal_error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(locations.router, prefix=API_PREFIX, tags=["📍 Locations"])
app.include_router(occupancy.router, prefix=API_PREFIX, tags=["👥 Occupancy"])
app.include_router(users.router,     prefix=API_PREFIX, tags=["🙋 Users"])
app.include_router(health.router,    prefix=API_PREFIX, tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 SpotFinder backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"📏 Occupancy reports require proximity ≤ {settings.PROXIMITY_MAX_KM * 1000:.0f}m")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 SpotFinder backend shutting down...")
