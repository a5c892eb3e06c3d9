import os
import time
import logging

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .domain.errors import DomainError
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.ratelimit import limiter, rate_limit_exceeded_handler
from .infrastructure.repositories import InMemoryStore
from .infrastructure.seed import create_demo_data
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import users as users_router
from .interfaces.http.routers import lessons as lessons_router
from .interfaces.http.routers import notifications as notifications_router
from .interfaces.http.routers import stats as stats_router

VERSION = "0.1.0"

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title=settings.APP_NAME, version=VERSION)
app.state.store = InMemoryStore()
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    # unhandled errors re-raise out of call_next and become a 500 further out
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        if response.headers.get("content-type", "").startswith("application/json"):
            response.headers["content-type"] = "application/json; charset=utf-8"
        return response
    finally:
        # label by route template so lesson/user ids do not explode the series
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        duration = time.time() - start_time
        http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

        logger.info(
            "http_request",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration * 1000, 2)
        )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith("/api") and exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"message": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.on_event("startup")
def on_startup():
    logger.info("Starting DrivePro backend", version=VERSION)
    if settings.SEED_DEMO_DATA:
        create_demo_data(app.state.store)


@app.get("/health")
def health():
    return {"status": "ok", "message": "DrivePro backend is running"}


@app.get("/metrics")
def metrics():
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(lessons_router.router)
app.include_router(notifications_router.router)
app.include_router(stats_router.router)

# front-end bundle; mounted last so it never shadows the API
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
