"""
Main FastAPI application for the product catalog.

This file wires together all layers:
- Domain: Product entity and errors
- Core: Redis connection
- Repositories: Product storage on Redis
- Routers: HTTP endpoints
"""

import logging
import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from redis.exceptions import RedisError

from .config import settings
from .core.redis_manager import close_redis_client, create_redis_client
from .repositories.redis_product_repository import RedisProductRepository
from .routers import health_router, product_router

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.LOG_LEVEL)

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "product_service_requests_total",
    "Total number of requests",
    ["method", "endpoint", "status"],
)

REQUEST_LATENCY = Histogram(
    "product_service_request_latency_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)

UNMONITORED_PATHS = ("/api/v1/health", "/api/v1/ready", "/metrics")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Product Service", version="1.0.0")
    app.state.is_shutting_down = False

    redis_client = create_redis_client(settings)
    try:
        await redis_client.ping()
        logger.info("Redis connected successfully", url=settings.REDIS_URL)
    except (RedisError, OSError) as e:
        logger.error("Failed to connect to Redis", url=settings.REDIS_URL, error=str(e))
        await close_redis_client(redis_client)
        raise

    app.state.redis_client = redis_client
    app.state.product_repository = RedisProductRepository(
        redis_client, set_key=settings.PRODUCTS_SET_KEY
    )
    logger.info("Product repository initialized", set_key=settings.PRODUCTS_SET_KEY)

    yield

    # Shutdown
    logger.info("Shutting down Product Service")
    app.state.is_shutting_down = True
    await close_redis_client(redis_client)
    logger.info("Product Service stopped")


app = FastAPI(
    title="Product Service",
    description="Product catalog CRUD backed by Redis",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def shutdown_middleware(request: Request, call_next):
    """
    Reject new requests during graceful shutdown.

    Returns 503 Service Unavailable if service is shutting down.
    """
    if getattr(request.app.state, "is_shutting_down", False):
        # Allow health checks during shutdown for monitoring
        if request.url.path not in UNMONITORED_PATHS:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "success": False,
                    "error": "shutting_down",
                    "message": "Service is shutting down",
                },
            )

    return await call_next(request)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for distributed tracing."""
    request_id = request.headers.get("X-Request-ID", f"req-{id(request)}")

    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus metrics."""
    if request.url.path in UNMONITORED_PATHS:
        return await call_next(request)

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    REQUEST_COUNT.labels(
        method=request.method, endpoint=endpoint, status=response.status_code
    ).inc()
    REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(duration)

    return response


# Include routers
app.include_router(product_router.router)
app.include_router(health_router.router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.SERVICE_NAME,
        "version": "1.0.0",
        "status": "operational",
        "products": "/api/v1/products",
        "health": "/api/v1/health",
        "ready": "/api/v1/ready",
    }


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": request.headers.get("X-Request-ID"),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
