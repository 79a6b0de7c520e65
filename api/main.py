"""
Storefront Orders - Main FastAPI Application.

REST API for checkout order creation, order lookups, invoice download
and admin fulfillment updates.
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.dependencies import get_cache_invalidator
from api.routes import health, orders
from core.domain.exceptions import CompensationFailedError, OrderingError
from core.infrastructure.adapters.cache import RedisCacheInvalidator
from core.infrastructure.database.config import close_database, init_database
from core.settings import get_app_settings


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Storefront Orders API",
    description="""
    Order processing backend for the storefront.

    Features:
    - Checkout order creation with GST breakdown
    - Customer record resolution and merge
    - Fulfillment partner assignment
    - Guest and customer order lookups
    - PDF invoices for delivered orders
    - Admin status updates with history
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_settings().storefront.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@app.exception_handler(OrderingError)
async def ordering_exception_handler(request: Request, exc: OrderingError):
    """Map domain errors to their HTTP status."""
    if isinstance(exc, CompensationFailedError):
        logger.critical(
            f"Order {exc.order_number} ({exc.order_id}) left without items; manual cleanup required"
        )
    elif exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected [{exc.status_code}]: {exc.message}")
    return _error(exc.status_code, exc.message)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Schema violations are client errors like any other validation failure."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
        for error in exc.errors()
    )
    return _error(400, f"Invalid request: {details}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error(500, "Internal server error")


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("🚀 Storefront Orders API starting up...")
    await init_database(get_app_settings().database)
    logger.info("📚 Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("👋 Storefront Orders API shutting down...")
    cache = get_cache_invalidator()
    if isinstance(cache, RedisCacheInvalidator):
        await cache.disconnect()
    await close_database()


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    orders.router,
    prefix="/api/orders",
    tags=["Orders"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Storefront Orders API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
