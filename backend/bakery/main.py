"""
Dreamy Delights - Backend API
Storefront and back-office API for the Dreamy Delights bakery
"""
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before settings are read
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bakery.core.config import settings
from bakery.core.database import get_db_connection_dict_with_retry, CONNECTION_TIMEOUT
from bakery.api import (
    admin_auth,
    admin_contact_messages,
    admin_content,
    admin_dashboard,
    admin_orders,
    admin_products,
    admin_users,
    auth,
    cart,
    contact,
    orders,
    products,
    testimonials,
    users,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# ============================================================================
# Error envelopes
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Errors are reported as {"success": false, "message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation failed", "details": details},
    )


# ============================================================================
# Routers
# ============================================================================

app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(cart.router, prefix="/api/cart", tags=["Cart"])
app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(testimonials.router, prefix="/api/testimonials", tags=["Testimonials"])
app.include_router(contact.router, prefix="/api/contact", tags=["Contact"])

app.include_router(admin_auth.router, prefix="/api/admin", tags=["Admin Auth"])
app.include_router(admin_dashboard.router, prefix="/api/admin", tags=["Admin Dashboard"])
app.include_router(admin_products.router, prefix="/api/admin", tags=["Admin Products"])
app.include_router(admin_orders.router, prefix="/api/admin", tags=["Admin Orders"])
app.include_router(admin_users.router, prefix="/api/admin", tags=["Admin Users"])
app.include_router(admin_content.router, prefix="/api/admin", tags=["Admin Content"])
app.include_router(admin_contact_messages.router, prefix="/api/admin", tags=["Admin Contact Messages"])


@app.get("/")
async def root():
    return {
        "message": f"{settings.BUSINESS_NAME} API",
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/api/health")
async def api_health():
    return {
        "success": True,
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/api/server-time")
async def server_time():
    now = datetime.now(timezone.utc)
    return {
        "success": True,
        "serverTime": now.isoformat(),
        "timestamp": int(now.timestamp() * 1000)
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring - tests database connectivity"""
    start_time = time.time()

    db_status = "unknown"
    db_latency_ms = None
    db_error = None

    try:
        conn = get_db_connection_dict_with_retry(max_retries=1, retry_delay=0.5)
        cursor = conn.cursor()

        db_start = time.time()
        cursor.execute("SELECT 1")
        cursor.fetchone()
        db_latency_ms = round((time.time() - db_start) * 1000, 2)

        cursor.close()
        conn.close()
        db_status = "connected"
    except Exception as e:
        db_status = "disconnected"
        db_error = str(e)
        logger.warning(f"Health check could not reach the database: {e}")

    total_latency_ms = round((time.time() - start_time) * 1000, 2)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "dreamy-delights-api",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "latency_ms": db_latency_ms,
            "error": db_error,
            "connection_timeout_s": CONNECTION_TIMEOUT
        },
        "total_latency_ms": total_latency_ms
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bakery.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.API_DEBUG)
