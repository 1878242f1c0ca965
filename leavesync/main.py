"""
LeaveSync API application with database pool and holiday source lifecycle.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from leavesync.config import settings
from leavesync.db.pool import db_pool
from leavesync.infrastructure.observability.logging import get_logger, log_request, setup_logging
from leavesync.routes import health, leaves, public_holidays, users
from leavesync.services.holidays.holiday_lookup import holiday_lookup

setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown with proper resource management."""
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        holiday_source_enabled=settings.holiday_source_enabled(),
    )

    try:
        await db_pool.initialize()
    except Exception as e:
        logger.error("Failed to initialize services", error=str(e))
        await holiday_lookup.close()
        raise

    yield

    logger.info("Application shutting down")

    shutdown_errors = []

    try:
        await holiday_lookup.close()
    except Exception as e:
        logger.error("Error closing holiday source client", error=str(e))
        shutdown_errors.append(f"Holiday source: {e}")

    try:
        await db_pool.close()
    except Exception as e:
        logger.error("Error closing database pool", error=str(e))
        shutdown_errors.append(f"Database: {e}")

    if shutdown_errors:
        logger.warning("Some services had shutdown errors", errors=shutdown_errors)
    else:
        logger.info("All services closed successfully")


app = FastAPI(
    title="LeaveSync API",
    description="Staff leave tracking with connected-leave detection",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(leaves.router)
app.include_router(public_holidays.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return response


def run() -> None:
    """Console entrypoint."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
