"""
HubSpot CRM tools service.
Exposes the CRM tools to an agent runtime over HTTP.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from crm_tools.config import settings
from crm_tools.infrastructure.observability.logging import get_logger, log_request, setup_logging
from crm_tools.routes import health, tools
from crm_tools.services.hubspot.client import close_hubspot_client

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        hubspot_base_url=settings.hubspot_base_url(),
        hubspot_token_configured=settings.has_hubspot_token(),
    )
    if not settings.has_hubspot_token():
        logger.warning("HubSpot token not configured; every tool call will fail")

    yield

    logger.info("Application shutting down")
    try:
        await close_hubspot_client()
    except Exception as e:
        logger.error("Error closing HubSpot client", error=str(e))


app = FastAPI(
    title="HubSpot CRM Tools",
    description="HubSpot CRM operations exposed as agent-callable tools",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(tools.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
