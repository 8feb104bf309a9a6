"""
FastAPI application entry point.
MAI Gateway for the MAI Copilot browser extension.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from mai_gateway import __version__
from mai_gateway.config import get_settings
from mai_gateway.api.routes import router
from mai_gateway.gateway.cors import OriginAccessMiddleware
from mai_gateway.gateway.responses import NOT_FOUND_BODY, error_body, json_response


# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting MAI Gateway...")
    settings = get_settings()
    logger.info(f"API Version: {__version__}")
    logger.info(f"Listening port: {settings.port}")

    if not settings.plans_api_url:
        logger.warning("PLANS_API_URL is not set; plan requests will fail with 500")
    if not settings.fireworks_api_key:
        logger.warning("FIREWORKS_API_KEY is not set; script requests will fail with 500")
    if settings.max_body_bytes is None:
        logger.info("No request body limit configured")

    yield

    # Shutdown
    logger.info("Shutting down MAI Gateway...")


# Create FastAPI application. Docs routes are disabled so every path
# goes through the gateway route table.
app = FastAPI(
    title="MAI Gateway",
    description="Plan lookup and closing script API for the MAI Copilot extension",
    version=__version__,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(OriginAccessMiddleware)

app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework-level errors (e.g. unsupported methods) as gateway JSON."""
    if exc.status_code in (404, 405):
        return json_response(404, NOT_FOUND_BODY)
    return json_response(exc.status_code, error_body(str(exc.detail)))


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "mai_gateway.main:app",
        host=settings.api_host,
        port=settings.port,
    )
