"""FastAPI application exposing routes and quotes.

Books are pushed with PUT /snapshots/{base}/{quote}; quotes are estimated
against the latest book of every market on the route.
"""

import os

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from sor import __version__
from sor.api.endpoints import get_engine, router
from sor.log_config import configure_logging
from sor.service import SorEngine

HOST = os.environ.get("SOR_HOST", "0.0.0.0")
PORT = int(os.environ.get("SOR_PORT", "8000"))
DEBUG = os.environ.get("SOR_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("SOR_LOG_LEVEL", "INFO")

# Maximum request body size (1 MB); a deep snapshot is well below it
MAX_REQUEST_SIZE = 1024 * 1024


async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


async def health(engine_instance: SorEngine = Depends(get_engine)) -> dict[str, object]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "markets": len(engine_instance.config.markets),
    }


def create_app(log_level: str | None = None) -> FastAPI:
    """Build the API application.

    Args:
        log_level: When given, structlog is configured with this level
            before the app is assembled

    Raises:
        ValueError: If the log level name is unknown
    """
    if log_level is not None:
        configure_logging(log_level)

    application = FastAPI(
        title="SOR Engine",
        description="Smart order routing and settlement estimation for a limit-order-book exchange",
        version=__version__,
    )
    application.middleware("http")(limit_request_size)
    application.include_router(router)
    application.get("/health")(health)
    return application


def app_from_environment() -> FastAPI:
    """App factory for uvicorn, logging at SOR_LOG_LEVEL."""
    return create_app(log_level=LOG_LEVEL)


app = create_app()


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SOR_HOST: Host to bind to (default: 0.0.0.0)
    - SOR_PORT: Port to bind to (default: 8000)
    - SOR_DEBUG: Enable debug/reload mode (default: false)
    - SOR_LOG_LEVEL: structlog level filter (default: INFO)
    - SOR_CONFIG_PATH: ExchangeConfig JSON file (default: built-in universe)
    - SOR_QUOTE_TIMEOUT: Seconds allowed per quote (default: 5.0)
    """
    uvicorn.run(
        "sor.api.main:app_from_environment",
        factory=True,
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
