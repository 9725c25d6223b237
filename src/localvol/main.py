"""localvol FastAPI application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from localvol import __version__
from localvol.api import health_router, plugin_router
from localvol.api.dependencies import init_driver, reset_driver
from localvol.config import get_config
from localvol.logging import setup_logging
from localvol.logging_schema import LogEvent

# Configure logging using config
_config = get_config()
setup_logging(_config.logging)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "Starting localvol",
        extra={
            "event": LogEvent.APP_STARTED,
            "version": __version__,
            "root_dir": _config.driver.root_dir,
        },
    )
    init_driver()
    yield
    logger.info("Shutting down localvol", extra={"event": LogEvent.APP_STOPPED})
    reset_driver()


app = FastAPI(
    title="localvol",
    description="Local-disk volume plugin",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed plugin requests answer 200 with the reason in Err."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=200,
        content={"Err": f"Invalid request body: {details}"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions with logging."""
    logger.exception(
        "Unhandled exception",
        extra={
            "event": LogEvent.UNHANDLED_EXCEPTION,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=500,
        content={"Err": "Internal server error"},
    )


app.include_router(health_router)
app.include_router(plugin_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


def main() -> None:
    """Run the plugin server."""
    config = get_config()
    if config.server.socket_path:
        uvicorn.run("localvol.main:app", uds=config.server.socket_path, reload=False)
    else:
        uvicorn.run(
            "localvol.main:app",
            host=config.server.host,
            port=config.server.port,
            reload=False,
        )


if __name__ == "__main__":
    main()
