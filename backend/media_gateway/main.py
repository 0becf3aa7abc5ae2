import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from media_gateway.api.exception_handlers import (
    handle_broad_exceptions,
    handle_gateway_error,
    handle_http_exception,
    handle_validation_error,
)
from media_gateway.api.routers import files as files_router
from media_gateway.api.routers import skeleton as skeleton_router
from media_gateway.core.config import get_settings
from media_gateway.core.errors import GatewayError
from media_gateway.core.logging import setup_logging
from media_gateway.services.storage import StorageService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    app.state.storage = StorageService(settings)
    logger.info(
        "Serving bucket %s via %s",
        settings.s3_bucket,
        settings.s3_endpoint or "default S3 endpoint",
    )
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(
        debug=settings.debug,
        title="Media Gateway API",
        summary="Upload, list and stream files held in an S3-compatible bucket",
        lifespan=lifespan,
    )

    app.include_router(skeleton_router.router)
    app.include_router(files_router.router)

    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.middleware("http")(handle_broad_exceptions)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "media_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
