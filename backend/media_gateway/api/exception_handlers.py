import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from media_gateway.core.errors import (
    ClientInputError,
    GatewayError,
    InternalError,
    RouteNotFound,
)

logger = logging.getLogger(__name__)


async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Wrong method on a known path is reported like any other unmatched route.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return await handle_gateway_error(request, RouteNotFound())
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await handle_gateway_error(request, ClientInputError(jsonable_encoder(exc.errors())))


async def handle_broad_exceptions(request: Request, call_next):
    """Last line of defence: log the failure, answer with a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error.to_content())
