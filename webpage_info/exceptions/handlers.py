import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from webpage_info.services.exceptions import ServiceError

logger = logging.getLogger(__name__)


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map a ServiceError to its HTTP status with a ``{code, message}`` body"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code} - {exc.message}", exc_info=True)
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.error_code} - {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "code": "INTERNAL_SERVER_ERROR",
            "message": "Something went wrong"
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
