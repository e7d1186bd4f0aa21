"""Map domain errors onto JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from superwallet.core.exceptions import InvalidArgument, StorageUnavailable, SuperWalletError

logger = logging.getLogger(__name__)


async def handle_domain_error(request: Request, exc: SuperWalletError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_storage_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc)
    return await handle_domain_error(request, StorageUnavailable())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidArgument("Request validation failed", errors=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SuperWalletError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(OperationalError, handle_storage_error)
    app.add_exception_handler(InterfaceError, handle_storage_error)


__all__ = ["register_exception_handlers"]
