"""Exception handlers — map domain and store failures to JSON error envelopes."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from practice_log.domain.exceptions import (
    EntityNotFoundError,
    InvalidIdentifierError,
    NotConnectedError,
    RecordValidationError,
    StoreConnectionError,
)

from .envelope import error_body

logger = logging.getLogger(__name__)


def _server_error_message(request: Request, exc: Exception) -> str:
    settings = request.app.state.settings
    return str(exc) if settings.is_development else "Internal server error"


async def _store_connection_error(request: Request, exc: StoreConnectionError) -> JSONResponse:
    logger.error("%s %s: record store unavailable: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=error_body(str(exc)))


async def _not_connected_error(request: Request, exc: NotConnectedError) -> JSONResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(_server_error_message(request, exc)),
    )


async def _invalid_identifier_error(request: Request, exc: InvalidIdentifierError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(str(exc)))


async def _record_validation_error(request: Request, exc: RecordValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(str(exc), field=exc.field),
    )


async def _entity_not_found_error(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body(str(exc)))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=error_body("Request validation failed", details=jsonable_encoder(exc.errors())),
    )


async def _sqlalchemy_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("%s %s: record store operation failed", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(_server_error_message(request, exc)),
    )


async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Requested resource does not exist"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message, path=request.url.path),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s: unhandled error", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(_server_error_message(request, exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to ``app``."""
    app.add_exception_handler(StoreConnectionError, _store_connection_error)
    app.add_exception_handler(NotConnectedError, _not_connected_error)
    app.add_exception_handler(InvalidIdentifierError, _invalid_identifier_error)
    app.add_exception_handler(RecordValidationError, _record_validation_error)
    app.add_exception_handler(EntityNotFoundError, _entity_not_found_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error)
    app.add_exception_handler(StarletteHTTPException, _http_exception)
    app.add_exception_handler(Exception, _unhandled_exception)
