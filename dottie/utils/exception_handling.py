"""
Global exception handling configuration.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from dottie.database import DatabaseError
from dottie.schemas.base import ErrorResponse


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning("Validation error on {} {}: {}", request.method, request.url.path, exc.errors())
    error_response = ErrorResponse(
        error="Validation Error",
        detail=jsonable_encoder(exc.errors()),
        status_code=422,
    )
    return JSONResponse(status_code=422, content=jsonable_encoder(error_response))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routes and the router itself."""
    logger.warning("HTTP error {} on {} {}: {}", exc.status_code, request.method, request.url.path, exc.detail)
    error_response = ErrorResponse(
        error=str(exc.detail),
        detail=None,
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_response),
        headers=getattr(exc, "headers", None),
    )


async def database_exception_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handle a database that could not be brought up for the request."""
    logger.error("Database unavailable on {} {}: {}", request.method, request.url.path, exc.message)
    error_response = ErrorResponse(
        error="Database Unavailable",
        detail=None,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(error_response))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for uncaught exceptions."""
    logger.opt(exception=exc).error(
        "Unhandled exception: {} - Path: {} - Method: {}",
        exc,
        request.url.path,
        request.method,
    )
    error_response = ErrorResponse(
        error="Internal Server Error",
        detail=None,
        status_code=500,
    )
    return JSONResponse(status_code=500, content=jsonable_encoder(error_response))


def register_exception_handlers(app: FastAPI) -> None:
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(DatabaseError)(database_exception_handler)
    app.exception_handler(Exception)(global_exception_handler)
