"""Request logging and JSON error rendering shared by both services.

Every error leaves the service as ``{"error": "<message>"}``. Internal
details (SQL text, tracebacks) are logged here and never returned.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = 'Invalid request body'
INTERNAL_ERROR_MESSAGE = 'Internal server error'


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message}, headers=headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(exc.status_code, detail, headers=getattr(exc, 'headers', None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info('Rejected %s %s: %s', request.method, request.url.path, exc.errors())
    return error_response(400, INVALID_BODY_MESSAGE)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def register_request_logging(app: FastAPI) -> None:
    @app.middleware('http')
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        logger.info(
            '%s %s -> %d (%.3fs)',
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response
