"""Error taxonomy for the blog API.

Every error carries the HTTP status it maps to and a message that is safe to
show the caller. Storage details never end up in ``message``; they stay on the
chained ``__cause__`` and in the server log.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BlogAPIError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BlogAPIError):
    status_code = 400


class AuthError(BlogAPIError):
    status_code = 401


class NotFoundError(BlogAPIError):
    status_code = 404


class StorageError(BlogAPIError):
    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def blog_api_error_handler(request: Request, exc: BlogAPIError) -> JSONResponse:
    # Storage failures are logged with their traceback where they are caught
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request for %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(400, "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogAPIError, blog_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
