import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import messages, settings
from services.errors import MediVizeError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    """Render the `{success: false, message, error?}` envelope."""
    content = {"success": False, "message": message}
    if error and settings.EXPOSE_ERROR_DETAILS:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


async def medivize_error_handler(request: Request, exc: MediVizeError):
    return error_response(exc.status_code, exc.message, exc.error)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(400, messages.INVALID_REQUEST, str(exc.errors()))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods share the fixed 404 envelope
    if exc.status_code in (404, 405):
        return error_response(404, messages.ENDPOINT_NOT_FOUND)
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, messages.INTERNAL_ERROR, str(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MediVizeError, medivize_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
