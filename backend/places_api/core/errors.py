"""
HTTP error model shared by the services and the app-wide error responder.
Services raise these; main.py turns them into {"message": ...} responses.
"""
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from places_api.core.logger import logs


class HttpError(Exception):
    """Base error carrying a client-facing message and an HTTP status code."""

    def __init__(self, message: str, code: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(HttpError):
    def __init__(self, message: str = "Invalid inputs passed, please check your data.", errors: list | None = None):
        super().__init__(message, 422)
        self.errors = errors or []


class NotFoundError(HttpError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class AuthorizationError(HttpError):
    def __init__(self, message: str = "Authentication failed!"):
        super().__init__(message, 401)


class InternalError(HttpError):
    def __init__(self, message: str = "An unknown error occurred!"):
        super().__init__(message, 500)


# --- Centralized error responders ---
async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
    content = {"message": exc.message or "An unknown error occurred!"}
    if isinstance(exc, ValidationError) and exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.code or 500, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logs.log(logging.INFO, f"Rejected invalid input on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={
            "message": "Invalid inputs passed, please check your data.",
            "errors": [
                {"field": ".".join(str(p) for p in err.get("loc", [])), "message": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )


async def not_found_route_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"message": "Could not find this route."})
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logs.log(logging.ERROR, f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "An unknown error occurred!"})
