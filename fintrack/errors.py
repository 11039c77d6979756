"""
fintrack/errors.py

Client-visible error types and the exception handlers that render them.

Every 4xx produced by this service has the same body shape:

    {"errors": [{"msg": "..."}]}

Request validation failures add the offending field:

    {"errors": [{"msg": "...", "param": "password", "location": "body", "value": "abc"}]}

Server errors are not rendered here; handlers that catch them answer a
plaintext 500 themselves (see server_error()).
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """Base for errors whose message is safe to show the client."""

    status_code = 400

    def __init__(self, message: str, status_code: int = None, headers: dict = None):
        super().__init__(
            status_code=status_code or self.status_code,
            detail=message,
            headers=headers,
        )


class AuthError(ApiError):
    """Bad credentials (400) or a missing/invalid bearer token (401)."""


class ConflictError(ApiError):
    """The resource already exists, e.g. a taken username."""


def server_error() -> PlainTextResponse:
    return PlainTextResponse("Server error", status_code=500)


def _validation_entry(error: dict) -> dict:
    loc = list(error.get("loc", ()))
    location = loc[0] if loc else None
    param = ".".join(str(part) for part in loc[1:]) or None

    # Messages raised from our own validators should reach the client verbatim,
    # without pydantic's "Value error, " prefix.
    ctx = error.get("ctx") or {}
    if isinstance(ctx.get("error"), Exception):
        msg = str(ctx["error"])
    else:
        msg = error.get("msg", "Invalid value")

    return {
        "msg": msg,
        "param": param,
        "location": location,
        "value": jsonable_encoder(error.get("input")),
    }


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": [{"msg": exc.detail}]},
        headers=exc.headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_validation_entry(e) for e in exc.errors()]
    logger.debug(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"errors": errors})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
