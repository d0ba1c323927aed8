"""HTTP error taxonomy.

Every failure the API reports on purpose is an `ApiError` and renders as
`{"error": true, "message": ...}` with the error's status code.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError


def _debug(msg: str) -> None:
    print(f"[errors] {msg}")


class ApiError(Exception):
    """Base class for errors rendered to the client."""

    default_message = "internal server error"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status
        super().__init__(self.message)


class Unauthorized(ApiError):
    default_message = "unauthorized access"
    default_status = status.HTTP_401_UNAUTHORIZED


class Forbidden(ApiError):
    default_message = "forbidden access!"
    default_status = status.HTTP_403_FORBIDDEN


class NotFound(ApiError):
    default_message = "not found"
    default_status = status.HTTP_404_NOT_FOUND


class InternalError(ApiError):
    pass


def error_body(err: ApiError) -> dict:
    return {"error": True, "message": err.message}


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(PyMongoError)
    async def _db_error(request: Request, exc: PyMongoError) -> JSONResponse:
        # Detail stays in the server log.
        _debug(f"persistence error on {request.method} {request.url.path}: {exc!r}")
        err = InternalError()
        return JSONResponse(status_code=err.status_code, content=error_body(err))
