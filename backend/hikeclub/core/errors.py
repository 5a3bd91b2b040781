from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hikeclub.core.config import logger
from hikeclub.schemas.proxy import ErrorMessage

class ErrorKind(str, Enum):
    """Every way a trail finder submission can fail."""
    EMPTY_SELECTION = "EmptySelection"
    METHOD_NOT_ALLOWED = "MethodNotAllowed"
    BAD_REQUEST = "BadRequest"
    SERVER_MISCONFIGURED = "ServerMisconfigured"
    UPSTREAM_FAILURE = "UpstreamFailure"
    MALFORMED_RESPONSE = "MalformedResponse"

# HTTP status used by the proxy for each server-side kind.
PROXY_STATUS_CODES = {
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.SERVER_MISCONFIGURED: 500,
    ErrorKind.UPSTREAM_FAILURE: 500,
}

class TrailFinderError(Exception):
    def __init__(self, kind: ErrorKind, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return PROXY_STATUS_CODES.get(self.kind, 500)

async def trail_finder_error_handler(request: Request, exc: TrailFinderError) -> JSONResponse:
    """Converts a TrailFinderError raised by a route into the proxy's JSON error body."""
    logger.warning(f"{request.method} {request.url.path} failed with {exc.kind.value}: {exc.message}")
    body = ErrorMessage(message=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TrailFinderError, trail_finder_error_handler)
