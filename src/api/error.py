"""API error rendering

Use case errors are raised as ClientError and rendered as
{"error": {"code", "message"}} with the status of the code's kind.
"""

import logging
from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.errors import ErrorKind, kind_of

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.DELIVERY: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_PERSISTENCE_MESSAGE = "An internal error occurred, please try again later"


class ClientError(Exception):
    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.kind = kind_of(error.code)
        self.status_code = status_code or STATUS_BY_KIND[self.kind]


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    message = exc.error.message
    if exc.kind == ErrorKind.PERSISTENCE:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.error.message} "
            f"({exc.error.reason})"
        )
        message = GENERIC_PERSISTENCE_MESSAGE

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": message}},
    )


def error_responses(*examples: tuple) -> dict:
    """OpenAPI `responses` entries from (status, code, message) tuples"""
    responses = {}
    for status_code, code, message in examples:
        responses[status_code] = {
            "content": {
                "application/json": {
                    "example": {"error": {"code": code, "message": message}}
                }
            }
        }
    return responses
