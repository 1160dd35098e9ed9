"""
Repository error taxonomy and the malformed-request handler.
"""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    pass


# Zero rows, too many rows and failed reads all collapse into this one.
class NotFoundError(RepositoryError):
    pass


class WriteError(RepositoryError):
    pass


_OPERATION_BY_METHOD = {
    "GET": "finding",
    "POST": "adding",
    "PUT": "updating",
    "DELETE": "deleting",
}


def operation_label(method: str, path: str) -> str:
    """
    Short message naming the operation, e.g. "error adding person".
    """
    operation = _OPERATION_BY_METHOD.get(method.upper(), "handling")
    segments = [s for s in path.split("/") if s]
    entity = segments[0] if segments else "request"
    return f"error {operation} {entity}"


async def malformed_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = operation_label(request.method, request.url.path)
    logger.warning(
        "malformed_request method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        len(exc.errors()),
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})
