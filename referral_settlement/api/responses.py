"""
Response envelopes and API error codes.

Every JSON response carries the request metadata under "meta".
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from aiohttp import web

# Error codes
E_BAD_REQUEST = "E_BAD_REQUEST"
E_BAD_AMOUNT = "E_BAD_AMOUNT"
E_PURCHASE_CONFLICT = "E_PURCHASE_CONFLICT"
E_PURCHASE_NOT_FOUND = "E_PURCHASE_NOT_FOUND"
E_DB_FAILURE = "E_DB_FAILURE"
E_PROCESS_FAILURE = "E_PROCESS_FAILURE"
E_PROCESS_TIMEOUT = "E_PROCESS_TIMEOUT"
E_INTERNAL = "E_INTERNAL"

META_KEY = web.RequestKey("meta", dict[str, Any])


class ApiError(Exception):
    """Error rendered as a JSON error envelope by the error middleware."""

    def __init__(self, status: int, code: str, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message


def new_meta() -> dict[str, Any]:
    """
    Build request metadata.

    Returns:
        Dict with request_id, request_at (RFC 3339) and timestamp (unix seconds)
    """
    now = datetime.now(UTC)
    return {
        "request_id": str(uuid.uuid4()),
        "request_at": now.isoformat(),
        "timestamp": int(now.timestamp()),
    }


def request_meta(request: web.Request) -> dict[str, Any]:
    """Get metadata attached by the meta middleware."""
    meta = request.get(META_KEY)
    if meta is None:
        meta = new_meta()
        request[META_KEY] = meta
    return meta


def ok(
    request: web.Request,
    message: str,
    data: Any,
    status: int = 200,
) -> web.Response:
    """
    Build a success envelope.

    Args:
        request: Current request
        message: Human readable message
        data: JSON-serializable payload
        status: HTTP status code

    Returns:
        JSON response
    """
    return web.json_response(
        {"message": message, "data": data, "meta": request_meta(request)},
        status=status,
    )


def created(request: web.Request, message: str, data: Any) -> web.Response:
    """Build a 201 success envelope."""
    return ok(request, message, data, status=201)


def error(request: web.Request, exc: ApiError) -> web.Response:
    """Build an error envelope from an ApiError."""
    return web.json_response(
        {
            "error": {"code": exc.code, "message": exc.message},
            "meta": request_meta(request),
        },
        status=exc.status,
    )
