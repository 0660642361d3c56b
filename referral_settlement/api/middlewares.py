"""
HTTP middlewares.

- meta_middleware: attaches request metadata
- error_middleware: renders ApiError and unexpected failures as JSON
"""

from collections.abc import Awaitable, Callable

from aiohttp import web
from loguru import logger

from referral_settlement.api.responses import (
    E_INTERNAL,
    META_KEY,
    ApiError,
    error,
    new_meta,
    request_meta,
)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def meta_middleware(
    request: web.Request, handler: Handler
) -> web.StreamResponse:
    """Attach request metadata to the request."""
    request[META_KEY] = new_meta()
    return await handler(request)


@web.middleware
async def error_middleware(
    request: web.Request, handler: Handler
) -> web.StreamResponse:
    """Map API errors to JSON envelopes; hide internals of unexpected errors."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ApiError as e:
        if e.status >= 500:
            logger.error(
                "Request failed",
                extra={
                    "path": request.path,
                    "code": e.code,
                    "request_id": request_meta(request)["request_id"],
                },
            )
        return error(request, e)
    except Exception:
        logger.exception(
            "Unhandled error",
            extra={
                "path": request.path,
                "request_id": request_meta(request)["request_id"],
            },
        )
        return error(request, ApiError(500, E_INTERNAL, "internal server error"))
