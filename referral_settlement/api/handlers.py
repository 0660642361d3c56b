"""
HTTP handlers.

Thin adapters between aiohttp requests and the service layer.
"""

import asyncio
import uuid

from aiohttp import web
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from referral_settlement.api.keys import (
    ORCHESTRATOR_KEY,
    PURCHASE_SERVICE_KEY,
    SETTINGS_KEY,
)
from referral_settlement.api.responses import (
    E_BAD_AMOUNT,
    E_BAD_REQUEST,
    E_DB_FAILURE,
    E_PROCESS_FAILURE,
    E_PROCESS_TIMEOUT,
    E_PURCHASE_CONFLICT,
    E_PURCHASE_NOT_FOUND,
    ApiError,
    created,
    ok,
)
from referral_settlement.api.schemas import (
    INT64_MAX,
    INT64_MIN,
    BalanceResponse,
    CreatePurchaseRequest,
    CreatePurchaseResponse,
    ProcessResponse,
)
from referral_settlement.utils.exceptions import (
    InvalidPurchaseError,
    PurchaseConflictError,
    PurchaseNotFoundError,
    SettlementStoreError,
)


async def health_handler(request: web.Request) -> web.Response:
    """Liveness probe."""
    return web.Response(text="ok")


async def get_balance_handler(request: web.Request) -> web.Response:
    """GET /balances/{user_id}"""
    user_id = _parse_user_id(request.match_info["user_id"])
    service = request.app[PURCHASE_SERVICE_KEY]

    try:
        balance = await service.get_balance(user_id)
    except SQLAlchemyError as e:
        raise ApiError(500, E_DB_FAILURE, "internal server error") from e

    payload = BalanceResponse(user_id=user_id, balance=balance)
    return ok(request, "balance fetched", payload.model_dump(mode="json"))


async def create_purchase_handler(request: web.Request) -> web.Response:
    """POST /purchases"""
    try:
        body = await request.json()
        req = CreatePurchaseRequest.model_validate(body)
    except (ValueError, ValidationError) as e:
        raise ApiError(400, E_BAD_REQUEST, "invalid request body") from e

    service = request.app[PURCHASE_SERVICE_KEY]
    try:
        purchase = await service.create_purchase(
            user_id=req.user_id,
            amount=req.amount,
            status=req.status,
            purchase_id=req.id,
        )
    except InvalidPurchaseError as e:
        raise ApiError(400, E_BAD_AMOUNT, str(e)) from e
    except PurchaseConflictError as e:
        raise ApiError(409, E_PURCHASE_CONFLICT, "purchase already exists") from e
    except SQLAlchemyError as e:
        raise ApiError(500, E_DB_FAILURE, "internal server error") from e

    payload = CreatePurchaseResponse(id=purchase.id)
    return created(request, "purchase created", payload.model_dump(mode="json"))


async def process_purchase_handler(request: web.Request) -> web.Response:
    """POST /process/{id}"""
    purchase_id = _parse_purchase_id(request.match_info["id"])
    orchestrator = request.app[ORCHESTRATOR_KEY]
    timeout = request.app[SETTINGS_KEY].settle_timeout_seconds

    try:
        # wait_for cancels settle on timeout, which rolls its transaction back
        await asyncio.wait_for(orchestrator.settle(purchase_id), timeout=timeout)
    except PurchaseNotFoundError as e:
        raise ApiError(404, E_PURCHASE_NOT_FOUND, "purchase not found") from e
    except SettlementStoreError as e:
        raise ApiError(500, E_PROCESS_FAILURE, "internal server error") from e
    except TimeoutError as e:
        logger.warning(
            "Settlement timed out",
            extra={"purchase_id": str(purchase_id), "timeout": timeout},
        )
        raise ApiError(504, E_PROCESS_TIMEOUT, "settlement timed out") from e

    payload = ProcessResponse(processed=purchase_id)
    return ok(request, "purchase processed", payload.model_dump(mode="json"))


def _parse_user_id(raw: str) -> int:
    try:
        user_id = int(raw)
    except ValueError as e:
        raise ApiError(400, E_BAD_REQUEST, "user_id must be an integer") from e
    if not INT64_MIN <= user_id <= INT64_MAX:
        raise ApiError(400, E_BAD_REQUEST, "user_id is out of range")
    return user_id


def _parse_purchase_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError as e:
        raise ApiError(400, E_BAD_REQUEST, "id must be a UUID") from e
