"""
Web application factory.

Wires settings and the session factory into handlers.
"""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from referral_settlement.api import handlers
from referral_settlement.api.keys import (
    ORCHESTRATOR_KEY,
    PURCHASE_SERVICE_KEY,
    SETTINGS_KEY,
)
from referral_settlement.api.middlewares import error_middleware, meta_middleware
from referral_settlement.config.settings import Settings
from referral_settlement.services.purchase_service import PurchaseService
from referral_settlement.services.settlement.orchestrator import (
    SettlementOrchestrator,
)


def create_app(
    settings: Settings,
    session_maker: async_sessionmaker[AsyncSession],
) -> web.Application:
    """
    Create aiohttp application.

    Args:
        settings: Application settings
        session_maker: Session factory bound to the shared store

    Returns:
        Configured web.Application
    """
    app = web.Application(middlewares=[meta_middleware, error_middleware])
    app[SETTINGS_KEY] = settings
    app[ORCHESTRATOR_KEY] = SettlementOrchestrator(session_maker)
    app[PURCHASE_SERVICE_KEY] = PurchaseService(session_maker)

    app.router.add_get("/health", handlers.health_handler)
    app.router.add_get("/balances/{user_id}", handlers.get_balance_handler)
    app.router.add_post("/purchases", handlers.create_purchase_handler)
    app.router.add_post("/process/{id}", handlers.process_purchase_handler)

    return app
