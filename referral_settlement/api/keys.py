"""Typed application keys for shared components."""

from aiohttp import web

from referral_settlement.config.settings import Settings
from referral_settlement.services.purchase_service import PurchaseService
from referral_settlement.services.settlement.orchestrator import (
    SettlementOrchestrator,
)

SETTINGS_KEY = web.AppKey("settings", Settings)
ORCHESTRATOR_KEY = web.AppKey("orchestrator", SettlementOrchestrator)
PURCHASE_SERVICE_KEY = web.AppKey("purchase_service", PurchaseService)
