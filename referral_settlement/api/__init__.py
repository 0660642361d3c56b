"""HTTP API (aiohttp)."""

from referral_settlement.api.app import create_app

__all__ = ["create_app"]
