"""Configuration package."""

from referral_settlement.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
