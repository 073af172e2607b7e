"""Configuration module for the insight pipeline."""

from ledger_insights.config.logging import configure_logging
from ledger_insights.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
