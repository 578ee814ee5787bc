"""Configuration module for the ledger digest workflow."""

from ledger_digest.config.logging import configure_logging, get_logger, request_context
from ledger_digest.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging", "get_logger", "request_context"]
