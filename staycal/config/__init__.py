"""Configuration package."""

from staycal.config.logging import configure_logging, get_logger
from staycal.config.settings import Settings, settings

__all__ = ["settings", "Settings", "configure_logging", "get_logger"]
