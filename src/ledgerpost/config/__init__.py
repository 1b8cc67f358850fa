"""Configuration for ledgerpost: logging and account roles."""

from ledgerpost.config.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
