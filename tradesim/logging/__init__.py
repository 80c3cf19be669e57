"""
Logging configuration and utilities for tradesim.
"""
from .config import configure_logging, get_config_logger, get_logger

__all__ = ["configure_logging", "get_config_logger", "get_logger"]
