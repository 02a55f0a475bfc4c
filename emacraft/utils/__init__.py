"""
Utility modules for configuration, logging, and error handling.
"""

from .config import Config, get_config, reset_config
from .logger import setup_logger, get_logger

__all__ = ["Config", "get_config", "reset_config", "setup_logger", "get_logger"]
