"""
Logging utility module.

Provides centralized logging configuration with console and optional file handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logger(
    name: str = "emacraft",
    log_level: str = "INFO",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a logger with console and optional file handlers.
    
    Args:
        name: Logger name
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, logs only to console.
    
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    
    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    
    # stderr keeps the CLI's stdout clean for csv/json output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger


def get_logger(name: str = "emacraft") -> logging.Logger:
    """
    Get a logger instance.

    Child loggers (``emacraft.ema``) propagate to the ``emacraft`` root logger,
    which is set up with defaults on first use.
    
    Args:
        name: Logger name
    
    Returns:
        Logger instance
    """
    root = logging.getLogger("emacraft")
    if not root.handlers:
        setup_logger("emacraft")
    if name == "emacraft" or name.startswith("emacraft."):
        return logging.getLogger(name)
    return logging.getLogger(f"emacraft.{name}")
