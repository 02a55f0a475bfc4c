"""
Configuration management module.

Loads settings from environment variables (and a ``.env`` file, if present).
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()

DEFAULT_PERIODS = "5,10,20,30,38,50,90,100,200"


def _parse_period(raw: str, variable: str) -> int:
    try:
        period = int(raw)
    except ValueError:
        raise ConfigurationError(f"{variable} must be an integer, got {raw!r}") from None
    if period < 1:
        raise ConfigurationError(f"{variable} must be >= 1, got {period}")
    return period


def _default_period() -> int:
    return _parse_period(os.getenv("EMA_DEFAULT_PERIOD", "20"), "EMA_DEFAULT_PERIOD")


def _periods() -> Tuple[int, ...]:
    raw = os.getenv("EMA_PERIODS", DEFAULT_PERIODS)
    periods = tuple(
        _parse_period(part.strip(), "EMA_PERIODS") for part in raw.split(",") if part.strip()
    )
    if not periods:
        raise ConfigurationError("EMA_PERIODS must name at least one period")
    return periods


@dataclass
class Config:
    """
    Main configuration class.
    
    Loads all configuration from environment variables with sensible defaults.
    """
    
    default_period: int = field(default_factory=_default_period)
    periods: Tuple[int, ...] = field(default_factory=_periods)
    
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE"))
    
    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
