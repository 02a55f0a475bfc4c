"""
Custom exception classes for emacraft.
"""


class EmaCraftError(Exception):
    """Base exception for all emacraft errors."""
    pass


class ConfigurationError(EmaCraftError):
    """Raised when configuration or calculator parameters are invalid."""
    pass


class PriceDataError(EmaCraftError):
    """Raised when a price history cannot be loaded or parsed."""
    pass


class ConversionError(EmaCraftError):
    """Raised when a price cannot be converted into the term currency."""
    pass
