"""ZipQuote configuration.

This package contains:
- settings: Environment variables and configuration
- errors: Custom exceptions and error codes
- logging: structlog setup
"""

from zipquote.config.settings import settings
from zipquote.config.errors import (
    ErrorCode,
    ZipQuoteError,
    ConfigurationError,
    PricebookLoadError,
)
from zipquote.config.logging import configure_logging

__all__ = [
    "settings",
    "ErrorCode",
    "ZipQuoteError",
    "ConfigurationError",
    "PricebookLoadError",
    "configure_logging",
]
