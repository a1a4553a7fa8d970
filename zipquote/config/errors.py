"""ZipQuote error handling.

Custom exceptions and error codes for the quote engine.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Catalog Errors (1xxx)
    SERVICE_NOT_CONFIGURED = "SERVICE_NOT_CONFIGURED"
    UNSUPPORTED_UNIT = "UNSUPPORTED_UNIT"

    # Pricebook Errors (2xxx)
    PRICEBOOK_NOT_FOUND = "PRICEBOOK_NOT_FOUND"
    PRICEBOOK_INVALID_JSON = "PRICEBOOK_INVALID_JSON"
    PRICEBOOK_INVALID_SCHEMA = "PRICEBOOK_INVALID_SCHEMA"


class ZipQuoteError(Exception):
    """Base exception for ZipQuote errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize ZipQuoteError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(ZipQuoteError):
    """The pricebook cannot price the requested service.

    Raised when the classified service key has no catalog entry or when
    its definition uses a unit the calculator does not support.
    """

    def __init__(
        self,
        code: str,
        message: str,
        service_key: str,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "service_key": service_key}
        )
        self.service_key = service_key


class PricebookLoadError(ZipQuoteError):
    """Pricebook document could not be read or validated."""

    def __init__(
        self,
        code: str,
        message: str,
        source: Optional[str] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "source": source}
        )
        self.source = source
