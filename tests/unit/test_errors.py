"""Unit tests for ZipQuote error types."""

from zipquote.config.errors import (
    ConfigurationError,
    ErrorCode,
    PricebookLoadError,
    ZipQuoteError,
)


class TestErrors:

    def test_base_to_dict(self):
        error = ZipQuoteError(code="X", message="boom")
        assert error.to_dict() == {"code": "X", "message": "boom", "details": {}}
        assert str(error) == "boom"

    def test_configuration_error_carries_service_key(self):
        error = ConfigurationError(
            code=ErrorCode.SERVICE_NOT_CONFIGURED,
            message="Service not configured: floors",
            service_key="flooring_install",
        )
        assert isinstance(error, ZipQuoteError)
        assert error.service_key == "flooring_install"
        assert error.to_dict()["details"] == {"service_key": "flooring_install"}
        assert "SERVICE_NOT_CONFIGURED" in repr(error)

    def test_pricebook_load_error_source(self):
        error = PricebookLoadError(
            code=ErrorCode.PRICEBOOK_INVALID_JSON,
            message="bad",
            source="/tmp/p.json",
            details={"line": 3},
        )
        assert error.details == {"line": 3, "source": "/tmp/p.json"}
