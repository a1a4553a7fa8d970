"""Pytest configuration and shared fixtures for ZipQuote tests."""

import copy
import os
import sys
from typing import Any, Dict

import pytest


# ============================================================================
# Ensure local imports work (zipquote/, tests/)
# ============================================================================
#
# Tests import `zipquote...` and `tests.fixtures...` absolutely; make the
# repository root importable even without an editable install.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from zipquote.models.pricebook import PricebookSnapshot  # noqa: E402
from zipquote.models.quote import QuoteRequest  # noqa: E402
from tests.fixtures.mock_pricebook_data import PRICEBOOK_DOCUMENT  # noqa: E402


# ============================================================================
# Pricebook Fixtures
# ============================================================================

@pytest.fixture
def pricebook_document() -> Dict[str, Any]:
    """Fresh copy of the mock pricebook document (safe to edit per test)."""
    return copy.deepcopy(PRICEBOOK_DOCUMENT)


@pytest.fixture
def pricebook(pricebook_document) -> PricebookSnapshot:
    """Validated mock pricebook snapshot."""
    return PricebookSnapshot.model_validate(pricebook_document)


@pytest.fixture
def make_pricebook(pricebook_document):
    """Factory: mock pricebook with selected sections overridden."""
    def _make(**sections: Any) -> PricebookSnapshot:
        document = copy.deepcopy(pricebook_document)
        document.update(sections)
        return PricebookSnapshot.model_validate(document)
    return _make


# ============================================================================
# Request Fixtures
# ============================================================================

@pytest.fixture
def make_request():
    """Factory for quote requests with sensible defaults."""
    def _make(service: str = "Interior paint", zip: str = "99999", size: Any = 500, extras=None) -> QuoteRequest:
        return QuoteRequest(service=service, zip=zip, size=size, extras=extras or [])
    return _make


@pytest.fixture
def pricebook_file(tmp_path, pricebook_document):
    """Mock pricebook written to a temporary JSON file."""
    import json

    path = tmp_path / "prices_by_zip.json"
    path.write_text(json.dumps(pricebook_document), encoding="utf-8")
    return path
