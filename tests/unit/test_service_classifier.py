"""Unit tests for the Service Classifier."""

import pytest

from zipquote.services.service_classifier import (
    DEFAULT_SERVICE_KEY,
    DRYWALL_REPAIR,
    FLOORING_INSTALL,
    PAINTING_EXTERIOR,
    PAINTING_INTERIOR,
    PLUMBING_TOILET_REPLACE,
    classify_service,
)


class TestClassifyService:
    """Ordered keyword matching, first match wins."""

    @pytest.mark.parametrize("text,expected", [
        ("Replace my toilet", PLUMBING_TOILET_REPLACE),
        ("new WC install", PLUMBING_TOILET_REPLACE),
        ("Commode swap", PLUMBING_TOILET_REPLACE),
        ("Exterior paint", PAINTING_EXTERIOR),
        ("paint the EXTERIOR walls", PAINTING_EXTERIOR),
        ("Interior paint", PAINTING_INTERIOR),
        ("pintura de sala", PAINTING_INTERIOR),
        ("Drywall repair", DRYWALL_REPAIR),
        ("patch a hole", DRYWALL_REPAIR),
        ("reparar yeso", DRYWALL_REPAIR),
        ("Install new flooring", FLOORING_INSTALL),
    ])
    def test_categories(self, text, expected):
        assert classify_service(text) == expected

    def test_exterior_without_paint_is_not_exterior_painting(self):
        """Both cues are required for exterior painting."""
        assert classify_service("exterior floor") == FLOORING_INSTALL

    def test_fixture_checked_before_paint(self):
        assert classify_service("paint around the toilet") == PLUMBING_TOILET_REPLACE

    def test_paint_checked_before_drywall(self):
        assert classify_service("patch and paint") == PAINTING_INTERIOR

    @pytest.mark.parametrize("text", ["", None, "roof inspection", 12345])
    def test_unclassifiable_defaults(self, text):
        """Unknown or empty input never raises and falls back to the default."""
        assert classify_service(text) == DEFAULT_SERVICE_KEY == PAINTING_INTERIOR
