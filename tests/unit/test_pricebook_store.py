"""Unit tests for pricebook loading and the snapshot store."""

import json

import pytest

from zipquote.config.errors import ErrorCode, PricebookLoadError
from zipquote.config.settings import DEFAULT_PRICEBOOK_PATH
from zipquote.models.pricebook import PricebookSnapshot
from zipquote.services.pricebook_store import (
    PricebookStore,
    load_pricebook,
    parse_pricebook,
)


class TestLoadPricebook:
    """Tests for load_pricebook."""

    def test_loads_file(self, pricebook_file, pricebook):
        assert load_pricebook(pricebook_file) == pricebook

    def test_missing_file(self, tmp_path):
        with pytest.raises(PricebookLoadError) as exc_info:
            load_pricebook(tmp_path / "missing.json")
        assert exc_info.value.code == ErrorCode.PRICEBOOK_NOT_FOUND

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PricebookLoadError) as exc_info:
            load_pricebook(path)
        assert exc_info.value.code == ErrorCode.PRICEBOOK_INVALID_JSON
        assert exc_info.value.details["line"] == 1

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")

        with pytest.raises(PricebookLoadError) as exc_info:
            load_pricebook(path)
        assert exc_info.value.code == ErrorCode.PRICEBOOK_INVALID_SCHEMA

    def test_bundled_sample_pricebook(self):
        """The packaged sample pricebook loads and quotes a Boca Raton job."""
        snapshot = load_pricebook(DEFAULT_PRICEBOOK_PATH)
        store = PricebookStore(snapshot=snapshot)

        quote = store.quote({"service": "Interior paint", "zip": "33428", "size": 500})
        assert quote.service_key == "painting_interior"
        assert quote.geo_applied.labor_index == 1.08
        assert quote.total > quote.subtotal > 0


class TestParsePricebook:

    def test_snapshot_passthrough(self, pricebook):
        assert parse_pricebook(pricebook) is pricebook

    def test_rejects_non_mapping(self):
        with pytest.raises(PricebookLoadError):
            parse_pricebook("pricebook")


class TestPricebookStore:
    """Tests for PricebookStore snapshot swapping."""

    def test_lazy_load_from_path(self, pricebook_file, pricebook):
        store = PricebookStore(path=pricebook_file)
        assert store.snapshot() == pricebook
        assert store.snapshot() is store.snapshot()

    def test_empty_store_without_path(self):
        assert PricebookStore().snapshot() == PricebookSnapshot()

    def test_replace_leaves_old_snapshot_untouched(self, pricebook, pricebook_document):
        store = PricebookStore(snapshot=pricebook)
        held = store.snapshot()

        pricebook_document["defaults"]["tax_rate"] = 0.0
        new_snapshot = store.replace(pricebook_document)

        assert store.snapshot() is new_snapshot
        assert new_snapshot.defaults.tax_rate == 0.0
        assert held.defaults.tax_rate == 0.07

    def test_bad_replacement_keeps_current(self, pricebook):
        store = PricebookStore(snapshot=pricebook)
        with pytest.raises(PricebookLoadError):
            store.replace(["not", "a", "pricebook"])
        assert store.snapshot() is pricebook

    def test_in_flight_quote_sees_one_snapshot(self, pricebook, pricebook_document, make_request):
        """A caller holding a snapshot is unaffected by a later swap."""
        from zipquote.services.quote_calculator import compute_quote

        store = PricebookStore(snapshot=pricebook)
        held = store.snapshot()
        pricebook_document["defaults"]["tax_rate"] = 0.5
        store.replace(pricebook_document)

        assert compute_quote(held, make_request()).total == 1343.41
        assert store.quote(make_request()).tax == pytest.approx(627.76, abs=0.01)

    def test_reload(self, pricebook_file, pricebook_document):
        store = PricebookStore(path=pricebook_file)
        store.snapshot()

        pricebook_document["currency"] = "CAD"
        pricebook_file.write_text(json.dumps(pricebook_document), encoding="utf-8")

        assert store.reload().currency == "CAD"
        assert store.snapshot().currency == "CAD"

    def test_reload_without_path(self):
        with pytest.raises(PricebookLoadError):
            PricebookStore().reload()
