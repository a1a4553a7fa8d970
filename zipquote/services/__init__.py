"""ZipQuote services: geo resolution, classification, quoting and pricebook storage."""

from zipquote.services.geo_resolver import assumed_state, geo_layers, resolve_geo
from zipquote.services.service_classifier import classify_service
from zipquote.services.quote_calculator import compute_quote
from zipquote.services.pricebook_store import (
    PricebookStore,
    get_store,
    load_pricebook,
    parse_pricebook,
)

__all__ = [
    "assumed_state",
    "geo_layers",
    "resolve_geo",
    "classify_service",
    "compute_quote",
    "PricebookStore",
    "get_store",
    "load_pricebook",
    "parse_pricebook",
]
