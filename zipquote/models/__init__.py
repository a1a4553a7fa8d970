"""ZipQuote data models."""

from zipquote.models.pricebook import (
    AREA_UNIT,
    ITEM_UNIT,
    AreaPricedService,
    GeoMetadata,
    ItemPricedService,
    PricebookSnapshot,
    RuleSet,
    TierRate,
    parse_service_definition,
    rule_key,
)
from zipquote.models.quote import GeoApplied, LineItem, QuoteRequest, QuoteResult

__all__ = [
    "AREA_UNIT",
    "ITEM_UNIT",
    "AreaPricedService",
    "GeoMetadata",
    "ItemPricedService",
    "PricebookSnapshot",
    "RuleSet",
    "TierRate",
    "parse_service_definition",
    "rule_key",
    "GeoApplied",
    "LineItem",
    "QuoteRequest",
    "QuoteResult",
]
