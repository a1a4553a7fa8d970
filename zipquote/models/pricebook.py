"""Pricebook Pydantic models for ZipQuote.

This module defines the configuration snapshot the quote engine reads:
per-ZIP geo metadata, layered pricing rules, global defaults and the
service catalog.
"""

import copy
import math
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)

from zipquote.config.errors import ConfigurationError, ErrorCode
from zipquote.utils.numeric_guards import to_number


# =============================================================================
# CONSTANTS
# =============================================================================

# Tagged rule-key prefixes, most to least specific
ZIP_RULE_PREFIX = "zip"
COUNTY_RULE_PREFIX = "county"
MSA_RULE_PREFIX = "msa"
STATE_RULE_PREFIX = "state"

AREA_UNIT = "sqft"
ITEM_UNIT = "each"
SUPPORTED_UNITS = (AREA_UNIT, ITEM_UNIT)


def rule_key(prefix: str, value: str) -> str:
    """Build a tagged rule key such as ``county:Palm Beach``."""
    return f"{prefix}:{value}"


def _lenient_number(value: Any) -> Optional[float]:
    """Keep explicit nulls absent; turn garbage into NaN so guards neutralize it."""
    if value is None:
        return None
    number = to_number(value)
    return math.nan if number is None else number


# =============================================================================
# GEO METADATA MODEL
# =============================================================================


class GeoMetadata(BaseModel):
    """Geographic metadata for one ZIP code.

    Every field is optional; empty strings are treated as absent so an
    imported row with a blank county never produces a ``county:`` lookup.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    county: Optional[str] = Field(None, description="County name")
    msa: Optional[str] = Field(None, description="Metropolitan statistical area")
    state: Optional[str] = Field(None, description="State abbreviation")
    city: Optional[str] = Field(None, description="City name")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Strip text values and drop empty ones."""
        if v is None:
            return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return None


# =============================================================================
# RULE SET MODEL
# =============================================================================


class RuleSet(BaseModel):
    """Partial set of pricing multipliers and fees for one geo layer.

    All fields are optional. A field left unset falls through to the next,
    less specific layer when layers are merged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    labor_index: Optional[float] = Field(None, description="Labor cost multiplier")
    materials_index: Optional[float] = Field(None, description="Materials cost multiplier")
    travel_fee: Optional[float] = Field(None, description="Flat travel/dispatch fee ($)")
    min_job: Optional[float] = Field(None, description="Minimum job price ($)")
    tax_rate: Optional[float] = Field(None, description="Sales tax rate (0.07 = 7%)")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_number(cls, v):
        """Accept numeric strings; keep garbage present as NaN."""
        return _lenient_number(v)

    def present_fields(self) -> Dict[str, float]:
        """Fields that carry a value in this layer."""
        return self.model_dump(exclude_none=True)


# =============================================================================
# SERVICE DEFINITION MODELS
# =============================================================================


class TierRate(BaseModel):
    """One per-item price tier."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    rate: Optional[float] = None

    @field_validator("rate", mode="before")
    @classmethod
    def coerce_rate(cls, v):
        return _lenient_number(v)


class _ServiceBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    min_job: Optional[float] = Field(None, description="Service-specific minimum job ($)")
    bundle_discount_pct: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("bundle_discount_pct", "trip_bundle_discount_pct"),
        description="Discount applied when more than one item is booked",
    )

    @field_validator("min_job", "bundle_discount_pct", mode="before")
    @classmethod
    def coerce_optional_number(cls, v):
        return _lenient_number(v)


class AreaPricedService(_ServiceBase):
    """Service priced by square footage."""

    unit: Literal["sqft"]
    base_rate: Optional[float] = Field(None, description="Labor rate per ft² ($)")
    materials_pct: Optional[float] = Field(None, description="Materials as a share of base rate")
    prep_addon_pct: Optional[float] = Field(None, description="Prep work as a share of base")

    @field_validator("base_rate", "materials_pct", "prep_addon_pct", mode="before")
    @classmethod
    def coerce_rates(cls, v):
        return _lenient_number(v)


class ItemPricedService(_ServiceBase):
    """Service priced per item (fixtures, units)."""

    unit: Literal["each"]
    tiers: List[TierRate] = Field(default_factory=list, description="Ordered price tiers")

    @field_validator("tiers", mode="before")
    @classmethod
    def keep_tier_documents(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [tier for tier in v if isinstance(tier, dict)]


ServiceDefinition = Annotated[
    Union[AreaPricedService, ItemPricedService],
    Field(discriminator="unit"),
]

_SERVICE_DEFINITION_ADAPTER = TypeAdapter(ServiceDefinition)


def parse_service_definition(service_key: str, document: Any) -> Union[AreaPricedService, ItemPricedService]:
    """Parse one raw catalog entry into its pricing variant.

    Args:
        service_key: Canonical service key, used for error context.
        document: Raw catalog entry from the pricebook.

    Returns:
        AreaPricedService or ItemPricedService.

    Raises:
        ConfigurationError: If the unit is missing or unsupported. Every
            other field is read leniently, so a supported unit always parses.
    """
    unit = document.get("unit") if isinstance(document, dict) else None
    if unit not in SUPPORTED_UNITS:
        raise ConfigurationError(
            code=ErrorCode.UNSUPPORTED_UNIT,
            message=f'Unsupported unit for service "{service_key}"',
            service_key=service_key,
            details={"unit": unit},
        )
    return _SERVICE_DEFINITION_ADAPTER.validate_python(document)


# =============================================================================
# MAIN PRICEBOOK SNAPSHOT MODEL
# =============================================================================


class PricebookSnapshot(BaseModel):
    """Immutable configuration snapshot handed to the quote engine.

    Service entries stay as raw documents and are parsed per quote, so one
    broken catalog entry only affects quotes for that service.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    lookup: Dict[str, GeoMetadata] = Field(default_factory=dict, description="ZIP → geo metadata")
    rules: Dict[str, RuleSet] = Field(default_factory=dict, description="Tagged rule key → rule set")
    defaults: RuleSet = Field(default_factory=RuleSet, description="Global default rule set")
    services: Dict[str, Any] = Field(default_factory=dict, description="Service key → definition")
    currency: str = Field(default="USD", description="ISO currency code for quotes")

    @field_validator("lookup", "rules", mode="before")
    @classmethod
    def mapping_or_empty(cls, v):
        """Missing sections become empty; entries that are not objects are dropped."""
        if not isinstance(v, dict):
            return {}
        return {str(k): item for k, item in v.items() if isinstance(item, (dict, BaseModel))}

    @field_validator("services", mode="before")
    @classmethod
    def detached_services(cls, v):
        """Copy raw catalog entries so later edits to the source document never leak in."""
        if not isinstance(v, dict):
            return {}
        return {
            str(k): item if isinstance(item, BaseModel) else copy.deepcopy(item)
            for k, item in v.items()
            if isinstance(item, (dict, BaseModel))
        }

    @field_validator("defaults", mode="before")
    @classmethod
    def defaults_or_empty(cls, v):
        if isinstance(v, RuleSet):
            return v
        return v if isinstance(v, dict) else {}

    @field_validator("currency", mode="before")
    @classmethod
    def currency_or_usd(cls, v):
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return "USD"

    def geo_metadata(self, zip_code: str) -> GeoMetadata:
        """Metadata for a ZIP, or an empty record when the ZIP is unknown."""
        return self.lookup.get(zip_code) or GeoMetadata()

    def rule_set(self, key: str) -> Optional[RuleSet]:
        """Rule set stored under a tagged key, if any."""
        return self.rules.get(key)

    def service_definition(self, service_key: str) -> Optional[Union[AreaPricedService, ItemPricedService]]:
        """Parsed catalog entry for service_key, or None when not in the catalog.

        Raises:
            ConfigurationError: If the entry exists but cannot be priced.
        """
        document = self.services.get(service_key)
        if document is None:
            return None
        if isinstance(document, (AreaPricedService, ItemPricedService)):
            return document
        return parse_service_definition(service_key, document)

    def with_updates(self, **sections: Any) -> "PricebookSnapshot":
        """Return a new validated snapshot with whole sections replaced."""
        document = self.model_dump(by_alias=False)
        document.update(sections)
        return PricebookSnapshot.model_validate(document)
