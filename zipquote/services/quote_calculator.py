"""Quote Calculator for ZipQuote.

Applies the effective geo rules and the matched service definition to a job,
producing an itemized quote. Stages run in a fixed order over a running
subtotal:

    base (area or per-item) → travel → bundle discount → minimum job
    → extras (compounding) → tax

Only a missing or unpriceable catalog entry raises. Every other anomaly
(missing indices, NaN fees, non-numeric size) is neutralized by guards so an
incomplete pricebook still yields a usable price.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple, Type, Union

import structlog

from zipquote.config.errors import ConfigurationError, ErrorCode
from zipquote.models.pricebook import (
    AreaPricedService,
    ItemPricedService,
    PricebookSnapshot,
    RuleSet,
)
from zipquote.models.quote import GeoApplied, LineItem, QuoteRequest, QuoteResult
from zipquote.services.geo_resolver import resolve_geo
from zipquote.services.service_classifier import classify_service
from zipquote.utils.numeric_guards import (
    finite_or,
    first_present,
    money,
    non_negative_or,
    positive_or,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Per-item rate when a catalog entry has no usable tier
DEFAULT_ITEM_RATE = 200.0

# Extras are percentage add-ons on the running subtotal, applied in request order
EXTRA_ADDONS: Dict[str, Tuple[str, float]] = {
    "primer": ("Primer & sealing", 0.25),
    "ceilings": ("Ceilings", 0.15),
}

TRAVEL_LABEL = "Local travel/dispatch"
BUNDLE_DISCOUNT_LABEL = "Multiple-item bundle discount"
MINIMUM_JOB_LABEL = "Minimum job threshold"

QUOTE_NOTES = "Rates reflect current local market multipliers for this ZIP and service category."


# =============================================================================
# LINE ITEM ACCUMULATOR
# =============================================================================


class _Ledger:
    """Append-only line items plus the running (unrounded) subtotal."""

    def __init__(self):
        self.lines: List[LineItem] = []
        self.subtotal = 0.0

    def add(self, label: str, amount: float) -> float:
        """Append a line and add its rounded amount to the subtotal."""
        amount = money(amount)
        self.lines.append(LineItem(label=label, amount=amount))
        self.subtotal += amount
        return amount

    def note(self, label: str, amount: float) -> None:
        """Append a line for an amount already counted in the subtotal."""
        self.lines.append(LineItem(label=label, amount=money(amount)))


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


def _service_label(request: QuoteRequest, service_key: str) -> str:
    return request.service.strip() or service_key


# =============================================================================
# UNIT PRICING
# =============================================================================


def _price_area(
    service: AreaPricedService,
    request: QuoteRequest,
    guards: GeoApplied,
    ledger: _Ledger,
    label: str,
) -> None:
    """Area-priced: labor and materials per ft² plus a prep add-on."""
    quantity = non_negative_or(request.size, 0.0)
    base_rate = non_negative_or(service.base_rate, 0.0)
    materials_pct = non_negative_or(service.materials_pct, 0.0)
    prep_pct = non_negative_or(service.prep_addon_pct, 0.0)

    base = quantity * (
        base_rate * guards.labor_index
        + base_rate * materials_pct * guards.materials_index
    )
    cost = base + base * prep_pct

    ledger.lines.append(LineItem(
        label=f"{label} — {_format_quantity(quantity)} ft² @ ZIP {request.zip}",
        amount=money(cost),
    ))
    ledger.subtotal += cost

    if guards.travel_fee:
        ledger.add(TRAVEL_LABEL, guards.travel_fee)


def _price_items(
    service: ItemPricedService,
    request: QuoteRequest,
    guards: GeoApplied,
    ledger: _Ledger,
    label: str,
) -> None:
    """Per-item: first tier rate times count, with an optional bundle discount."""
    quantity = max(1.0, positive_or(request.size, 1.0))
    first_tier = service.tiers[0] if service.tiers else None
    base_each = positive_or(first_tier.rate if first_tier else None, DEFAULT_ITEM_RATE)

    # Materials are built into per-item rates, so only labor scales them
    each_rate = base_each * guards.labor_index
    ledger.add(
        f"{label} — {_format_quantity(quantity)} item(s) @ ZIP {request.zip}",
        quantity * each_rate,
    )

    if guards.travel_fee:
        ledger.add(TRAVEL_LABEL, guards.travel_fee)

    discount_pct = non_negative_or(service.bundle_discount_pct, 0.0)
    if quantity > 1 and discount_pct > 0:
        ledger.add(BUNDLE_DISCOUNT_LABEL, -(ledger.subtotal * discount_pct))


_UNIT_PRICERS: Dict[Type, Callable[..., None]] = {
    AreaPricedService: _price_area,
    ItemPricedService: _price_items,
}


def _priced_ledger(
    service: Union[AreaPricedService, ItemPricedService],
    request: QuoteRequest,
    guards: GeoApplied,
    label: str,
) -> _Ledger:
    """Run unit pricing, the minimum job floor and extras (everything but tax)."""
    ledger = _Ledger()
    _UNIT_PRICERS[type(service)](service, request, guards, ledger, label)

    # Minimum job floor
    if ledger.subtotal < guards.min_job:
        ledger.note(MINIMUM_JOB_LABEL, guards.min_job - ledger.subtotal)
        ledger.subtotal = guards.min_job

    # Extras compound on the subtotal as it stands
    for flag in request.extras:
        addon = EXTRA_ADDONS.get(flag)
        if addon is None:
            logger.debug("extra_ignored", flag=flag)
            continue
        addon_label, pct = addon
        ledger.add(addon_label, ledger.subtotal * pct)

    return ledger


# =============================================================================
# GUARDS
# =============================================================================


def guard_rules(
    pricebook: PricebookSnapshot,
    geo: RuleSet,
    service: Optional[Union[AreaPricedService, ItemPricedService]] = None,
) -> GeoApplied:
    """Turn merged geo rules into finite values safe for money math.

    Indices fall back to 1 and minimums/rates to 0 unless finite and
    non-negative. Travel only needs to be finite; a negative fee is a credit.
    The minimum job comes from the service first, then geo, then pricebook
    defaults; tax from geo then defaults.
    """
    service_min_job = getattr(service, "min_job", None)
    min_job = first_present(service_min_job, geo.min_job, pricebook.defaults.min_job, 0.0)
    tax_rate = first_present(geo.tax_rate, pricebook.defaults.tax_rate, 0.0)

    return GeoApplied(
        labor_index=positive_or(geo.labor_index, 1.0),
        materials_index=positive_or(geo.materials_index, 1.0),
        travel_fee=finite_or(geo.travel_fee, 0.0),
        min_job=non_negative_or(min_job, 0.0),
        tax_rate=non_negative_or(tax_rate, 0.0),
    )


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def compute_quote(pricebook: PricebookSnapshot, request: QuoteRequest) -> QuoteResult:
    """Compute an instant quote.

    Args:
        pricebook: Configuration snapshot, or a raw pricebook document
            (validated the same way the store does); read only
        request: Quote request or plain dict (coerced, not pre-validated)

    Returns:
        Itemized QuoteResult with money fields rounded to cents.

    Raises:
        ConfigurationError: If the classified service is not in the catalog
            or its unit is unsupported.
    """
    if not isinstance(pricebook, PricebookSnapshot):
        pricebook = PricebookSnapshot.model_validate(pricebook)
    if not isinstance(request, QuoteRequest):
        request = QuoteRequest.model_validate(request)

    geo = resolve_geo(pricebook, request.zip)
    service_key = classify_service(request.service)
    service = pricebook.service_definition(service_key)
    if service is None:
        logger.warning(
            "service_not_configured",
            service=request.service,
            service_key=service_key,
        )
        raise ConfigurationError(
            code=ErrorCode.SERVICE_NOT_CONFIGURED,
            message=f"Service not configured: {request.service}",
            service_key=service_key,
        )

    guards = guard_rules(pricebook, geo, service)
    label = _service_label(request, service_key)
    ledger = _priced_ledger(service, request, guards, label)
    if not math.isfinite(ledger.subtotal * (1 + guards.tax_rate)):
        # A size too large to price is treated like a missing size
        logger.warning("size_not_priceable", size=request.size, service_key=service_key)
        request = request.model_copy(update={"size": None})
        ledger = _priced_ledger(service, request, guards, label)

    subtotal = money(ledger.subtotal)
    tax = money(ledger.subtotal * guards.tax_rate)
    total = money(ledger.subtotal + tax)

    logger.info(
        "quote_computed",
        zip_code=request.zip,
        service_key=service_key,
        unit=service.unit,
        subtotal=subtotal,
        total=total,
    )

    return QuoteResult(
        zip=request.zip,
        service_key=service_key,
        geo_applied=guards,
        currency=pricebook.currency,
        subtotal=subtotal,
        tax=tax,
        total=total,
        line_items=ledger.lines,
        notes=QUOTE_NOTES,
    )
