"""Geo Resolver for ZipQuote.

Merges the geographic rule layers that apply to a ZIP into one effective
rule set. Layers, most to least specific:

    zip:<ZIP> → county:<county> → msa:<msa> → state:<state> → defaults

A field set by a more specific layer always wins; a field missing from every
layer stays unset and is neutralized later by the calculator's guards.
"""

from typing import List, Optional, Tuple

import structlog

from zipquote.models.pricebook import (
    COUNTY_RULE_PREFIX,
    MSA_RULE_PREFIX,
    STATE_RULE_PREFIX,
    ZIP_RULE_PREFIX,
    GeoMetadata,
    PricebookSnapshot,
    RuleSet,
    rule_key,
)

logger = structlog.get_logger(__name__)

# Three-digit ZIP prefixes assumed to be Florida when lookup has no state.
# TODO: move into the pricebook (e.g. a "state_prefixes" section) so other
# regions can be onboarded without a code change.
FLORIDA_ZIP_PREFIX_RANGE = (320, 349)
FLORIDA_STATE = "FL"

DEFAULTS_LAYER = "defaults"


def assumed_state(zip_code: str, metadata: GeoMetadata) -> Optional[str]:
    """State used for the state layer.

    Args:
        zip_code: ZIP code as given by the caller
        metadata: Lookup metadata for the ZIP (possibly empty)

    Returns:
        The metadata state, "FL" for unknown-state ZIPs in the 320-349
        prefix range, or None.
    """
    if metadata.state:
        return metadata.state

    prefix = str(zip_code or "")[:3]
    if len(prefix) == 3 and prefix.isdigit():
        low, high = FLORIDA_ZIP_PREFIX_RANGE
        if low <= int(prefix) <= high:
            return FLORIDA_STATE
    return None


def geo_layers(pricebook: PricebookSnapshot, zip_code: str) -> List[Tuple[str, RuleSet]]:
    """Rule layers that exist for a ZIP, most specific first.

    Layers whose identifying value is unknown (no county, no msa, no state)
    are skipped rather than looked up as a literal key.
    """
    metadata = pricebook.geo_metadata(zip_code)
    candidates = [
        (ZIP_RULE_PREFIX, zip_code or None),
        (COUNTY_RULE_PREFIX, metadata.county),
        (MSA_RULE_PREFIX, metadata.msa),
        (STATE_RULE_PREFIX, assumed_state(zip_code, metadata)),
    ]

    layers: List[Tuple[str, RuleSet]] = []
    for prefix, value in candidates:
        if not value:
            continue
        key = rule_key(prefix, value)
        rules = pricebook.rule_set(key)
        if rules is not None:
            layers.append((key, rules))

    layers.append((DEFAULTS_LAYER, pricebook.defaults))
    return layers


def merge_rule_sets(layers: List[RuleSet]) -> RuleSet:
    """Merge rule sets given most specific first; earlier fields win."""
    merged = {}
    for layer in layers:
        for name, value in layer.present_fields().items():
            merged.setdefault(name, value)
    return RuleSet.model_validate(merged)


def resolve_geo(pricebook: PricebookSnapshot, zip_code: str) -> RuleSet:
    """Resolve the effective rule set for a ZIP.

    Args:
        pricebook: Configuration snapshot
        zip_code: ZIP code; unknown ZIPs fall through to defaults

    Returns:
        Merged RuleSet (fields may still be unset).
    """
    layers = geo_layers(pricebook, zip_code)
    effective = merge_rule_sets([rules for _, rules in layers])

    logger.debug(
        "geo_resolved",
        zip_code=zip_code,
        layers=[key for key, _ in layers],
        fields=sorted(effective.present_fields()),
    )
    return effective
