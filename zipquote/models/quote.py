"""Quote request/result Pydantic models for ZipQuote.

The request is not pre-validated by callers (chat tool calls, web forms), so
its validators coerce rather than reject. The result is the itemized quote
handed to reply-formatting and email collaborators.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from zipquote.utils.numeric_guards import to_number


# =============================================================================
# REQUEST MODEL
# =============================================================================


class QuoteRequest(BaseModel):
    """Instant quote request.

    ``size`` is square footage for area-priced services and an item count
    for per-item services. The legacy field name ``sqft`` is accepted.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    service: str = Field(default="", description="Free-text service description")
    zip: str = Field(default="", description="ZIP where the job will be done")
    size: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("size", "sqft"),
        description="Area in ft² or item count, depending on the service unit",
    )
    extras: List[str] = Field(default_factory=list, description="Ordered add-on flags")

    @field_validator("service", mode="before")
    @classmethod
    def service_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("zip", mode="before")
    @classmethod
    def zip_text(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("size", mode="before")
    @classmethod
    def size_number(cls, v):
        """Coerce numeric strings; anything else is treated as not given."""
        return to_number(v)

    @field_validator("extras", mode="before")
    @classmethod
    def extras_ordered_set(cls, v):
        """Normalize flags and drop repeats, keeping first-seen order."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (set, frozenset)):
            # Unordered input gets a stable order so quotes stay repeatable
            v = sorted(item for item in v if isinstance(item, str))
        if not isinstance(v, (list, tuple)):
            return []
        flags: List[str] = []
        for item in v:
            if not isinstance(item, str):
                continue
            flag = item.strip().lower()
            if flag and flag not in flags:
                flags.append(flag)
        return flags


# =============================================================================
# RESULT MODELS
# =============================================================================


class LineItem(BaseModel):
    """One labeled monetary contribution to a quote."""

    model_config = ConfigDict(frozen=True)

    label: str
    amount: float


class GeoApplied(BaseModel):
    """Guarded geo values the calculator actually used."""

    model_config = ConfigDict(frozen=True)

    labor_index: float = 1.0
    materials_index: float = 1.0
    travel_fee: float = 0.0
    min_job: float = 0.0
    tax_rate: float = 0.0


class QuoteResult(BaseModel):
    """Itemized instant quote."""

    model_config = ConfigDict(frozen=True)

    zip: str
    service_key: str
    geo_applied: GeoApplied
    currency: str = "USD"
    subtotal: float
    tax: float
    total: float
    line_items: List[LineItem] = Field(default_factory=list)
    notes: str = ""

    def line_items_total(self) -> float:
        """Sum of line item amounts (pre-tax)."""
        return round(sum(item.amount for item in self.line_items), 2)

    def to_response(self) -> Dict[str, Any]:
        """Convert to the shape consumed by reply and email formatting.

        Returns:
            Dictionary with camelCase ``lineItems`` and ``serviceKey``.
        """
        return {
            "zip": self.zip,
            "serviceKey": self.service_key,
            "geo_applied": self.geo_applied.model_dump(),
            "currency": self.currency,
            "subtotal": self.subtotal,
            "tax": self.tax,
            "total": self.total,
            "lineItems": [
                {"label": item.label, "amount": item.amount}
                for item in self.line_items
            ],
            "notes": self.notes,
        }
