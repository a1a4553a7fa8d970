"""Plain-text quote summaries for reply and email collaborators."""

from typing import Any, Dict, Union

from zipquote.models.quote import QuoteResult


def _amount(value: float) -> str:
    return f"{value:,.2f}"


def format_quote_summary(quote: Union[QuoteResult, Dict[str, Any]]) -> str:
    """Render a quote as "Quote total" plus one bullet per line item.

    Accepts a QuoteResult or its ``to_response()`` dictionary.
    """
    if isinstance(quote, QuoteResult):
        quote = quote.to_response()

    lines = [f"Quote total: ${_amount(quote.get('total', 0.0))} {quote.get('currency', 'USD')}"]
    for item in quote.get("lineItems", []):
        lines.append(f"- {item['label']}: ${_amount(item['amount'])}")
    lines.append(f"Subtotal: ${_amount(quote.get('subtotal', 0.0))}")
    lines.append(f"Tax: ${_amount(quote.get('tax', 0.0))}")
    if quote.get("notes"):
        lines.append(quote["notes"])
    return "\n".join(lines)
