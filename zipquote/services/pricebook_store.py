"""Pricebook Store for ZipQuote.

Loads the pricebook JSON document and holds the current snapshot. Replacing
the pricebook builds and validates a new snapshot first, then swaps the
reference in one assignment; callers that already hold the previous snapshot
keep a consistent view for the rest of their quote.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
from pydantic import ValidationError

from zipquote.config.errors import ErrorCode, PricebookLoadError
from zipquote.config.settings import settings
from zipquote.models.pricebook import PricebookSnapshot
from zipquote.models.quote import QuoteRequest, QuoteResult
from zipquote.services.quote_calculator import compute_quote

logger = structlog.get_logger(__name__)


def parse_pricebook(document: Any, source: Optional[str] = None) -> PricebookSnapshot:
    """Validate a pricebook document into a snapshot.

    Args:
        document: Decoded JSON object
        source: Where the document came from, for error context

    Raises:
        PricebookLoadError: If the document is not a JSON object or fails
            validation.
    """
    if isinstance(document, PricebookSnapshot):
        return document
    if not isinstance(document, dict):
        raise PricebookLoadError(
            code=ErrorCode.PRICEBOOK_INVALID_SCHEMA,
            message="Pricebook must be a JSON object",
            source=source,
            details={"type": type(document).__name__},
        )
    try:
        return PricebookSnapshot.model_validate(document)
    except ValidationError as e:
        raise PricebookLoadError(
            code=ErrorCode.PRICEBOOK_INVALID_SCHEMA,
            message="Pricebook failed validation",
            source=source,
            details={"errors": e.errors(include_url=False)},
        ) from e


def load_pricebook(path: Union[str, Path]) -> PricebookSnapshot:
    """Read and validate a pricebook JSON file.

    Raises:
        PricebookLoadError: If the file is missing, unreadable or invalid.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PricebookLoadError(
            code=ErrorCode.PRICEBOOK_NOT_FOUND,
            message=f"Cannot read pricebook: {path}",
            source=str(path),
            details={"error": str(e)},
        ) from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise PricebookLoadError(
            code=ErrorCode.PRICEBOOK_INVALID_JSON,
            message=f"Pricebook is not valid JSON: {path}",
            source=str(path),
            details={"line": e.lineno, "column": e.colno},
        ) from e

    snapshot = parse_pricebook(document, source=str(path))
    logger.info(
        "pricebook_loaded",
        path=str(path),
        zip_count=len(snapshot.lookup),
        rule_count=len(snapshot.rules),
        service_count=len(snapshot.services),
    )
    return snapshot


class PricebookStore:
    """Holds the current pricebook snapshot for a process.

    The store never writes the pricebook anywhere; persisting an edited
    document is the administration layer's job.
    """

    def __init__(
        self,
        snapshot: Optional[PricebookSnapshot] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        self.path = Path(path) if path is not None else None
        self._snapshot = snapshot

    def snapshot(self) -> PricebookSnapshot:
        """Current snapshot, loading from the configured path on first use."""
        current = self._snapshot
        if current is None:
            if self.path is None:
                current = PricebookSnapshot()
            else:
                current = load_pricebook(self.path)
            self._snapshot = current
        return current

    def replace(self, document: Union[PricebookSnapshot, Dict[str, Any]]) -> PricebookSnapshot:
        """Swap in a new pricebook.

        The new document is validated before the swap, so a bad document
        leaves the current snapshot in place.
        """
        new_snapshot = parse_pricebook(document, source="replace")
        self._snapshot = new_snapshot
        logger.info(
            "pricebook_replaced",
            zip_count=len(new_snapshot.lookup),
            rule_count=len(new_snapshot.rules),
            service_count=len(new_snapshot.services),
        )
        return new_snapshot

    def reload(self) -> PricebookSnapshot:
        """Re-read the pricebook file and swap it in."""
        if self.path is None:
            raise PricebookLoadError(
                code=ErrorCode.PRICEBOOK_NOT_FOUND,
                message="No pricebook path configured for reload",
            )
        return self.replace(load_pricebook(self.path))

    def quote(self, request: Union[QuoteRequest, Dict[str, Any]]) -> QuoteResult:
        """Compute a quote against the current snapshot."""
        return compute_quote(self.snapshot(), request)


# Lazily created process-wide store
_store: Optional[PricebookStore] = None


def get_store() -> PricebookStore:
    """Process-wide store backed by ``settings.pricebook_path``."""
    global _store
    if _store is None:
        _store = PricebookStore(path=settings.pricebook_path)
    return _store
