"""
Compute an instant quote from the command line against a pricebook file.

Handy for checking a pricebook edit before it is handed to the admin layer,
or for reproducing a quote a customer saw in chat.

Usage:
  zipquote-quote --service "interior paint" --zip 33428 --size 500
  zipquote-quote --service "toilet replacement" --zip 33401 --size 2 --json
  zipquote-quote --service "paint" --zip 33428 --size 800 --extra primer --extra ceilings \
      --pricebook data/prices_by_zip.json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import structlog

from zipquote.config.errors import ZipQuoteError
from zipquote.config.logging import configure_logging
from zipquote.config.settings import settings
from zipquote.models.quote import QuoteRequest
from zipquote.services.pricebook_store import load_pricebook
from zipquote.services.quote_calculator import compute_quote
from zipquote.utils.quote_formatter import format_quote_summary

logger = structlog.get_logger(__name__)

EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute an instant ZIP-based quote.")
    parser.add_argument("--service", required=True, help="Free-text service description")
    parser.add_argument("--zip", required=True, dest="zip_code", help="Job ZIP code")
    parser.add_argument("--size", default=None, help="Area in ft² or item count")
    parser.add_argument(
        "--extra",
        action="append",
        default=[],
        dest="extras",
        help="Add-on flag (repeatable), e.g. primer, ceilings",
    )
    parser.add_argument(
        "--pricebook",
        default=None,
        help="Pricebook JSON path (default: PRICEBOOK_PATH or bundled sample)",
    )
    parser.add_argument("--json", action="store_true", help="Print the quote as JSON")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL, or WARNING with --json)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or ("WARNING" if args.json else settings.log_level))

    request = QuoteRequest(
        service=args.service,
        zip=args.zip_code,
        size=args.size,
        extras=args.extras,
    )

    try:
        pricebook = load_pricebook(args.pricebook or settings.pricebook_path)
        quote = compute_quote(pricebook, request)
    except ZipQuoteError as e:
        logger.error("quote_failed", code=e.code, message=e.message)
        print(json.dumps(e.to_dict(), indent=2, default=str), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.json:
        print(json.dumps(quote.to_response(), indent=2, ensure_ascii=False))
    else:
        print(format_quote_summary(quote))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
