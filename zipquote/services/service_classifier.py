"""Service Classifier for ZipQuote.

Maps a free-text service description to a canonical catalog key.
Categories are checked in order and the first match wins, so specific
categories (fixtures, exterior paint) come before the generic paint bucket.
"""

from typing import Callable, List, Tuple

PLUMBING_TOILET_REPLACE = "plumbing_toilet_replace"
PAINTING_EXTERIOR = "painting_exterior"
PAINTING_INTERIOR = "painting_interior"
DRYWALL_REPAIR = "drywall_repair"
FLOORING_INSTALL = "flooring_install"

# Most requested service; used when nothing matches
DEFAULT_SERVICE_KEY = PAINTING_INTERIOR


def _any_of(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


def _all_of(*keywords: str) -> Callable[[str], bool]:
    return lambda text: all(keyword in text for keyword in keywords)


# "pint" covers Spanish "pintura"/"pintar", "yeso" is Spanish for plaster
SERVICE_CATEGORIES: List[Tuple[Callable[[str], bool], str]] = [
    (_any_of("toilet", "wc", "commode"), PLUMBING_TOILET_REPLACE),
    (_all_of("exterior", "paint"), PAINTING_EXTERIOR),
    (_any_of("paint", "pint"), PAINTING_INTERIOR),
    (_any_of("drywall", "patch", "yeso"), DRYWALL_REPAIR),
    (_any_of("floor"), FLOORING_INSTALL),
]


def classify_service(service_text: str) -> str:
    """Classify free text into a service key. Never raises."""
    text = str(service_text or "").lower()
    for matches, service_key in SERVICE_CATEGORIES:
        if matches(text):
            return service_key
    return DEFAULT_SERVICE_KEY
