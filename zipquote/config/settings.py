"""ZipQuote configuration settings.

Loads configuration from environment variables with sensible defaults.
Values in a local .env file are picked up for development.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

# Load .env file for local overrides (pricebook location, log level)
load_dotenv()

DEFAULT_PRICEBOOK_PATH = str(Path(__file__).resolve().parent.parent / "data" / "prices_by_zip.json")


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Note: pricing data itself never lives here. Settings only say where the
    pricebook document is and how to log; the engine reads pricing rules from
    the snapshot it is handed.
    """

    # Pricebook location
    pricebook_path: str = field(default_factory=lambda: os.getenv("PRICEBOOK_PATH", DEFAULT_PRICEBOOK_PATH))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


# Singleton settings instance
settings = Settings()
