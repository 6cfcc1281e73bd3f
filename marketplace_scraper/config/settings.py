"""
Main application settings.

This module contains all main configuration parameters for the marketplace scraper.
Settings are loaded from environment variables using python-dotenv,
with default values in case of missing variables.

Attributes:
    BASE_DIR (Path): Working directory the scraper was launched from.
    LOGS_DIR (Path): Directory for storing application logs.

    MARKETPLACE_ROOT_URL (str): Site root, prepended to detail page links.
    MARKETPLACE_URL (str): Marketplace listing page URL.
    MARKETPLACE_TIMEOUT (str): Listing page request timeout in seconds.
    COMPONENT_PAGE_TIMEOUT (str): Detail page request timeout in seconds.
    TARGET_CUBA_VERSION (str): Platform version listings are filtered against.
    OUTPUT_PATH (str): Path of the JSON report.
    SCRAPER_CONCURRENCY (str): Number of detail pages fetched at once.
    SCRAPER_ON_ERROR (str): What to do when a listing fails ("abort" or "skip").

    LOG_LEVEL (str): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    LOG_FILE (str): Log file name, empty string disables file logging.
    LOG_FORMAT (str): Log entry format.
    LOG_DATE_FORMAT (str): Date and time format in logs.

Classes:
    FailurePolicy: Reaction of the pipeline to a failed listing.
    ScraperConfig: Immutable configuration passed into the scraper.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from marketplace_scraper.core.versioning import parse_version

# Load environment variables
load_dotenv()

# Base paths
BASE_DIR = Path.cwd()
LOGS_DIR = Path(os.getenv("LOGS_DIR", str(BASE_DIR / "logs")))

# Marketplace settings
MARKETPLACE_ROOT_URL = os.getenv("MARKETPLACE_ROOT_URL", "https://www.cuba-platform.com")
MARKETPLACE_PATH = os.getenv("MARKETPLACE_PATH", "/marketplace")
MARKETPLACE_URL = f"{MARKETPLACE_ROOT_URL}{MARKETPLACE_PATH}"

# Scraper settings, converted and validated by ScraperConfig
MARKETPLACE_TIMEOUT = os.getenv("MARKETPLACE_TIMEOUT", "10")
COMPONENT_PAGE_TIMEOUT = os.getenv("COMPONENT_PAGE_TIMEOUT", "5")
TARGET_CUBA_VERSION = os.getenv("TARGET_CUBA_VERSION", "7.0")
OUTPUT_PATH = os.getenv("OUTPUT_PATH", "output.json")
SCRAPER_CONCURRENCY = os.getenv("SCRAPER_CONCURRENCY", "1")
SCRAPER_ON_ERROR = os.getenv("SCRAPER_ON_ERROR", "abort")

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "scraper.log")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class FailurePolicy(str, Enum):
    """
    Reaction of the pipeline to a listing whose processing raised a fault.

    ABORT re-raises the first fault and ends the run, SKIP logs it and drops
    the listing from the report.
    """

    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class ScraperConfig:
    """
    Immutable scraper configuration.

    Attributes:
        root_url (str): Site root used to build detail page URLs.
        marketplace_url (str): Listing page URL.
        marketplace_timeout (float): Listing page timeout in seconds.
        component_page_timeout (float): Detail page timeout in seconds.
        target_version (str): Platform version listings are filtered against.
        output_path (Path): Where the JSON report is written.
        concurrency (int): Maximum number of detail pages fetched at once.
        on_error (FailurePolicy): Reaction to a failed listing.
    """

    root_url: str = MARKETPLACE_ROOT_URL
    marketplace_url: str = MARKETPLACE_URL
    marketplace_timeout: float = MARKETPLACE_TIMEOUT
    component_page_timeout: float = COMPONENT_PAGE_TIMEOUT
    target_version: str = TARGET_CUBA_VERSION
    output_path: Path = OUTPUT_PATH
    concurrency: int = SCRAPER_CONCURRENCY
    on_error: FailurePolicy = SCRAPER_ON_ERROR

    def __post_init__(self) -> None:
        # Raw environment strings are accepted and converted here
        object.__setattr__(self, "marketplace_timeout", float(self.marketplace_timeout))
        object.__setattr__(self, "component_page_timeout", float(self.component_page_timeout))
        object.__setattr__(self, "concurrency", int(self.concurrency))
        object.__setattr__(self, "on_error", FailurePolicy(self.on_error))
        object.__setattr__(self, "output_path", Path(self.output_path))
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        parse_version(self.target_version)

    @classmethod
    def from_settings(cls, **overrides: Any) -> "ScraperConfig":
        """
        Build configuration from module settings.

        Keyword arguments whose value is None are ignored, so command line
        options that were not given fall back to the environment defaults.

        Args:
            **overrides: Field values replacing the defaults.

        Returns:
            ScraperConfig: Configuration instance.

        Raises:
            ValueError: If a setting or override is invalid.
        """
        values = {
            "root_url": MARKETPLACE_ROOT_URL,
            "marketplace_url": MARKETPLACE_URL,
            "marketplace_timeout": MARKETPLACE_TIMEOUT,
            "component_page_timeout": COMPONENT_PAGE_TIMEOUT,
            "target_version": TARGET_CUBA_VERSION,
            "output_path": OUTPUT_PATH,
            "concurrency": SCRAPER_CONCURRENCY,
            "on_error": SCRAPER_ON_ERROR,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def detail_url(self, href: str) -> str:
        """Absolute URL of a detail page given its site-relative link."""
        return f"{self.root_url}{href}"

