"""
Scraper exception hierarchy.

Missing optional or required markup is not an error: parsers return None and
the listing is skipped. The exceptions below signal faults that the pipeline
hands over to its failure policy.

Classes:
    ScraperError: Base class for all scraper faults.
    VersionParseError: Version string is not dotted numeric.
    MalformedRangeError: Supported-versions text cannot be turned into a range.
    FetchError: HTTP request for a page failed.
    DetailPageError: Detail page lacks its left column region.
    DateParseError: Update date is present but does not match YYYY-MM-DD.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper faults."""


class VersionParseError(ScraperError, ValueError):
    """Version string contains a non-numeric or empty segment."""

    def __init__(self, version: str, message: Optional[str] = None):
        self.version = version
        super().__init__(message or f"Invalid version string: {version!r}")


class MalformedRangeError(VersionParseError):
    """Supported-versions text does not describe one version or a min-max pair."""

    def __init__(self, range_text: str, message: Optional[str] = None):
        super().__init__(range_text, message or f"Malformed version range: {range_text!r}")


class FetchError(ScraperError):
    """Page could not be fetched (timeout, connection fault or HTTP error status)."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch {url}: {cause}")


class DetailPageError(ScraperError):
    """Detail page does not have the expected structure."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"{message} ({url})")


class DateParseError(ScraperError, ValueError):
    """Update date text is present but unparsable."""

    def __init__(self, text: str, url: Optional[str] = None):
        self.text = text
        self.url = url
        where = f" on {url}" if url else ""
        super().__init__(f"Unparsable update date {text!r}{where}")
