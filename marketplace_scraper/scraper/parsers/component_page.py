"""
Marketplace component page parser (asynchronous, httpx+bs4).

This module implements the parser for the detail page of a single marketplace
listing. All metadata lives in the "div.left-column" region of the page:
artifact coordinates, author, category, last update date and tags.

A page without the left column, or with an update date that does not start
with YYYY-MM-DD, is a fault and raises. Text after the date (a time of day)
is ignored. A missing coordinates, author or category field makes the
listing incomplete and it is skipped.

Attributes:
    logger: Logger for registering parsing events.
    DATE_FORMAT: Format of the update date shown on the page.
    DATE_PATTERN: Leading date in the update field.

Classes:
    ComponentPageParser: Parser for marketplace component pages.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup, Tag

from marketplace_scraper.config.settings import ScraperConfig
from marketplace_scraper.core.exceptions import DateParseError, DetailPageError
from marketplace_scraper.core.models import AppComponentDescriptor, ListingSummary
from marketplace_scraper.scraper.base import BaseScraper
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"^\s*(\d{4}-\d{1,2}-\d{1,2})")
COORDINATES_SEPARATOR = ":"
MIN_COORDINATES_SEGMENTS = 3


def parse_update_date(text: str, url: Optional[str] = None) -> int:
    """
    Convert a leading YYYY-MM-DD date to milliseconds since epoch (UTC midnight).

    Raises:
        DateParseError: If the text does not start with a valid date.
    """
    match = DATE_PATTERN.match(text)
    if match is None:
        raise DateParseError(text, url)
    try:
        date = datetime.strptime(match.group(1), DATE_FORMAT)
    except ValueError as e:
        raise DateParseError(text, url) from e
    return int(date.replace(tzinfo=timezone.utc).timestamp() * 1000)


class ComponentPageParser(BaseScraper):
    """
    Asynchronous parser for extracting detailed information from a component page.

    Attributes:
        config (ScraperConfig): Scraper configuration (detail page timeout).

    Methods:
        parse: Fetch the detail page and build the descriptor.
        extract: Build the descriptor from an already parsed page.
        _extract_*: Helper methods for extracting specific fields.
    """

    def __init__(self, config: ScraperConfig):
        self.config = config

    def _extract_coordinates(self, column: Tag) -> Optional[List[str]]:
        """Artifact coordinates "group:artifact:version" split into segments."""
        field = column.select_one("input.form-control")
        value = field.get("value") if field is not None else None
        if value is None:
            return None
        coordinates = value.strip().split(COORDINATES_SEPARATOR)
        if len(coordinates) < MIN_COORDINATES_SEGMENTS:
            return None
        return coordinates

    def _extract_vendor(self, column: Tag) -> Optional[str]:
        return self.select_text(
            column, "div.field-name-field-addon-author-list div.field-item"
        )

    def _extract_category(self, column: Tag) -> Optional[str]:
        return self.select_text(column, "div.field-name-field-addon-category a")

    def _extract_update_date(self, column: Tag, url: str) -> Optional[int]:
        text = self.select_text(
            column, "div.field-name-field-addon-updated span.date-display-single"
        )
        if text is None:
            return None
        return parse_update_date(text, url)

    @staticmethod
    def _extract_tags(column: Tag) -> List[str]:
        container = column.select_one("div.field-name-field-addon-tags")
        if container is None:
            return []
        items = container.select_one("div.field-items")
        if items is None:
            return []
        return [a.get_text(" ", strip=True) for a in items.select("div.field-item a")]

    def extract(
        self, summary: ListingSummary, soup: BeautifulSoup
    ) -> Optional[AppComponentDescriptor]:
        """
        Build the component descriptor from a parsed detail page.

        Args:
            summary (ListingSummary): Listing data from the marketplace page.
            soup (BeautifulSoup): Parsed detail page.

        Returns:
            Optional[AppComponentDescriptor]: Descriptor, or None if coordinates,
            author or category are missing.

        Raises:
            DetailPageError: If the page has no left column.
            DateParseError: If the update date is present but unparsable.
        """
        url = summary.detail_url
        column = soup.select_one("div.left-column")
        if column is None:
            raise DetailPageError(url, "Left column not found on component page")

        coordinates = self._extract_coordinates(column)
        if coordinates is None:
            logger.warning(f"Coordinates not found or malformed, skipping: {url}")
            return None
        vendor = self._extract_vendor(column)
        if not vendor:
            logger.warning(f"Author not found, skipping: {url}")
            return None
        category = self._extract_category(column)
        if not category:
            logger.warning(f"Category not found, skipping: {url}")
            return None

        return AppComponentDescriptor(
            id=summary.id,
            name=summary.name,
            description=summary.description,
            category=category,
            tags=self._extract_tags(column),
            vendor=vendor,
            update_date_time=self._extract_update_date(column, url),
            rating=summary.rating,
            group_id=coordinates[0],
            artifact_id=coordinates[1],
            versions=[coordinates[2]],
        )

    async def parse(
        self, summary: ListingSummary, client: httpx.AsyncClient
    ) -> Optional[AppComponentDescriptor]:
        """
        Main method for parsing a component page.

        Raises:
            FetchError: If the page cannot be fetched.
            DetailPageError: If the page has no left column.
            DateParseError: If the update date is unparsable.
        """
        logger.info(f"Parsing component page: {summary.detail_url}")
        soup = await self.fetch_soup(
            summary.detail_url, client, self.config.component_page_timeout
        )
        descriptor = self.extract(summary, soup)
        if descriptor is not None:
            logger.info(f"Successfully extracted data for {summary.detail_url}")
        return descriptor
