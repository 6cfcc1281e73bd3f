"""
Marketplace listing page parser (asynchronous, httpx+bs4).

This module implements the parser for the CUBA marketplace index page. Every
listing on that page is a "div.views-row" block holding the title, teaser,
rating, supported platform versions and a link to the detail page.

Listings are filtered by the target platform version. Only listings whose
supported range does NOT contain the target version are kept: the report
collects the components that still need a compatibility update.

Attributes:
    logger: Logger for registering parsing events.
    SUPPORTED_VERSIONS_RE: Pattern of the supported versions label.

Classes:
    ListingPageParser: Parser for the marketplace listing page.
"""

import re
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup, Tag

from marketplace_scraper.config.settings import ScraperConfig
from marketplace_scraper.core.exceptions import MalformedRangeError
from marketplace_scraper.core.models import ListingSummary
from marketplace_scraper.core.versioning import VersionRange
from marketplace_scraper.scraper.base import BaseScraper
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_VERSIONS_RE = re.compile(r"Supported versions:\s*(.*)", re.IGNORECASE)
LISTING_LINK_SEGMENTS = 3


class ListingPageParser(BaseScraper):
    """
    Asynchronous parser for the marketplace listing page.

    Attributes:
        config (ScraperConfig): Scraper configuration (URLs, timeout, target version).
    """

    def __init__(self, config: ScraperConfig):
        self.config = config

    @staticmethod
    def extract_cells(soup: BeautifulSoup) -> List[Tag]:
        """Return all listing blocks of the page in document order."""
        cells = soup.select("div.views-row")
        logger.info(f"Found {len(cells)} listings on marketplace page")
        return cells

    @staticmethod
    def _extract_version_range(cell: Tag) -> Optional[VersionRange]:
        """
        Find the supported versions label and parse its range.

        Returns:
            Optional[VersionRange]: Parsed range, None if the label is missing
            or its range is malformed.
        """
        for span in cell.find_all("span"):
            match = SUPPORTED_VERSIONS_RE.search(span.get_text(" ", strip=True))
            if match:
                try:
                    return VersionRange.parse(match.group(1))
                except MalformedRangeError as e:
                    logger.debug(str(e))
                    return None
        return None

    def _extract_description(self, cell: Tag) -> Optional[str]:
        description = self.select_text(cell, "div.views-field-body p")
        if description is None:
            description = self.select_text(cell, "div.views-field-body")
        return description

    @staticmethod
    def _extract_id(href: str) -> Optional[str]:
        """Listing id from a link like "/marketplace/<id>"."""
        segments = href.split("/")
        if len(segments) != LISTING_LINK_SEGMENTS:
            return None
        return segments[2]

    def parse_cell(self, cell: Tag, target_version: Optional[str] = None) -> Optional[ListingSummary]:
        """
        Extract a listing block and apply the version filter.

        Args:
            cell (Tag): One "div.views-row" block.
            target_version (Optional[str]): Platform version to filter against,
                the configured one by default.

        Returns:
            Optional[ListingSummary]: Summary of a listing that does not support
            the target version, None if the listing is rejected.
        """
        target_version = target_version or self.config.target_version

        version_range = self._extract_version_range(cell)
        if version_range is None:
            logger.debug("Listing without supported versions, skipping")
            return None
        if version_range.in_range(target_version):
            logger.debug(
                f"Listing supports {target_version} (range {version_range}), skipping"
            )
            return None

        name = self.select_text(cell, "div.views-field-title h3")
        if not name:
            logger.debug("Listing without title, skipping")
            return None

        description = self._extract_description(cell)
        rating = self.select_text(cell, "div.star.star-1 span") or "0"

        link = cell.select_one("a.teaser-link")
        href = link.get("href") if link is not None else None
        if not href:
            logger.debug(f"Listing {name!r} without detail link, skipping")
            return None
        listing_id = self._extract_id(href)
        if not listing_id:
            logger.debug(f"Listing {name!r} has unexpected link {href!r}, skipping")
            return None

        logger.info(f"Listing {listing_id} does not support {target_version} (range {version_range})")
        return ListingSummary(
            id=listing_id,
            name=name,
            description=description,
            rating=rating,
            detail_url=self.config.detail_url(href),
        )

    def parse_page(self, soup: BeautifulSoup) -> List[ListingSummary]:
        """Summaries of all listings on the page that pass the filter, in page order."""
        summaries = []
        for cell in self.extract_cells(soup):
            summary = self.parse_cell(cell)
            if summary is not None:
                summaries.append(summary)
        logger.info(
            f"{len(summaries)} listings do not support {self.config.target_version}"
        )
        return summaries

    async def parse(self, client: httpx.AsyncClient) -> List[ListingSummary]:
        """
        Fetch the listing page and extract the filtered summaries.

        Raises:
            FetchError: If the listing page cannot be fetched.
        """
        logger.info(f"Parsing marketplace page: {self.config.marketplace_url}")
        soup = await self.fetch_soup(
            self.config.marketplace_url, client, self.config.marketplace_timeout
        )
        return self.parse_page(soup)
