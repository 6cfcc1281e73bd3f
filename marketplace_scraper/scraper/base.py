"""
Base asynchronous parser class.

This module provides an abstract base class for all parsers in the project.
Defines common interface and basic functionality that should be implemented
by all specialized parsers.

Attributes:
    logger: Logger for registering parsing events.

Classes:
    BaseScraper: Abstract base class for all parsers.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from bs4 import BeautifulSoup, Tag

from marketplace_scraper.core.exceptions import FetchError
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


class BaseScraper(ABC):
    """
    Base class for asynchronous parsers.

    Defines common interface and basic functionality for all parsers.
    Inheritors must implement the parse() method to fetch and extract data
    from specific types of pages.

    Methods:
        get_soup: Creates BeautifulSoup object from HTML code.
        fetch_soup: Downloads a page and parses it.
        select_text: Text of the first element matching a CSS selector.
        parse: Abstract method for parsing data, must be implemented in inheritors.
    """

    @staticmethod
    def get_soup(html: str) -> BeautifulSoup:
        """
        Create BeautifulSoup object from HTML.

        Uses lxml parser for better performance and reliability.

        Args:
            html (str): Page HTML code for parsing.

        Returns:
            BeautifulSoup: BeautifulSoup object for convenient HTML parsing.

        Examples:
            >>> html = "<html><body><h1>Title</h1></body></html>"
            >>> soup = BaseScraper.get_soup(html)
            >>> soup.h1.text
            'Title'
        """
        return BeautifulSoup(html, "lxml")

    async def fetch_soup(
        self, url: str, client: httpx.AsyncClient, timeout: float
    ) -> BeautifulSoup:
        """
        Download a page and parse it.

        No retries are made: a timeout, a connection fault or an error
        status ends the attempt.

        Args:
            url (str): Page URL.
            client (httpx.AsyncClient): HTTP client for making requests.
            timeout (float): Request timeout in seconds.

        Returns:
            BeautifulSoup: Parsed page.

        Raises:
            FetchError: If the request fails or returns an error status.
        """
        logger.debug(f"Fetching {url} (timeout {timeout}s)")
        try:
            resp = await client.get(url, timeout=timeout)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to get HTML for URL: {url}: {e}")
            raise FetchError(url, e) from e
        return self.get_soup(resp.text)

    @staticmethod
    def select_text(root: Tag, selector: str) -> Optional[str]:
        """Stripped text of the first element matching selector, None if absent."""
        node = root.select_one(selector)
        if node is None:
            return None
        return node.get_text(" ", strip=True)

    @abstractmethod
    async def parse(self, *args, **kwargs) -> Any:
        """
        Abstract asynchronous parsing method.

        Must be implemented in child classes to fetch a page and
        extract data from it.
        """
        pass
