"""
Main scraper class for the CUBA marketplace (asynchronous, httpx+bs4).

This module implements the pipeline that fetches the marketplace listing page,
filters listings by the target platform version, fetches the detail page of
every remaining listing and aggregates the results into a Report.

Every listing ends in an explicit ListingOutcome. Incomplete listings are
skipped; faults (detail page fetch errors, missing left column, unparsable
update date) are handled according to the configured FailurePolicy. A fault
on the listing page itself always ends the run.

Attributes:
    logger: Logger for registering scraping events.

Classes:
    MarketplaceScraper: Main class for scraping the marketplace.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
from fake_useragent import UserAgent

from marketplace_scraper.config.settings import FailurePolicy, ScraperConfig
from marketplace_scraper.core.exceptions import ScraperError
from marketplace_scraper.core.models import (
    ListingOutcome,
    ListingSummary,
    OutcomeStatus,
    Report,
)
from marketplace_scraper.core.report import build_report
from marketplace_scraper.scraper.parsers.component_page import ComponentPageParser
from marketplace_scraper.scraper.parsers.listing_page import ListingPageParser
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


class MarketplaceScraper:
    """
    Asynchronous scraper for the CUBA marketplace.

    Uses ListingPageParser to get the listings that do not support the target
    version and ComponentPageParser to parse each of their detail pages.

    Attributes:
        config (ScraperConfig): Scraper configuration.
        listing_parser (ListingPageParser): Parser for the listing page.
        component_parser (ComponentPageParser): Parser for component pages.
        ua (UserAgent): Random User-Agent header generator.
    """

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize marketplace scraper.

        Args:
            config (Optional[ScraperConfig]): Scraper configuration.
                By default built from application settings.
            transport (Optional[httpx.AsyncBaseTransport]): Transport for the
                HTTP client, the default network transport if not given.
        """
        self.config = config or ScraperConfig.from_settings()
        self.transport = transport
        self.listing_parser = ListingPageParser(self.config)
        self.component_parser = ComponentPageParser(self.config)
        self.ua = UserAgent()
        self._aborted = False

    @asynccontextmanager
    async def _client(self):
        async with httpx.AsyncClient(
            headers={"User-Agent": self.ua.random},
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            yield client

    async def process_listing(
        self, summary: ListingSummary, client: httpx.AsyncClient
    ) -> ListingOutcome:
        """
        Fetch and parse the detail page of one listing.

        Never raises for scraper faults: they are returned as a FAILED outcome
        so the caller decides what to do with them.

        Args:
            summary (ListingSummary): Listing that passed the version filter.
            client (httpx.AsyncClient): HTTP client for making requests.

        Returns:
            ListingOutcome: ACCEPTED with the descriptor, SKIPPED if the page
            lacks a required field, FAILED on a fault.
        """
        try:
            descriptor = await self.component_parser.parse(summary, client)
        except ScraperError as e:
            return ListingOutcome.failed(summary.id, e)
        if descriptor is None:
            return ListingOutcome.skipped(summary.id, "required field missing on component page")
        return ListingOutcome.accepted(descriptor)

    async def collect_outcomes(
        self, summaries: List[ListingSummary], client: httpx.AsyncClient
    ) -> List[ListingOutcome]:
        """
        Process listings with at most config.concurrency pages in flight.

        Outcomes are returned in the order of summaries. Under the ABORT
        policy, listings not yet started when a fault occurs are skipped
        without fetching their pages.
        """
        sem = asyncio.Semaphore(self.config.concurrency)
        self._aborted = False

        async def process(summary: ListingSummary) -> ListingOutcome:
            async with sem:
                if self._aborted:
                    return ListingOutcome.skipped(summary.id, "run aborted")
                outcome = await self.process_listing(summary, client)
                if (
                    outcome.status is OutcomeStatus.FAILED
                    and self.config.on_error is FailurePolicy.ABORT
                ):
                    self._aborted = True
                return outcome

        return list(await asyncio.gather(*(process(s) for s in summaries)))

    def _apply_policy(self, outcomes: List[ListingOutcome]) -> Report:
        descriptors = []
        skipped = failed = 0
        for outcome in outcomes:
            if outcome.status is OutcomeStatus.ACCEPTED:
                descriptors.append(outcome.descriptor)
            elif outcome.status is OutcomeStatus.SKIPPED:
                skipped += 1
                logger.debug(f"Listing {outcome.listing_id} skipped: {outcome.reason}")
            else:
                if self.config.on_error is FailurePolicy.ABORT:
                    raise outcome.error
                failed += 1
                logger.error(f"Listing {outcome.listing_id} failed: {outcome.reason}")
        logger.info(
            f"Scraping completed. Accepted: {len(descriptors)}, skipped: {skipped}, failed: {failed}"
        )
        return build_report(descriptors, self.config.target_version)

    async def run(self) -> Report:
        """
        Start the scraping process.

        Returns:
            Report: Accepted components in listing page order.

        Raises:
            FetchError: If the listing page cannot be fetched, or a detail page
                cannot be fetched under the ABORT policy.
            DetailPageError: Under the ABORT policy, if a component page has no
                left column.
            DateParseError: Under the ABORT policy, if an update date is unparsable.
        """
        logger.info(
            f"Starting marketplace scraper. URL: {self.config.marketplace_url}, "
            f"target version: {self.config.target_version}"
        )
        async with self._client() as client:
            summaries = await self.listing_parser.parse(client)
            outcomes = await self.collect_outcomes(summaries, client)
        return self._apply_policy(outcomes)


def scrape(config: Optional[ScraperConfig] = None) -> Report:
    """Run the scraper synchronously and return the report."""
    return asyncio.run(MarketplaceScraper(config).run())
