"""
The scraper package contains data collection components.

Implementation uses httpx for HTTP requests and BeautifulSoup for HTML parsing.

Modules:
    base: Abstract base class for all parsers.
    marketplace: Main scraper class for the CUBA marketplace.

Subpackages:
    parsers: Specialized parsers for different types of pages:
        - listing_page: Marketplace listing page parser (version filter).
        - component_page: Parser for component detail pages.
"""
