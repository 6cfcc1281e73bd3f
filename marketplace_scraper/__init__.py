"""
Root package of the marketplace scraper.

This package collects CUBA platform marketplace components whose supported
platform versions do not include a target version, and writes them to a JSON
report.

Package structure:
    config: Configuration (environment settings, ScraperConfig).
    core: Data models, version comparison, report building and exceptions.
    scraper: Listing page and component page parsers, scraping pipeline.
    utils: Helper utilities (logging).
"""

__version__ = "1.0.0"
