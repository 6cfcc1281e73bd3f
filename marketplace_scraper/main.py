"""
Main module for launching the marketplace scraper.

This module contains the application entry point: it parses command line
options, registers signal handlers for proper shutdown, runs the scraper once
and writes the JSON report.

Attributes:
    logger: Logger for registering main module events.

Functions:
    signal_handler: Signal handler for proper shutdown.
    build_arg_parser: Command line options.
    run: Scrape and write the report for a given configuration.
    main: Main application startup function.
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import Any, List, NoReturn, Optional

from marketplace_scraper.config.settings import FailurePolicy, ScraperConfig
from marketplace_scraper.core.exceptions import ScraperError
from marketplace_scraper.core.report import write_report
from marketplace_scraper.scraper.marketplace import scrape
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


def signal_handler(signum: int, frame: Any) -> NoReturn:
    """
    Signal handler for proper shutdown.

    Intercepts termination signals (SIGINT, SIGTERM) and terminates
    the process with a log entry. No partial report is written.
    """
    logger.info(f"Received signal {signum}. Shutting down...")
    sys.exit(130)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Collect CUBA marketplace components that do not support a platform version."
    )
    parser.add_argument(
        "--target-version",
        help="Platform version to filter listings against (default: TARGET_CUBA_VERSION)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        dest="output_path",
        help="Path of the JSON report (default: OUTPUT_PATH)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        help="Number of component pages fetched at once (default: SCRAPER_CONCURRENCY)",
    )
    parser.add_argument(
        "--on-error",
        choices=[p.value for p in FailurePolicy],
        help="Abort the run or skip the listing when a component page fails (default: SCRAPER_ON_ERROR)",
    )
    return parser


def run(config: ScraperConfig) -> Path:
    """
    Scrape the marketplace and write the report.

    The summary goes to stdout regardless of LOG_LEVEL.

    Args:
        config (ScraperConfig): Scraper configuration.

    Returns:
        Path: Absolute path of the written report.
    """
    report = scrape(config)
    print(f"Report is ready, {len(report.app_components)} descriptors were created")
    output_file = write_report(report, config.output_path)
    print(f"Output file: {output_file.as_uri()}")
    return output_file


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main scraper startup function.

    Performs the following operations:
    1. Registers signal handlers for proper shutdown
    2. Builds the configuration from settings and command line options
    3. Runs the scraper and writes the report

    Raises:
        SystemExit: With code 1 when the run fails, code 2 on invalid options.

    Examples:
        >>> main(["--target-version", "7.1", "--output", "report.json"])
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = build_arg_parser().parse_args(argv)
    try:
        config = ScraperConfig.from_settings(**vars(args))
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    try:
        run(config)
    except ScraperError as e:
        logger.critical(f"Critical error: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
