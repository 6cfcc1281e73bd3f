"""
Shared fixtures: synthetic marketplace pages served through httpx.MockTransport.
"""

import os

os.environ.setdefault("LOG_FILE", "")

from typing import Dict, Optional, Union  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

from marketplace_scraper.config.settings import ScraperConfig  # noqa: E402

ROOT_URL = "https://marketplace.test"
MARKETPLACE_URL = f"{ROOT_URL}/marketplace"


def listing_cell(
    name: Optional[str] = "Acme Addon",
    href: Optional[str] = "/marketplace/acme-addon",
    versions: Optional[str] = "6.0-6.5",
    description: Optional[str] = "<p>Adds acme features.</p>",
    rating: Optional[str] = None,
) -> str:
    """HTML of one "div.views-row" block; None leaves the part out."""
    parts = ['<div class="views-row">']
    if name is not None:
        parts.append(f'<div class="views-field-title"><h3>{name}</h3></div>')
    if description is not None:
        parts.append(f'<div class="views-field-body">{description}</div>')
    if rating is not None:
        parts.append(f'<div class="star star-1"><span>{rating}</span></div>')
    if versions is not None:
        parts.append(f'<div class="versions"><span>Supported versions: {versions}</span></div>')
    if href is not None:
        parts.append(f'<a class="teaser-link" href="{href}">More</a>')
    parts.append("</div>")
    return "".join(parts)


def listing_page(*cells: str) -> str:
    return f"<html><body><div class='view-content'>{''.join(cells)}</div></body></html>"


def component_page(
    coordinates: Optional[str] = "com.acme:addon:1.2.3",
    vendor: Optional[str] = "Acme",
    category: Optional[str] = "Tools",
    updated: Optional[str] = None,
    tags: Optional[list] = None,
    left_column: bool = True,
) -> str:
    """HTML of a component detail page; None leaves the field out."""
    if not left_column:
        return "<html><body><div class='right-column'>Nothing here</div></body></html>"
    parts = ['<html><body><div class="left-column">']
    if coordinates is not None:
        parts.append(f'<input class="form-control" type="text" value="{coordinates}"/>')
    if vendor is not None:
        parts.append(
            '<div class="field-name-field-addon-author-list">'
            f'<div class="field-items"><div class="field-item">{vendor}</div></div></div>'
        )
    if category is not None:
        parts.append(
            f'<div class="field-name-field-addon-category"><a href="/c">{category}</a></div>'
        )
    if updated is not None:
        parts.append(
            '<div class="field-name-field-addon-updated">'
            f'<span class="date-display-single">{updated}</span></div>'
        )
    if tags is not None:
        items = "".join(f'<div class="field-item"><a href="/t">{t}</a></div>' for t in tags)
        parts.append(
            f'<div class="field-name-field-addon-tags"><div class="field-items">{items}</div></div>'
        )
    parts.append("</div></body></html>")
    return "".join(parts)


Page = Union[str, Exception]


def make_transport(pages: Dict[str, Page], requested: Optional[list] = None) -> httpx.MockTransport:
    """
    Transport answering with the HTML registered for each URL.

    An Exception value is raised for its URL, unknown URLs get 404. Requested
    URLs are appended to requested when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if requested is not None:
            requested.append(url)
        page = pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            return httpx.Response(404, text="Not found")
        return httpx.Response(200, text=page, headers={"Content-Type": "text/html"})

    return httpx.MockTransport(handler)


@pytest.fixture
def config(tmp_path) -> ScraperConfig:
    return ScraperConfig(
        root_url=ROOT_URL,
        marketplace_url=MARKETPLACE_URL,
        target_version="7.0",
        output_path=tmp_path / "output.json",
        concurrency=1,
        on_error="abort",
    )
