"""
Tests for the component detail page parser.
"""

import httpx
import pytest
from bs4 import BeautifulSoup

from marketplace_scraper.core.exceptions import DateParseError, DetailPageError, FetchError
from marketplace_scraper.core.models import ListingSummary
from marketplace_scraper.scraper.parsers.component_page import (
    ComponentPageParser,
    parse_update_date,
)

from .conftest import ROOT_URL, component_page, make_transport

DETAIL_URL = f"{ROOT_URL}/marketplace/acme-addon"


@pytest.fixture
def summary():
    return ListingSummary(
        id="acme-addon",
        name="Acme Addon",
        description=None,
        rating="3",
        detail_url=DETAIL_URL,
    )


@pytest.fixture
def parser(config):
    return ComponentPageParser(config)


def extract(parser, summary, html):
    return parser.extract(summary, BeautifulSoup(html, "lxml"))


class TestExtract:
    def test_full_page(self, parser, summary):
        descriptor = extract(
            parser,
            summary,
            component_page(updated="2019-05-14", tags=["ui", "charts"]),
        )

        assert descriptor.id == "acme-addon"
        assert descriptor.name == "Acme Addon"
        assert descriptor.description is None
        assert descriptor.rating == "3"
        assert descriptor.group_id == "com.acme"
        assert descriptor.artifact_id == "addon"
        assert descriptor.versions == ["1.2.3"]
        assert descriptor.vendor == "Acme"
        assert descriptor.category == "Tools"
        assert descriptor.tags == ["ui", "charts"]
        assert descriptor.update_date_time == 1557792000000

    def test_optional_fields_absent(self, parser, summary):
        descriptor = extract(parser, summary, component_page())
        assert descriptor.tags == []
        assert descriptor.update_date_time is None

    def test_extra_coordinate_segments_are_ignored(self, parser, summary):
        descriptor = extract(parser, summary, component_page(coordinates="g:a:1.0:jar"))
        assert (descriptor.group_id, descriptor.artifact_id, descriptor.versions) == ("g", "a", ["1.0"])

    def test_missing_left_column_raises(self, parser, summary):
        with pytest.raises(DetailPageError) as exc_info:
            extract(parser, summary, component_page(left_column=False))
        assert exc_info.value.url == DETAIL_URL

    def test_unparsable_date_raises(self, parser, summary):
        with pytest.raises(DateParseError) as exc_info:
            extract(parser, summary, component_page(updated="14 May 2019"))
        assert exc_info.value.text == "14 May 2019"

    @pytest.mark.parametrize(
        "fields",
        [
            {"coordinates": None},
            {"coordinates": "com.acme:addon"},
            {"vendor": None},
            {"category": None},
        ],
    )
    def test_missing_required_field_skips(self, parser, summary, fields):
        assert extract(parser, summary, component_page(**fields)) is None

    def test_tags_container_without_items(self, parser, summary):
        html = component_page().replace(
            "</div></body>",
            '<div class="field-name-field-addon-tags"></div></div></body>',
        )
        assert extract(parser, summary, html).tags == []


class TestParseUpdateDate:
    def test_epoch(self):
        assert parse_update_date("1970-01-01") == 0

    def test_surrounding_whitespace(self):
        assert parse_update_date(" 2019-05-14 ") == 1557792000000

    def test_trailing_time_is_ignored(self):
        assert parse_update_date("2019-05-14 12:00") == 1557792000000

    @pytest.mark.parametrize("text", ["", "2019/05/14", "2019-13-01"])
    def test_invalid(self, text):
        with pytest.raises(DateParseError):
            parse_update_date(text)


@pytest.mark.asyncio
async def test_parse_fetches_detail_page(parser, summary):
    transport = make_transport({DETAIL_URL: component_page()})
    async with httpx.AsyncClient(transport=transport) as client:
        descriptor = await parser.parse(summary, client)
    assert descriptor.vendor == "Acme"


@pytest.mark.asyncio
async def test_parse_timeout_raises_fetch_error(parser, summary):
    transport = make_transport({DETAIL_URL: httpx.ReadTimeout("timed out")})
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(FetchError) as exc_info:
            await parser.parse(summary, client)
    assert isinstance(exc_info.value.cause, httpx.ReadTimeout)
