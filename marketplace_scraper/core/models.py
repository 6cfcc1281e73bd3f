"""
Data models of the marketplace scraper.

This module contains the value objects passed between the parsers, the
pipeline and the report writer. All of them are frozen dataclasses built
once from parsed markup and never mutated afterwards.

Classes:
    ListingSummary: Fields taken from one block of the listing page.
    AppComponentDescriptor: Full description of one marketplace component.
    Report: Aggregate written to the JSON output.
    OutcomeStatus: Result kind of processing one listing.
    ListingOutcome: Result of processing one listing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ListingSummary:
    """
    Listing that passed the version filter, ready for detail extraction.

    Attributes:
        id (str): Last segment of the detail page link.
        name (str): Display title.
        description (Optional[str]): Teaser text, if any.
        rating (str): Star rating text, "0" when the listing has none.
        detail_url (str): Absolute URL of the detail page.
    """

    id: str
    name: str
    description: Optional[str]
    rating: str
    detail_url: str


@dataclass(frozen=True)
class AppComponentDescriptor:
    """
    Description of one marketplace application component.

    Attributes:
        id (str): Listing identifier from the detail page link.
        name (str): Display title.
        description (Optional[str]): Free text description.
        category (str): Category label.
        tags (List[str]): Tag labels, possibly empty.
        vendor (str): Author of the component.
        update_date_time (Optional[int]): Last update, milliseconds since epoch.
        rating (str): Star rating text.
        group_id (str): First coordinates segment.
        artifact_id (str): Second coordinates segment.
        versions (List[str]): Third coordinates segment as a single element list.
    """

    id: str
    name: str
    description: Optional[str]
    category: str
    tags: List[str]
    vendor: str
    update_date_time: Optional[int]
    rating: str
    group_id: str
    artifact_id: str
    versions: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form with the report's camelCase keys."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "vendor": self.vendor,
            "updateDateTime": self.update_date_time,
            "rating": self.rating,
            "groupId": self.group_id,
            "artifactId": self.artifact_id,
            "versions": list(self.versions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppComponentDescriptor":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            category=data["category"],
            tags=list(data.get("tags") or []),
            vendor=data["vendor"],
            update_date_time=data.get("updateDateTime"),
            rating=data.get("rating", "0"),
            group_id=data["groupId"],
            artifact_id=data["artifactId"],
            versions=list(data["versions"]),
        )


@dataclass(frozen=True)
class Report:
    """
    Scraping result.

    Attributes:
        app_components (List[AppComponentDescriptor]): Accepted components in
            listing page order.
        cuba_version (str): Target platform version the listings were filtered against.
    """

    app_components: List[AppComponentDescriptor]
    cuba_version: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "appComponents": [c.to_dict() for c in self.app_components],
            "cubaVersion": self.cuba_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        return cls(
            app_components=[
                AppComponentDescriptor.from_dict(c) for c in data["appComponents"]
            ],
            cuba_version=data["cubaVersion"],
        )


class OutcomeStatus(str, Enum):
    ACCEPTED = "accepted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ListingOutcome:
    """
    Result of processing a single listing.

    ACCEPTED carries the descriptor, SKIPPED a reason and FAILED the
    exception raised while fetching or extracting the detail page.
    """

    status: OutcomeStatus
    listing_id: str
    descriptor: Optional[AppComponentDescriptor] = None
    reason: Optional[str] = None
    error: Optional[Exception] = field(default=None, compare=False)

    @classmethod
    def accepted(cls, descriptor: AppComponentDescriptor) -> "ListingOutcome":
        return cls(OutcomeStatus.ACCEPTED, descriptor.id, descriptor=descriptor)

    @classmethod
    def skipped(cls, listing_id: str, reason: str) -> "ListingOutcome":
        return cls(OutcomeStatus.SKIPPED, listing_id, reason=reason)

    @classmethod
    def failed(cls, listing_id: str, error: Exception) -> "ListingOutcome":
        return cls(OutcomeStatus.FAILED, listing_id, reason=str(error), error=error)
