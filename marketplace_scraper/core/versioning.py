"""
Version parsing and comparison utilities.

Versions are dotted numeric strings such as "7.0" or "6.10.2". Comparison is
numeric segment by segment; the shorter version is padded with zeros, so
"7" == "7.0" == "7.0.0" and "7.0.1" > "7".
"""

from dataclasses import dataclass
from typing import Tuple

from marketplace_scraper.core.exceptions import MalformedRangeError, VersionParseError

RANGE_SEPARATOR = "-"


def parse_version(version: str) -> Tuple[int, ...]:
    """
    Split a dotted version string into integer segments.

    Args:
        version (str): Version such as "7.0.1".

    Returns:
        Tuple[int, ...]: Numeric segments, e.g. (7, 0, 1).

    Raises:
        VersionParseError: If the string is empty or a segment is not a
            non-negative integer.
    """
    segments = version.strip().split(".")
    if not all(segment.isdecimal() for segment in segments):
        raise VersionParseError(version)
    return tuple(int(segment) for segment in segments)


def compare_versions(a: str, b: str) -> int:
    """
    Three-way numeric comparison of two dotted versions.

    Returns:
        int: Negative if a < b, zero if equal, positive if a > b.

    Raises:
        VersionParseError: If either version is not dotted numeric.
    """
    left, right = parse_version(a), parse_version(b)
    width = max(len(left), len(right))
    left += (0,) * (width - len(left))
    right += (0,) * (width - len(right))
    return (left > right) - (left < right)


@dataclass(frozen=True)
class VersionRange:
    """
    Closed interval of platform versions.

    min is the first token of the range description and max the last one;
    no ordering between them is enforced.
    """

    min: str
    max: str

    @classmethod
    def parse(cls, range_text: str) -> "VersionRange":
        """
        Build a range from text like "6.0-6.5" or a single version "7.0".

        Raises:
            MalformedRangeError: If the text holds more than two tokens, an
                empty token or a token that is not a version.
        """
        tokens = [token.strip() for token in range_text.split(RANGE_SEPARATOR)]
        if len(tokens) not in (1, 2) or not all(tokens):
            raise MalformedRangeError(range_text)
        for token in tokens:
            try:
                parse_version(token)
            except VersionParseError as e:
                raise MalformedRangeError(range_text) from e
        return cls(min=tokens[0], max=tokens[-1])

    def in_range(self, version: str) -> bool:
        """True if min <= version <= max."""
        return (
            compare_versions(version, self.min) >= 0
            and compare_versions(version, self.max) <= 0
        )

    def __str__(self) -> str:
        if self.min == self.max:
            return self.min
        return f"{self.min}{RANGE_SEPARATOR}{self.max}"
