"""
Report aggregation and JSON output.

Functions:
    build_report: Wraps accepted descriptors and the target version into a Report.
    write_report: Writes a Report as pretty-printed JSON.
    read_report: Loads a Report previously written by write_report.
"""

import json
from pathlib import Path
from typing import Iterable, Union

from marketplace_scraper.core.models import AppComponentDescriptor, Report
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


def build_report(
    descriptors: Iterable[AppComponentDescriptor], target_version: str
) -> Report:
    return Report(app_components=list(descriptors), cuba_version=target_version)


def write_report(report: Report, path: Union[str, Path]) -> Path:
    """
    Write report to a JSON file.

    Missing parent directories are created. The file is UTF-8 with
    non-ASCII characters kept as is, indented by 2 spaces.

    Args:
        report (Report): Report to serialize.
        path (Union[str, Path]): Destination file.

    Returns:
        Path: Absolute path of the written file.
    """
    file_path = Path(path).absolute()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info(
        f"Report with {len(report.app_components)} components written to {file_path}"
    )
    return file_path


def read_report(path: Union[str, Path]) -> Report:
    with open(path, encoding="utf-8") as f:
        return Report.from_dict(json.load(f))
