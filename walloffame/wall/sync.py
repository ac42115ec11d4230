from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from walloffame.wall.markers import Markers, region_text


@dataclass
class SyncReport:
    dataset_rows: Optional[int] = None
    table_rows: Optional[int] = None
    problems: List[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return (
            not self.problems
            and self.dataset_rows is not None
            and self.dataset_rows == self.table_rows
        )


def count_table_rows(region: str) -> int:
    """Body rows of the rendered table (every <tr> minus the header row)."""
    return max(region.count("<tr>") - 1, 0)


def check_wall(contributors_path: Path, readme_path: Path, markers: Markers) -> SyncReport:
    """
    Compare the canonical dataset with the table currently in the document.
    Problems are collected rather than raised so the caller can print them all.
    """
    report = SyncReport()

    if not contributors_path.exists():
        report.problems.append(f"Missing dataset: {contributors_path}")
    else:
        try:
            data = json.loads(contributors_path.read_text(encoding="utf-8"))
        except ValueError as e:
            report.problems.append(f"Dataset is not valid JSON: {e}")
        else:
            if not isinstance(data, list) or not data:
                report.problems.append("Contributors data is invalid")
            else:
                report.dataset_rows = len(data)

    if not readme_path.exists():
        report.problems.append(f"Missing document: {readme_path}")
        return report

    region = region_text(readme_path.read_text(encoding="utf-8"), markers)
    if region is None:
        report.problems.append("Wall of Fame markers not found in document")
    else:
        report.table_rows = count_table_rows(region)

    return report
