"""
Batch aggregation:
- Reads every submission
- Normalizes and validates each one, checks its filename
- Fails if anything is invalid or duplicated (all problems reported together)
- Writes the sorted canonical dataset
- Updates the Wall of Fame section of the document
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Tuple

from walloffame.contributors.duplicates import find_batch_duplicates
from walloffame.contributors.normalize import normalize_contributor
from walloffame.contributors.ordering import sort_contributors
from walloffame.contributors.schema import Contributor
from walloffame.contributors.validate import (
    ROOT_NOT_OBJECT,
    check_submission_filename,
    validate_contributor,
)
from walloffame.pipeline.storage import (
    Submission,
    dump_contributors,
    list_submission_files,
    read_submissions,
    write_texts_atomically,
)
from walloffame.wall.markers import Markers, replace_between_markers
from walloffame.wall.render import generate_wall_of_fame_table


class AggregationError(Exception):
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Aggregation errors:\n- " + "\n- ".join(self.errors))


def aggregate_submissions(submissions: Iterable[Submission]) -> List[Contributor]:
    """
    Turn raw submissions into the sorted canonical dataset.
    Per-file problems never stop the run; every error is collected and
    AggregationError is raised at the end if there were any.
    """
    accepted: List[Contributor] = []
    sources: List[str] = []
    errors: List[str] = []

    for sub in submissions:
        try:
            data = json.loads(sub.content)
        except ValueError:
            errors.append(f"Invalid JSON in {sub.name}")
            continue
        if not isinstance(data, dict):
            errors.append(f"{sub.name}: {ROOT_NOT_OBJECT}")
            continue

        rec = normalize_contributor(data)
        problems = validate_contributor(rec)
        mismatch = check_submission_filename(sub.name, rec)
        if problems:
            errors.append(f"{sub.name}: {'; '.join(problems)}")
        if mismatch:
            errors.append(mismatch)
        if problems or mismatch:
            continue

        accepted.append(rec)
        sources.append(sub.name)

    errors.extend(find_batch_duplicates(accepted, sources))

    if errors:
        raise AggregationError(errors)

    return sort_contributors(accepted)


def render_document(
    document: str, contributors: List[Contributor], markers: Markers
) -> str:
    table = generate_wall_of_fame_table(contributors)
    return replace_between_markers(document, markers.start, markers.end, table)


def build_wall(
    submissions_dir: Path,
    contributors_path: Path,
    readme_path: Path,
    markers: Markers = Markers(),
) -> Tuple[List[Contributor], List[Path]]:
    """
    Full rebuild from disk. Both outputs are written together or not at all.
    Returns the sorted contributors and the files that were read.
    """
    files = list_submission_files(submissions_dir)
    contributors = aggregate_submissions(read_submissions(files))

    document = (
        readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""
    )
    write_texts_atomically(
        {
            contributors_path: dump_contributors(contributors),
            readme_path: render_document(document, contributors, markers),
        }
    )
    return contributors, files
