"""
Pull request validation for a single new submission:
- the PR may only touch files in the submissions directory
- it must add or modify exactly one JSON file there
- the file must parse, pass the format rules and be named after its github
- its keys must not collide with the already-merged dataset

Unlike batch aggregation this is fail-fast: the first failing stage decides.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Sequence, Union

from walloffame.contributors.duplicates import find_existing_duplicates
from walloffame.contributors.normalize import normalize_contributor
from walloffame.contributors.schema import ChangedFile, Contributor
from walloffame.contributors.validate import (
    ROOT_NOT_OBJECT,
    expected_filename,
    validate_contributor,
)
from walloffame.pipeline.storage import load_contributors

REPORT_TITLE = "### Validation failed"


class AdmissionError(Exception):
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass
class AdmissionResult:
    filename: Optional[str] = None
    contributor: Optional[Contributor] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def admit_submission(
    filename: str,
    content: Union[bytes, str],
    existing: Iterable[Contributor],
) -> Contributor:
    """
    Run structural -> schema -> naming -> duplicate checks on one submission.
    `filename` is the declared repo path of the file, e.g. submissions/abc.json.
    Raises AdmissionError with the errors of the first failing stage.
    """
    try:
        parsed = json.loads(content)
    except ValueError as e:
        raise AdmissionError([f"Invalid JSON in {filename}: {e}"]) from e
    if not isinstance(parsed, dict):
        raise AdmissionError([ROOT_NOT_OBJECT])

    rec = normalize_contributor(parsed)
    errors = validate_contributor(rec)
    if errors:
        raise AdmissionError(errors)

    declared = PurePosixPath(filename.replace("\\", "/"))
    expected = declared.parent / expected_filename(rec)
    if declared != expected:
        raise AdmissionError(
            [f'File must be named "{expected}" (currently "{declared}").']
        )

    errors = find_existing_duplicates(rec, existing)
    if errors:
        raise AdmissionError(errors)

    return rec


def select_submission(
    changed: Sequence[ChangedFile], submissions_dir: str = "submissions"
) -> str:
    """Pick the one submission file a PR is allowed to touch."""
    prefix = submissions_dir.rstrip("/") + "/"

    outside = [f for f in changed if not f.filename.startswith(prefix)]
    if outside:
        raise AdmissionError(
            [
                f"Only files in {prefix} are allowed. Found changes outside {prefix}:",
                *[f"  • {f.filename}" for f in outside],
            ]
        )

    subs = [
        f
        for f in changed
        if f.filename.endswith(".json") and f.status != "removed"
    ]
    if len(subs) != 1:
        raise AdmissionError(
            [
                f"PR must add or modify exactly one JSON file in {prefix}. "
                f"Found: {len(subs)}"
            ]
        )

    filename = subs[0].filename
    if str(PurePosixPath(filename).parent) != prefix.rstrip("/"):
        raise AdmissionError(
            [f'Submission must be placed directly in {prefix} (found "{filename}").']
        )
    return filename


def load_changed_files(path: Path) -> List[ChangedFile]:
    """An unreadable listing counts as an empty one."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        raw = "[]"
    data = json.loads(raw)
    if not isinstance(data, list):
        raise AdmissionError(
            [f"Changed-files listing must be a JSON list (got {type(data).__name__})."]
        )
    return [ChangedFile.model_validate(item) for item in data]


def format_validation_report(errors: Sequence[str]) -> str:
    lines = "\n".join(f"- {e}" for e in errors)
    return f"{REPORT_TITLE}\n\n{lines}\n"


def write_validation_report(report_path: Path, errors: Sequence[str]) -> None:
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(format_validation_report(errors), encoding="utf-8")


def validate_pull_request(
    pr_dir: Path,
    base_dir: Path,
    changed_files_path: Path,
    report_path: Path,
    *,
    submissions_dir: str = "submissions",
    contributors_file: Path = Path("data") / "contributors.json",
) -> AdmissionResult:
    """
    Validate the submission of one PR checkout against the base checkout.
    On failure the errors are written to `report_path`; on success nothing
    is written.
    """
    result = AdmissionResult()
    try:
        changed = load_changed_files(changed_files_path)
        result.filename = select_submission(changed, submissions_dir)

        try:
            content = (pr_dir / result.filename).read_bytes()
        except OSError as e:
            raise AdmissionError(
                [
                    f"Unable to read file {result.filename}. "
                    "Ensure it exists in your branch."
                ]
            ) from e

        existing = load_contributors(base_dir / contributors_file)
        result.contributor = admit_submission(result.filename, content, existing)
    except AdmissionError as e:
        result.errors = e.errors
    except (OSError, ValueError) as e:
        result.errors = [f"Unexpected error: {e}"]

    if result.errors:
        write_validation_report(report_path, result.errors)
    return result
