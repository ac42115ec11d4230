from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any, List, Optional

from walloffame.contributors.schema import (
    RE_FULL_NAME,
    RE_GITHUB,
    RE_ROLL_NUMBER,
    Contributor,
)

ROOT_NOT_OBJECT = "Invalid JSON: root must be an object."


def validate_contributor(obj: Any) -> List[str]:
    """
    Check a normalized record against the format rules.
    Returns one message per failing rule (empty list = valid).
    """
    if isinstance(obj, Contributor):
        obj = obj.model_dump()
    if not isinstance(obj, Mapping):
        return [ROOT_NOT_OBJECT]

    errors: List[str] = []
    full_name = obj.get("fullName")
    roll_number = obj.get("rollNumber")
    github = obj.get("github")

    if not isinstance(full_name, str) or not full_name.strip():
        errors.append("fullName is required and must be a non-empty string.")
    elif not RE_FULL_NAME.fullmatch(full_name.strip()):
        errors.append(
            "fullName may include letters, spaces, hyphens, apostrophes, and periods."
        )

    if not isinstance(roll_number, str) or not RE_ROLL_NUMBER.fullmatch(
        roll_number.strip()
    ):
        errors.append(
            "rollNumber must match pattern like 24bca001 (2 digits + 3 letters + 3 digits)."
        )

    if not isinstance(github, str) or not RE_GITHUB.fullmatch(github.strip()):
        errors.append("github must be a valid GitHub username.")

    return errors


def expected_filename(record: Contributor) -> str:
    return f"{record.github}.json"


def check_submission_filename(filename: str, record: Contributor) -> Optional[str]:
    """
    Submission files must be named after the normalized GitHub username.
    Only the base name is compared, case-sensitively.
    """
    expected = expected_filename(record)
    name = PurePosixPath(filename.replace("\\", "/")).name
    if name != expected:
        return f"{name}: filename must be {expected}"
    return None
