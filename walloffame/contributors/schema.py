from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

# -----------------------------
# Field formats
# -----------------------------
FULL_NAME_PATTERN = r"^[A-Za-z][A-Za-z .'\-]*[A-Za-z]$"
ROLL_NUMBER_PATTERN = r"^[0-9]{2}[A-Za-z]{3}[0-9]{3}$"
# GitHub rules: alphanumerics or single hyphens, no leading/trailing hyphen, max 39 chars
GITHUB_PATTERN = r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$"

RE_FULL_NAME = re.compile(FULL_NAME_PATTERN)
RE_ROLL_NUMBER = re.compile(ROLL_NUMBER_PATTERN)
RE_GITHUB = re.compile(GITHUB_PATTERN)


# -----------------------------
# Core schema
# -----------------------------
class Contributor(BaseModel):
    """
    One Wall of Fame entry, as stored in the canonical dataset.

    The model holds whatever the normalizer produced; format rules are
    checked separately by `validate_contributor` so that every violation
    can be reported at once.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    fullName: str = Field(
        "",
        description="Display name, title-cased with collapsed whitespace",
        json_schema_extra={"pattern": FULL_NAME_PATTERN},
    )
    rollNumber: str = Field(
        "",
        description="Institutional roll number, e.g. 24bca001 (stored lowercase)",
        json_schema_extra={"pattern": ROLL_NUMBER_PATTERN},
    )
    github: str = Field(
        "",
        description="GitHub username (stored lowercase)",
        json_schema_extra={"pattern": GITHUB_PATTERN},
    )


class ChangedFile(BaseModel):
    """One entry of a pull request's changed-files listing."""

    model_config = ConfigDict(extra="ignore")

    filename: str
    status: str = "modified"


# -----------------------------
# JSON Schema export
# -----------------------------
def export_json_schema() -> dict:
    """Export the JSON Schema for a submission file (Pydantic v2)."""
    return Contributor.model_json_schema()
