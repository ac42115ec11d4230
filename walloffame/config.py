from __future__ import annotations

from pathlib import Path

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for paths & markers.
    Every field can be overridden from the environment with a WOF_ prefix,
    e.g. WOF_README_FILE=docs/index.md.
    """

    model_config = SettingsConfigDict(
        env_prefix="WOF_",
        extra="ignore",
    )

    project_root: Path = Field(default_factory=Path.cwd)

    submissions_dir: Path = Field(default=Path("submissions"))
    contributors_file: Path = Field(default=Path("data") / "contributors.json")
    readme_file: Path = Field(default=Path("README.md"))
    errors_report_file: Path = Field(default=Path("validation_errors.md"))
    schema_file: Path = Field(default=Path("schema") / "contributor.schema.json")

    start_marker: str = "<!-- WALL_OF_FAME_START -->"
    end_marker: str = "<!-- WALL_OF_FAME_END -->"

    @field_validator(
        "project_root",
        "submissions_dir",
        "contributors_file",
        "readme_file",
        "errors_report_file",
        "schema_file",
        mode="before",
    )
    @classmethod
    def _coerce_path(cls, v):
        # Accept strings from env and coerce; allow Path passthrough.
        if isinstance(v, str):
            return Path(v.strip()).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    def _resolve(self, p: Path) -> Path:
        return p if p.is_absolute() else (self.project_root / p).resolve()

    @computed_field(return_type=Path)
    def submissions_path(self) -> Path:
        return self._resolve(self.submissions_dir)

    @computed_field(return_type=Path)
    def contributors_path(self) -> Path:
        return self._resolve(self.contributors_file)

    @computed_field(return_type=Path)
    def readme_path(self) -> Path:
        return self._resolve(self.readme_file)

    @computed_field(return_type=Path)
    def errors_report_path(self) -> Path:
        return self._resolve(self.errors_report_file)

    @computed_field(return_type=Path)
    def schema_path(self) -> Path:
        return self._resolve(self.schema_file)


# Lazy singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
