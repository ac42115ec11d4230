from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import walloffame.config as config
from scripts.cli import app

runner = CliRunner()


@pytest.fixture
def repo(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("WOF_PROJECT_ROOT", str(tmp_path))
    monkeypatch.setattr(config, "_settings", None)
    (tmp_path / "README.md").write_text("# Wall\n", encoding="utf-8")
    subs = tmp_path / "submissions"
    subs.mkdir()
    for gh, roll in (("ada", "24bca002"), ("alan", "24bca001")):
        person = {"fullName": f"{gh} tester", "rollNumber": roll, "github": gh}
        (subs / f"{gh}.json").write_text(json.dumps(person), encoding="utf-8")
    yield tmp_path
    monkeypatch.setattr(config, "_settings", None)


def test_aggregate_then_check(repo: Path):
    result = runner.invoke(app, ["aggregate"])
    assert result.exit_code == 0, result.output
    assert "Aggregated 2 contributors." in result.output

    stored = json.loads((repo / "data" / "contributors.json").read_text(encoding="utf-8"))
    assert [r["github"] for r in stored] == ["alan", "ada"]

    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0, result.output
    assert "in sync" in result.output


def test_aggregate_failure_exit_code(repo: Path):
    (repo / "submissions" / "Bad.json").write_text("{}", encoding="utf-8")
    result = runner.invoke(app, ["aggregate"])
    assert result.exit_code == 1
    assert not (repo / "data" / "contributors.json").exists()


def test_check_without_outputs_fails(repo: Path):
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 1


def test_validate_single_file(repo: Path):
    result = runner.invoke(app, ["validate", str(repo / "submissions" / "ada.json")])
    assert result.exit_code == 0, result.output

    bad = repo / "submissions" / "ADA2.json"
    bad.write_text(json.dumps({"fullName": "Ada", "rollNumber": "x", "github": "ada"}))
    result = runner.invoke(app, ["validate", str(bad)])
    assert result.exit_code == 1


def test_validate_pr(repo: Path):
    changed = repo / "changed.json"
    changed.write_text(
        json.dumps([{"filename": "submissions/ada.json", "status": "added"}]),
        encoding="utf-8",
    )
    base = repo / "base"
    base.mkdir()
    args = ["validate-pr", "--pr-dir", str(repo), "--base-dir", str(base)]
    result = runner.invoke(app, [*args, "--changed-files", str(changed)])
    assert result.exit_code == 0, result.output
    assert not (repo / "validation_errors.md").exists()

    # once merged, the same submission collides with the dataset
    runner.invoke(app, ["aggregate", "--contributors", str(base / "data" / "contributors.json")])
    result = runner.invoke(app, [*args, "--changed-files", str(changed)])
    assert result.exit_code == 1
    report = (repo / "validation_errors.md").read_text(encoding="utf-8")
    assert "Duplicate rollNumber: 24bca002 is already in the list." in report


def test_export_schema(repo: Path):
    result = runner.invoke(app, ["export-schema"])
    assert result.exit_code == 0, result.output
    schema = json.loads(
        (repo / "schema" / "contributor.schema.json").read_text(encoding="utf-8")
    )
    assert "github" in schema["properties"]


def test_validate_missing_file(repo: Path):
    result = runner.invoke(app, ["validate", str(repo / "submissions" / "ghost.json")])
    assert result.exit_code == 1
    assert not isinstance(result.exception, FileNotFoundError)
