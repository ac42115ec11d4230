from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from rich import print

# If not installed in editable mode, add repo root to PYTHONPATH
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from walloffame.config import get_settings
from walloffame.contributors.normalize import normalize_contributor
from walloffame.contributors.schema import export_json_schema
from walloffame.contributors.validate import (
    ROOT_NOT_OBJECT,
    check_submission_filename,
    validate_contributor,
)
from walloffame.pipeline.admission import validate_pull_request
from walloffame.pipeline.aggregate import AggregationError, build_wall
from walloffame.wall.markers import Markers
from walloffame.wall.sync import check_wall

app = typer.Typer(add_completion=False, help="Wall of Fame maintenance CLI")


def _markers() -> Markers:
    cfg = get_settings()
    return Markers(start=cfg.start_marker, end=cfg.end_marker)


def _aggregate(
    submissions_dir: Path | None, contributors: Path | None, readme: Path | None
) -> None:
    cfg = get_settings()
    try:
        result, _ = build_wall(
            submissions_dir or cfg.submissions_path,
            contributors or cfg.contributors_path,
            readme or cfg.readme_path,
            _markers(),
        )
    except AggregationError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1)
    print(f"[green]✓[/green] Aggregated {len(result)} contributors.")


@app.command()
def aggregate(
    submissions_dir: Path = typer.Option(
        None, "--submissions", help="Submissions dir; defaults to WOF_SUBMISSIONS_DIR"
    ),
    contributors: Path = typer.Option(
        None, "--contributors", help="Dataset path; defaults to WOF_CONTRIBUTORS_FILE"
    ),
    readme: Path = typer.Option(
        None, "--readme", help="Document to patch; defaults to WOF_README_FILE"
    ),
):
    """
    Rebuild data/contributors.json and the README table from all submissions.
    Fails without writing anything if any submission is invalid or duplicated.
    """
    _aggregate(submissions_dir, contributors, readme)


@app.command("update-wall")
def update_wall():
    """Manual rebuild, followed by the git commands to publish it."""
    cfg = get_settings()
    _aggregate(None, None, None)
    print(
        f"📄 Files updated: {cfg.contributors_file.as_posix()} and {cfg.readme_file.as_posix()}"
    )
    print("💡 You can now commit and push these changes manually:")
    print(
        f"   git add {cfg.contributors_file.as_posix()} {cfg.readme_file.as_posix()}"
    )
    print('   git commit -m "chore: update Wall of Fame"')
    print("   git push")


@app.command("validate-pr")
def validate_pr(
    pr_dir: Path = typer.Option(..., "--pr-dir", help="Checkout of the PR branch"),
    base_dir: Path = typer.Option(..., "--base-dir", help="Checkout of the base branch"),
    changed_files: Path = typer.Option(
        ..., "--changed-files", help="JSON list of {filename, status} for the PR"
    ),
    report: Path = typer.Option(
        None, "--report", help="Where to write errors; defaults to WOF_ERRORS_REPORT_FILE"
    ),
):
    """
    Admission check for a PR that adds one submission.
    On failure a markdown report is written and the exit code is 1.
    """
    cfg = get_settings()
    report_path = report or cfg.errors_report_path
    result = validate_pull_request(
        pr_dir,
        base_dir,
        changed_files,
        report_path,
        submissions_dir=cfg.submissions_dir.as_posix(),
        contributors_file=cfg.contributors_file,
    )
    if not result.ok:
        typer.secho(f"Validation failed (see {report_path})", fg="red", err=True)
        for e in result.errors:
            typer.secho(f"- {e}", fg="red", err=True)
        raise typer.Exit(1)
    print(f"[green]✓[/green] Validation successful for {result.filename}")


@app.command("validate")
def validate_file(json_path: Path):
    """Validate a single submission file (format rules and file name)."""
    try:
        data = json.loads(json_path.read_text(encoding="utf-8"))
    except OSError as e:
        typer.secho(f"Unable to read {json_path}: {e}", fg="red")
        raise typer.Exit(1)
    except ValueError as e:
        typer.secho(f"Invalid JSON in {json_path.name}: {e}", fg="red")
        raise typer.Exit(1)

    if not isinstance(data, dict):
        errors = [ROOT_NOT_OBJECT]
    else:
        rec = normalize_contributor(data)
        errors = validate_contributor(rec)
        mismatch = check_submission_filename(json_path.name, rec)
        if mismatch:
            errors.append(mismatch)
    if errors:
        for e in errors:
            typer.secho(f"- {e}", fg="red")
        raise typer.Exit(1)
    print(f"[green]OK[/green] {json_path.name}")


@app.command()
def check():
    """Verify that the dataset and the README table agree."""
    cfg = get_settings()
    report = check_wall(cfg.contributors_path, cfg.readme_path, _markers())

    for problem in report.problems:
        typer.secho(problem, fg="red")
    if report.problems:
        raise typer.Exit(1)

    print(f"[green]✓[/green] Found {report.dataset_rows} contributors in data")
    print(f"[green]✓[/green] Wall of Fame shows {report.table_rows} contributors")
    if not report.in_sync:
        typer.secho(
            f"Mismatch: data has {report.dataset_rows} but README shows {report.table_rows}",
            fg="yellow",
        )
        raise typer.Exit(1)
    print("[green]✓[/green] Data and README are in sync")


@app.command("export-schema")
def export_schema(
    out: Path = typer.Option(None, help="Output path; defaults to WOF_SCHEMA_FILE"),
):
    """Write the JSON Schema of a submission file."""
    target = out or get_settings().schema_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(export_json_schema(), indent=2), encoding="utf-8")
    print(f"[green]✓[/green] wrote {target}")


if __name__ == "__main__":
    app()
