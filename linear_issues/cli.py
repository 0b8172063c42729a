"""CLI entry point for linear-issues."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import click

from linear_issues.inputs import parse_inputs
from linear_issues.pipeline import run_scan
from linear_issues.shell import report_failure
from linear_issues.toml import load_project_defaults

TEMPLATES_DIR = Path(__file__).parent / "templates"
WORKFLOW_FILE = "linear-issues.yml"


def _input_option(
    name: str, help_text: str, extra_envvars: tuple[str, ...] = ()
) -> Callable:
    """Option for a step input, falling back to its INPUT_* variable.

    GitHub Actions exposes an input named ``commits-count`` to the step as
    ``INPUT_COMMITS-COUNT``.
    """
    return click.option(
        f"--{name}",
        name.replace("-", "_"),
        envvar=[f"INPUT_{name.upper()}", *extra_envvars],
        default=None,
        help=help_text,
    )


@click.group()
@click.version_option(package_name="linear-issues")
def cli() -> None:
    """Collect Linear issue keys referenced by a set of git commits."""


@cli.command()
@_input_option(
    "linear-api-key", "Linear personal API key.", extra_envvars=("LINEAR_API_KEY",)
)
@_input_option("team-keys", "Comma-separated team keys (default: all teams).")
@_input_option("output-file", "Report path. [default: linear-issues.json]")
@_input_option("workspace-slug", "Linear workspace URL key for issue links.")
@_input_option("releases-count", "Commits since N releases ago (v* tags).")
@_input_option("time-range-start", "Start of the time range (ISO-8601).")
@_input_option("time-range-end", "End of the time range (ISO-8601).")
@_input_option("commits-count", "The last N commits.")
@_input_option("commits-since-sha", "Commits after this SHA, up to HEAD.")
@_input_option("commits-shas", "Comma-separated list of commit SHAs.")
@_input_option("commits-start-sha", "Start of a commit range (exclusive).")
@_input_option("commits-end-sha", "End of a commit range. [default: HEAD]")
@_input_option("include-start-commit", "'true' to include the range start commit.")
@_input_option("tags-start", "Start tag of a tag range (exclusive).")
@_input_option("tags-end", "End tag of a tag range. [default: HEAD]")
def scan(**options: str | None) -> None:
    """Scan commits for Linear issues and write the report.

    Exactly one changeset must be chosen: --releases-count,
    --time-range-start/--time-range-end, --commits-count,
    --commits-since-sha, --commits-shas, --commits-start-sha or --tags-start.
    """
    raw = {name.replace("_", "-"): value for name, value in options.items()}
    try:
        inputs = parse_inputs(raw, load_project_defaults())
        run_scan(inputs)
    except Exception as exc:
        report_failure(str(exc) or "An unknown error occurred")


@cli.command()
@click.option(
    "--workflow-dir",
    type=click.Path(),
    default=".github/workflows",
    show_default=True,
    help="Directory to write the workflow file.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing workflow file.")
def init(workflow_dir: str, force: bool) -> None:
    """Scaffold a GitHub Actions workflow that runs the scan."""
    root = Path.cwd()

    if not (root / ".git").exists():
        raise click.ClickException("Not a git repository. Run from the repo root.")

    dest_dir = root / workflow_dir
    dest = dest_dir / WORKFLOW_FILE
    if dest.exists() and not force:
        raise click.ClickException(
            f"{dest.relative_to(root)} already exists. Use --force to overwrite."
        )

    dest_dir.mkdir(parents=True, exist_ok=True)
    dest.write_text((TEMPLATES_DIR / WORKFLOW_FILE).read_text())

    click.echo(f"✓ Wrote workflow to {dest.relative_to(root)}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Add a LINEAR_API_KEY secret to the repository")
    click.echo("  2. Adjust the changeset input (defaults to commits since the last v* tag)")
    click.echo("  3. Commit and push the workflow file")
