"""CLI entry point for lint-report."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from lint_report import __version__
from lint_report.models import AnalysisResult


@click.command()
@click.argument("analysis_json", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "-p", "--project",
    default=None,
    help="Project name shown in the report. Defaults to the JSON file name.",
)
@click.option(
    "-r", "--recipient",
    default="",
    help="Recipient shown as 'Generated For'.",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    default="report.pdf",
    show_default=True,
    help="Output PDF path.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    analysis_json: str,
    project: str | None,
    recipient: str,
    output: str,
    verbose: bool,
) -> None:
    """Render a technical-debt analysis (JSON) as a PDF report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    source = Path(analysis_json)
    analysis = _load_analysis(source)

    from lint_report.render.pdf import ReportRenderError, render_pdf
    dest = Path(output)
    try:
        document = render_pdf(project or source.stem, analysis, recipient, dest)
    except ReportRenderError as exc:
        raise click.ClickException(str(exc)) from exc
    except OSError as exc:
        raise click.ClickException(f"Could not write {dest}: {exc}") from exc
    click.echo(f"PDF report written to {dest} ({document.page_count} pages)")


def _load_analysis(path: Path) -> AnalysisResult:
    """Read an analysis from JSON, bare or wrapped as {"analysis": {...}}."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"{path.name} is not valid JSON: {exc}") from exc

    if isinstance(data, dict) and isinstance(data.get("analysis"), dict):
        data = data["analysis"]

    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise click.ClickException(f"{path.name} is not a valid analysis:\n{exc}") from exc


if __name__ == "__main__":
    main()
