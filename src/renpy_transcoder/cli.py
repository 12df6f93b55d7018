"""Command-line interface for the Ren'Py transcoder."""

from __future__ import annotations

import json
import sys
from collections import defaultdict
from pathlib import Path

import click

from .checks import ALL_CHECKS
from .codec import DocumentError, issue_to_dict
from .log import setup_logging
from .models import Issue, Script, Severity
from .project import load_script, render_script
from .settings import Settings
from .validator import issue_summary, validate

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
}

_LOAD_ERRORS = (OSError, DocumentError)


def _load_or_exit(path: str) -> Script:
    try:
        return load_script(path)
    except _LOAD_ERRORS as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)


def _write_output(text: str, output: str | None) -> None:
    if output:
        try:
            Path(output).write_text(text, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Error: cannot write {output}: {exc}", err=True)
            sys.exit(2)
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(text, nl=False)


def _remember(path: str) -> None:
    settings = Settings.load()
    settings.last_script_path = str(Path(path).resolve())
    settings.save()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging (lists skipped script lines).")
def main(verbose: bool) -> None:
    """Convert between Ren'Py script text and JSON documents, and validate them."""
    setup_logging(verbose=verbose)


@main.command("parse")
@click.argument("script_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False), help="Write the JSON document here.")
def parse_command(script_path: str, output: str | None) -> None:
    """Parse a .rpy SCRIPT_PATH into a JSON document."""
    script = _load_or_exit(script_path)
    _remember(script_path)
    _write_output(render_script(script, as_document=True), output)


@main.command("generate")
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False), help="Write the .rpy script here.")
def generate_command(document_path: str, output: str | None) -> None:
    """Generate Ren'Py script text from a JSON DOCUMENT_PATH."""
    script = _load_or_exit(document_path)
    _write_output(render_script(script, as_document=False), output)


@main.command("validate")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--checks",
    "check_names",
    default=None,
    help=f"Comma-separated check names (default: all enabled). Available: {', '.join(ALL_CHECKS)}",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format (default: from settings, else text).",
)
@click.option("--strict", is_flag=True, help="Exit with status 1 on warnings too.")
def validate_command(path: str | None, check_names: str | None, fmt: str | None, strict: bool) -> None:
    """Validate a .rpy script or JSON document at PATH.

    PATH defaults to the last script parsed or validated.
    """
    settings = Settings.load()
    if path is None:
        if not settings.last_script_path:
            click.echo("Error: no PATH given and no previous script to validate.", err=True)
            sys.exit(2)
        path = settings.last_script_path
    if not Path(path).is_file():
        click.echo(f"Error: file not found: {path}", err=True)
        sys.exit(2)

    if check_names:
        checks = [c.strip() for c in check_names.split(",")]
    else:
        checks = settings.enabled_checks(list(ALL_CHECKS))

    script = _load_or_exit(path)
    try:
        issues = validate(script, checks=checks)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)
    _remember(path)

    if (fmt or settings.output_format) == "json":
        _output_json(issues)
    else:
        _output_text(issues)

    has_errors = any(i.severity == Severity.ERROR for i in issues)
    if has_errors or (issues and (strict or settings.fail_on_warnings)):
        sys.exit(1)
    sys.exit(0)


def _output_text(issues: list[Issue]) -> None:
    if not issues:
        click.echo("No issues found.")
        return

    by_severity: dict[Severity, list[Issue]] = defaultdict(list)
    for issue in issues:
        by_severity[issue.severity].append(issue)

    # --- Summary header ---
    click.echo("=== Script Validation Results ===")
    parts = []
    for sev in Severity:
        count = len(by_severity.get(sev, []))
        if count:
            parts.append(click.style(f"{count} {sev.name.lower()}", fg=SEVERITY_COLORS[sev]))
    click.echo(", ".join(parts))

    # --- Severity sections ---
    for sev in Severity:
        group = by_severity.get(sev)
        if not group:
            continue
        title = f"-- {sev.name} ({len(group)}) "
        click.echo()
        click.echo(click.style(title, fg=SEVERITY_COLORS[sev], bold=True) + "-" * max(0, 60 - len(title)))
        for issue in group:
            check_tag = click.style(f"[{issue.check_name}]", dim=True)
            if issue.line is not None:
                loc = click.style(f"#{issue.line} {issue.element_id or ''}".rstrip(), dim=True)
                click.echo(f"  {loc}  {issue.message}  {check_tag}")
            else:
                click.echo(f"  {issue.message}  {check_tag}")

    click.echo(f"\n{issue_summary(issues)}.", err=True)


def _output_json(issues: list[Issue]) -> None:
    click.echo(json.dumps([issue_to_dict(i) for i in issues], indent=2, ensure_ascii=False))
