"""Validation engine: runs the structural checks over a Script."""

from __future__ import annotations

import logging

from .checks import ALL_CHECKS
from .models import Issue, Script, Severity

logger = logging.getLogger("renpy_transcoder.validator")


def validate(script: Script, checks: list[str] | None = None) -> list[Issue]:
    """Check *script* for structural problems and return the issues found.

    The script is never modified.  Issues come out in a fixed order: by
    check (in ``ALL_CHECKS`` order), then by element position, so repeated
    calls on the same script return identical lists.  Issues are therefore
    grouped by check rather than interleaved in a single pass over the
    elements; an undefined character at element 2 is reported after an
    unused label at element 9, and "missing start label" closes the
    Labels group instead of the whole list.

    Parameters
    ----------
    script:
        The document to validate.
    checks:
        List of check names to run.  *None* means all checks.

    Raises
    ------
    ValueError
        If an unknown check name is provided.
    """
    if checks is None:
        checks = list(ALL_CHECKS.keys())

    unknown = set(checks) - set(ALL_CHECKS.keys())
    if unknown:
        raise ValueError(f"Unknown check(s): {', '.join(sorted(unknown))}")

    issues: list[Issue] = []
    for check_name in ALL_CHECKS:
        if check_name in checks:
            issues.extend(ALL_CHECKS[check_name](script))

    logger.debug("Validation complete: %d issue(s) from %d check(s)", len(issues), len(checks))
    return issues


def count_issues(issues: list[Issue]) -> tuple[int, int]:
    """Return ``(errors, warnings)``."""
    errors = sum(1 for i in issues if i.severity == Severity.ERROR)
    return errors, len(issues) - errors


def issue_summary(issues: list[Issue]) -> str:
    """One-line human summary, e.g. ``"2 errors, 1 warning"``."""
    errors, warnings = count_issues(issues)
    if not errors and not warnings:
        return "Script is valid"
    parts = []
    if errors:
        parts.append(f"{errors} error{'s' if errors != 1 else ''}")
    if warnings:
        parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
    return ", ".join(parts)
