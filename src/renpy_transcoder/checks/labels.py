"""Check label integrity: duplicates, unresolved jump/call targets, unused labels."""

from __future__ import annotations

from ..models import Call, Issue, Jump, Label, Script, Severity
from ._walk import walk_elements

ENTRY_LABEL = "start"


def check(script: Script) -> list[Issue]:
    issues: list[Issue] = []

    # Pass 1: label definitions (first occurrence wins) and jump/call targets.
    defined: dict[str, tuple[Label, int]] = {}
    targets: set[str] = set()
    for line, element in walk_elements(script):
        if isinstance(element, Label) and element.label:
            if element.label in defined:
                issues.append(
                    Issue(
                        severity=Severity.ERROR,
                        check_name="labels",
                        message=f"duplicate label definition: {element.label}",
                        element_id=element.id,
                        line=line,
                    )
                )
            else:
                defined[element.label] = (element, line)
        elif isinstance(element, (Jump, Call)) and element.label:
            targets.add(element.label)

    # Pass 2: unresolved references.
    for line, element in walk_elements(script):
        if isinstance(element, (Jump, Call)) and element.label not in defined:
            issues.append(
                Issue(
                    severity=Severity.ERROR,
                    check_name="labels",
                    message=f"{element.type} to undefined label: {element.label}",
                    element_id=element.id,
                    line=line,
                )
            )

    for name, (label, line) in defined.items():
        if name != ENTRY_LABEL and name not in targets:
            issues.append(
                Issue(
                    severity=Severity.WARNING,
                    check_name="labels",
                    message=f"unused label: {name}",
                    element_id=label.id,
                    line=line,
                )
            )

    if ENTRY_LABEL not in defined:
        issues.append(
            Issue(
                severity=Severity.WARNING,
                check_name="labels",
                message=f"missing {ENTRY_LABEL} label (entry point)",
            )
        )

    return issues
