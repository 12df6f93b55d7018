"""Check for menus without a real player decision."""

from __future__ import annotations

from ..models import Issue, Menu, Script, Severity
from ._walk import walk_elements


def check(script: Script) -> list[Issue]:
    issues: list[Issue] = []

    for line, element in walk_elements(script):
        if not isinstance(element, Menu):
            continue
        if not element.choices:
            issues.append(
                Issue(
                    severity=Severity.ERROR,
                    check_name="menus",
                    message="menu has no choices",
                    element_id=element.id,
                    line=line,
                )
            )
        elif len(element.choices) == 1:
            issues.append(
                Issue(
                    severity=Severity.WARNING,
                    check_name="menus",
                    message="menu has only one choice",
                    element_id=element.id,
                    line=line,
                )
            )

    return issues
