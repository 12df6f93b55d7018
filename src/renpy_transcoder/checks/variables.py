"""Check that assigned variable names are valid identifiers."""

from __future__ import annotations

import re

from ..models import Issue, Script, SetVariable, Severity
from ._walk import walk_elements

RE_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def check(script: Script) -> list[Issue]:
    issues: list[Issue] = []

    for line, element in walk_elements(script):
        if isinstance(element, SetVariable) and not RE_IDENTIFIER.fullmatch(element.variable):
            issues.append(
                Issue(
                    severity=Severity.ERROR,
                    check_name="variables",
                    message=f"invalid variable name: {element.variable}",
                    element_id=element.id,
                    line=line,
                )
            )

    return issues
