"""Check for dialogue lines with no text."""

from __future__ import annotations

from ..models import Dialogue, Issue, Script, Severity
from ._walk import walk_elements


def check(script: Script) -> list[Issue]:
    return [
        Issue(
            severity=Severity.WARNING,
            check_name="dialogue",
            message="empty dialogue",
            element_id=element.id,
            line=line,
        )
        for line, element in walk_elements(script)
        if isinstance(element, Dialogue) and not element.content
    ]
