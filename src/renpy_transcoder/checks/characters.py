"""Check dialogue speakers against the character list."""

from __future__ import annotations

from ..models import Dialogue, Issue, Script, Severity
from ._walk import walk_elements

NARRATOR = "narrator"


def check(script: Script) -> list[Issue]:
    issues: list[Issue] = []
    defined_chars = {char.id for char in script.characters}

    for line, element in walk_elements(script):
        if not isinstance(element, Dialogue) or not element.character:
            continue
        if element.character != NARRATOR and element.character not in defined_chars:
            issues.append(
                Issue(
                    severity=Severity.WARNING,
                    check_name="characters",
                    message=f"undefined character: {element.character}",
                    element_id=element.id,
                    line=line,
                )
            )

    return issues
