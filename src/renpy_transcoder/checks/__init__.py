"""Validator checks for Script documents.

Each module exports a check(script) -> list[Issue] function.
"""

from . import (
    characters,
    dialogue,
    labels,
    menus,
    variables,
)

ALL_CHECKS = {
    "Labels": labels.check,
    "Characters": characters.check,
    "Dialogue": dialogue.check,
    "Menus": menus.check,
    "Variables": variables.check,
}
