"""Shared helper: walk script elements including nested choice actions."""

from __future__ import annotations

from collections.abc import Iterator

from ..models import Menu, Script, ScriptElement


def walk_elements(script: Script) -> Iterator[tuple[int, ScriptElement]]:
    """Yield ``(line, element)`` for every element in document order.

    ``line`` is the 1-based position of the top-level element; actions
    nested inside menu choices report the position of their menu.
    """
    for index, element in enumerate(script.elements):
        line = index + 1
        yield line, element
        if isinstance(element, Menu):
            yield from _walk_menu(element, line)


def _walk_menu(menu: Menu, line: int) -> Iterator[tuple[int, ScriptElement]]:
    for choice in menu.choices:
        for action in choice.actions:
            yield line, action
            if isinstance(action, Menu):
                yield from _walk_menu(action, line)
