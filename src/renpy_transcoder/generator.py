"""Render a Script document back into Ren'Py script text."""

from __future__ import annotations

import re

from .models import (
    DEFAULT_POSITION,
    Call,
    Character,
    Code,
    Dialogue,
    Hide,
    Jump,
    Label,
    Menu,
    Pause,
    Play,
    Return,
    Scene,
    Script,
    ScriptElement,
    SetVariable,
    Show,
    Stop,
)

INDENT = "    "

# A backslash the parser would read as an escape: before a quote, another
# backslash, or the closing quote.
RE_AMBIGUOUS_BACKSLASH = re.compile(r"""\\(?=[\\"']|$)""")


def _escape(text: str) -> str:
    text = RE_AMBIGUOUS_BACKSLASH.sub(r"\\\\", text)
    return text.replace('"', '\\"')


def _format_character(char: Character) -> str:
    line = f'define {char.id} = Character("{_escape(char.name)}"'
    if char.color:
        line += f', color="{char.color}"'
    return line + ")"


def _format_dialogue(element: Dialogue) -> str:
    content = _escape(element.content or "")
    if element.character:
        return f'{element.character} "{content}"'
    return f'"{content}"'


def _format_duration(duration: float) -> str:
    return f"{duration:g}"


def _format_statement(element: ScriptElement) -> str | None:
    """Single-line form of a non-block element, or None if it has none."""
    if isinstance(element, Dialogue):
        return _format_dialogue(element)
    if isinstance(element, Scene):
        line = f"scene {element.image}"
        if element.transition:
            line += f" with {element.transition}"
        return line
    if isinstance(element, Show):
        line = f"show {element.image}"
        if element.position and element.position != DEFAULT_POSITION:
            line += f" at {element.position}"
        if element.transition:
            line += f" with {element.transition}"
        return line
    if isinstance(element, Hide):
        line = f"hide {element.image}"
        if element.transition:
            line += f" with {element.transition}"
        return line
    if isinstance(element, Play):
        return f'play {element.channel} "{element.audio}"'
    if isinstance(element, Stop):
        return f"stop {element.channel}"
    if isinstance(element, Pause):
        if element.duration is None:
            return "pause"
        return f"pause {_format_duration(element.duration)}"
    if isinstance(element, SetVariable):
        return f"$ {element.variable} = {element.value}".rstrip()
    if isinstance(element, Code):
        return f"$ {element.code}"
    if isinstance(element, Jump):
        return f"jump {element.label}"
    if isinstance(element, Call):
        return f"call {element.label}"
    # Condition has no single-line form; it is omitted.
    return None


def _menu_lines(menu: Menu, indent: int) -> list[str]:
    prefix = INDENT * indent
    lines = [f"{prefix}menu:"]
    for choice in menu.choices:
        header = f'"{_escape(choice.text)}"'
        if choice.condition:
            header += f" if {choice.condition}"
        lines.append(f"{prefix}{INDENT}{header}:")
        for action in choice.actions:
            # Only dialogue survives inside a choice.
            if isinstance(action, Dialogue):
                lines.append(f"{prefix}{INDENT * 2}{_format_dialogue(action)}")
    return lines


def generate(script: Script) -> str:
    """Render *script* as Ren'Py source text, one statement per line.

    The input is not modified.  Menus keep only their dialogue actions and
    ``condition`` elements are left out, so re-parsing the output is not
    guaranteed to reproduce *script* exactly.
    """
    lines: list[str] = [_format_character(char) for char in script.characters]
    if script.characters:
        lines.append("")

    indent = 0
    for element in script.elements:
        prefix = INDENT * indent
        if isinstance(element, Label):
            # Labels do not nest: always written at column 0.
            lines.append(f"label {element.label}:")
            indent = 1
        elif isinstance(element, Menu):
            lines.extend(_menu_lines(element, indent))
        elif isinstance(element, Return):
            lines.append(f"{prefix}return")
            indent = 0
        else:
            statement = _format_statement(element)
            if statement is not None:
                lines.append(f"{prefix}{statement}")

    return "\n".join(lines)
