"""Regex-based parser turning Ren'Py script text into a Script document.

The parser is a best-effort structural extractor: every line is matched
against an ordered table of statement patterns and lines that match none
of them are dropped (and logged at DEBUG level).  Menus are handled by a
small state machine driven by indentation.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable

from .ids import IdFactory, SequentialIds
from .models import (
    DEFAULT_POSITION,
    Call,
    Character,
    Choice,
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

logger = logging.getLogger("renpy_transcoder.parser")

# --- Regex patterns (matched against the stripped line) ---

RE_CHARACTER = re.compile(r"""^define\s+(\w+)\s*=\s*Character\s*\(\s*(["'])((?:(?!\2)[^\\]|\\.)*)\2(.*)\)""")
RE_COLOR_OPTION = re.compile(r"""\bcolor\s*=\s*(["'])(.+?)\1""")
RE_LABEL = re.compile(r"^label\s+(\w+)\s*:")
RE_SCENE = re.compile(r"^scene\s+(.+)")
RE_SHOW = re.compile(r"^show\s+(?!screen\b)(.+)")
RE_HIDE = re.compile(r"^hide\s+(?!screen\b)(.+)")
RE_PLAY = re.compile(r"""^play\s+(\w+)\s+(["'])(.+?)\2""")
RE_STOP = re.compile(r"^stop\s+(\w+)")
RE_PAUSE = re.compile(r"^pause(?:\s+(\d*\.?\d+))?\s*$")
RE_MENU = re.compile(r"^menu\s*:\s*$")
RE_MENU_CHOICE = re.compile(r'^"((?:[^"\\]|\\.)*)"(?:\s+if\s+(.+?))?\s*:\s*$')
RE_ASSIGN = re.compile(r"^\$\s*(\w+)\s*=(?!=)\s*(.*)")
RE_CODE = re.compile(r"^\$\s*(.+)")
RE_JUMP = re.compile(r"^jump\s+(?!expression\b)(\w+)")
RE_CALL = re.compile(r"^call\s+(?!expression\b|screen\b)(\w+)")
RE_RETURN = re.compile(r"^return\s*$")
RE_DIALOGUE = re.compile(r'^(\w+)\s+"((?:[^"\\]|\\.)*)"')
RE_NARRATION = re.compile(r'^"((?:[^"\\]|\\.)*)"')
RE_ESCAPE = re.compile(r"""\\([\\"'])""")

# Words that terminate the image name in scene/show/hide statements.
CLAUSE_KEYWORDS = frozenset({"at", "with", "behind", "onlayer", "zorder", "as"})

# Statement keywords that are never treated as a dialogue speaker.
RENPY_KEYWORDS = frozenset(
    {
        "jump",
        "call",
        "return",
        "scene",
        "show",
        "hide",
        "with",
        "play",
        "stop",
        "queue",
        "voice",
        "define",
        "default",
        "init",
        "python",
        "label",
        "menu",
        "if",
        "elif",
        "else",
        "while",
        "pass",
        "image",
        "transform",
        "screen",
        "style",
        "translate",
        "pause",
        "window",
        "extend",
    }
)


class ParseState(enum.Enum):
    IDLE = "idle"
    IN_MENU = "in_menu"
    IN_CHOICE = "in_choice"


def _get_indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _unescape(text: str) -> str:
    # Only quote and backslash escapes; \n and friends stay as written.
    return RE_ESCAPE.sub(r"\1", text)


def _split_image_clauses(rest: str) -> tuple[str, dict[str, str]]:
    """Split ``eileen happy at left with dissolve`` into image and clauses."""
    tokens = rest.rstrip(":").split()
    image_tokens: list[str] = []
    clauses: dict[str, str] = {}
    i = 0
    while i < len(tokens) and tokens[i] not in CLAUSE_KEYWORDS:
        image_tokens.append(tokens[i])
        i += 1
    while i < len(tokens):
        keyword = tokens[i]
        if keyword in CLAUSE_KEYWORDS and i + 1 < len(tokens):
            clauses.setdefault(keyword, tokens[i + 1])
            i += 2
        else:
            i += 1
    return " ".join(image_tokens), clauses


class _ScriptParser:
    """Line-by-line parse state for one source text."""

    def __init__(self, id_factory: IdFactory) -> None:
        self._new_id = id_factory
        self.characters: list[Character] = []
        self.elements: list[ScriptElement] = []
        self.skipped = 0

        self.current_label: str | None = None
        self.state = ParseState.IDLE
        self.menu_indent = 0
        self.choices: list[Choice] = []
        self.current_choice: Choice | None = None
        self.choice_indent = 0
        self._indent = 0

        # Ordered (pattern, handler) table; first match wins.
        self._statements: list[tuple[re.Pattern[str], Callable[[re.Match[str]], bool | None]]] = [
            (RE_CHARACTER, self._on_character),
            (RE_LABEL, self._on_label),
            (RE_SCENE, self._on_scene),
            (RE_SHOW, self._on_show),
            (RE_HIDE, self._on_hide),
            (RE_PLAY, self._on_play),
            (RE_STOP, self._on_stop),
            (RE_PAUSE, self._on_pause),
            (RE_MENU, self._on_menu),
            (RE_ASSIGN, self._on_assign),
            (RE_CODE, self._on_code),
            (RE_JUMP, self._on_jump),
            (RE_CALL, self._on_call),
            (RE_RETURN, self._on_return),
            (RE_DIALOGUE, self._on_dialogue),
            (RE_NARRATION, self._on_narration),
        ]

    # --- Driving ---

    def feed(self, lineno: int, raw_line: str) -> None:
        line = raw_line.rstrip()
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            return

        indent = _get_indent(line)

        if self.state is not ParseState.IDLE:
            if indent > self.menu_indent:
                self._feed_menu_line(lineno, stripped, indent)
                return
            self._close_menu()

        self._indent = indent
        for pattern, handler in self._statements:
            m = pattern.match(stripped)
            if m and handler(m) is not False:
                return

        self._skip(lineno, stripped)

    def finish(self) -> Script:
        if self.state is not ParseState.IDLE:
            self._close_menu()
        if self.skipped:
            logger.debug("Dropped %d unrecognized line(s)", self.skipped)
        logger.debug(
            "Parsed %d character(s) and %d element(s)",
            len(self.characters),
            len(self.elements),
        )
        return Script(characters=self.characters, elements=self.elements)

    def _skip(self, lineno: int, stripped: str) -> None:
        self.skipped += 1
        logger.debug(
            "Line %d (label %s): unrecognized, skipped: %s",
            lineno,
            self.current_label or "-",
            stripped,
        )

    def _emit(self, element: ScriptElement) -> None:
        self.elements.append(element)

    # --- Menu state machine ---

    def _feed_menu_line(self, lineno: int, stripped: str, indent: int) -> None:
        m = RE_MENU_CHOICE.match(stripped)
        starts_choice = self.state is ParseState.IN_MENU or indent <= self.choice_indent
        if m and starts_choice:
            self.current_choice = Choice(
                id=self._new_id("choice"),
                text=_unescape(m.group(1)),
                condition=m.group(2),
            )
            self.choices.append(self.current_choice)
            self.choice_indent = indent
            self.state = ParseState.IN_CHOICE
            return

        if self.state is ParseState.IN_CHOICE and indent > self.choice_indent:
            action = self._choice_action(stripped)
            if action is not None:
                self.current_choice.actions.append(action)
                return

        self._skip(lineno, stripped)

    def _choice_action(self, stripped: str) -> Dialogue | None:
        # Only dialogue is modeled inside choices; $/jump/call and nested
        # blocks are left out.
        if stripped.endswith(":"):
            return None
        m = RE_DIALOGUE.match(stripped)
        if m and m.group(1) not in RENPY_KEYWORDS:
            return Dialogue(id=self._new_id("element"), character=m.group(1), content=_unescape(m.group(2)))
        m = RE_NARRATION.match(stripped)
        if m:
            return Dialogue(id=self._new_id("element"), content=_unescape(m.group(1)))
        return None

    def _close_menu(self) -> None:
        self._emit(Menu(id=self._new_id("element"), choices=self.choices))
        self.state = ParseState.IDLE
        self.choices = []
        self.current_choice = None
        self.choice_indent = 0

    # --- Statement handlers ---

    def _on_character(self, m: re.Match[str]) -> None:
        color_m = RE_COLOR_OPTION.search(m.group(4))
        self.characters.append(
            Character(
                id=m.group(1),
                name=_unescape(m.group(3)),
                color=color_m.group(2) if color_m else None,
            )
        )

    def _on_label(self, m: re.Match[str]) -> None:
        self.current_label = m.group(1)
        self._emit(Label(id=self._new_id("element"), label=m.group(1)))

    def _on_scene(self, m: re.Match[str]) -> bool | None:
        image, clauses = _split_image_clauses(m.group(1))
        if not image:
            return False
        self._emit(Scene(id=self._new_id("element"), image=image, transition=clauses.get("with")))
        return None

    def _on_show(self, m: re.Match[str]) -> bool | None:
        image, clauses = _split_image_clauses(m.group(1))
        if not image:
            return False
        self._emit(
            Show(
                id=self._new_id("element"),
                image=image,
                position=clauses.get("at", DEFAULT_POSITION),
                transition=clauses.get("with"),
            )
        )
        return None

    def _on_hide(self, m: re.Match[str]) -> bool | None:
        image, clauses = _split_image_clauses(m.group(1))
        if not image:
            return False
        self._emit(Hide(id=self._new_id("element"), image=image, transition=clauses.get("with")))
        return None

    def _on_play(self, m: re.Match[str]) -> None:
        self._emit(Play(id=self._new_id("element"), channel=m.group(1), audio=m.group(3)))

    def _on_stop(self, m: re.Match[str]) -> None:
        self._emit(Stop(id=self._new_id("element"), channel=m.group(1)))

    def _on_pause(self, m: re.Match[str]) -> None:
        duration = float(m.group(1)) if m.group(1) else None
        self._emit(Pause(id=self._new_id("element"), duration=duration))

    def _on_menu(self, m: re.Match[str]) -> None:
        self.state = ParseState.IN_MENU
        self.menu_indent = self._indent
        self.choices = []
        self.current_choice = None

    def _on_assign(self, m: re.Match[str]) -> None:
        self._emit(
            SetVariable(
                id=self._new_id("element"),
                variable=m.group(1),
                value=m.group(2).strip(),
            )
        )

    def _on_code(self, m: re.Match[str]) -> None:
        self._emit(Code(id=self._new_id("element"), code=m.group(1).strip()))

    def _on_jump(self, m: re.Match[str]) -> None:
        self._emit(Jump(id=self._new_id("element"), label=m.group(1)))

    def _on_call(self, m: re.Match[str]) -> None:
        self._emit(Call(id=self._new_id("element"), label=m.group(1)))

    def _on_return(self, m: re.Match[str]) -> None:
        self._emit(Return(id=self._new_id("element")))

    def _on_dialogue(self, m: re.Match[str]) -> bool | None:
        if m.group(1) in RENPY_KEYWORDS:
            return False
        self._emit(
            Dialogue(
                id=self._new_id("element"),
                character=m.group(1),
                content=_unescape(m.group(2)),
            )
        )
        return None

    def _on_narration(self, m: re.Match[str]) -> None:
        self._emit(Dialogue(id=self._new_id("element"), content=_unescape(m.group(1))))


def parse(source: str, id_factory: IdFactory | None = None) -> Script:
    """Parse Ren'Py script text into a new :class:`Script`.

    Parameters
    ----------
    source:
        The script text.  Lines that match no known statement are dropped.
    id_factory:
        Callable producing element/choice ids.  Defaults to a fresh
        :class:`SequentialIds`, so ids are ``element-0``, ``element-1``...
        in emission order.

    Raises
    ------
    TypeError
        If *source* is not a string.
    """
    if not isinstance(source, str):
        raise TypeError(f"parse() expects str, got {type(source).__name__}")

    parser = _ScriptParser(id_factory or SequentialIds())
    for lineno_0, raw_line in enumerate(source.splitlines()):
        parser.feed(lineno_0 + 1, raw_line)
    return parser.finish()
