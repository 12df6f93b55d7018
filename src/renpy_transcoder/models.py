"""Data models for the structured Ren'Py script document."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

POSITIONS = ("left", "center", "right", "truecenter")
CHANNELS = ("music", "sound", "voice")
DEFAULT_POSITION = "center"


class Severity(IntEnum):
    """Issue severity levels, ordered from most to least severe."""

    ERROR = 0
    WARNING = 1


@dataclass
class Character:
    id: str
    name: str
    color: str | None = None


@dataclass
class ScriptElement:
    """Base for every element variant; ``type`` is the JSON discriminant."""

    type: ClassVar[str] = ""

    id: str


@dataclass
class Dialogue(ScriptElement):
    type: ClassVar[str] = "dialogue"

    content: str = ""
    character: str | None = None  # None = narrator


@dataclass
class Scene(ScriptElement):
    type: ClassVar[str] = "scene"

    image: str = ""
    transition: str | None = None


@dataclass
class Show(ScriptElement):
    type: ClassVar[str] = "show"

    image: str = ""
    position: str = DEFAULT_POSITION
    transition: str | None = None


@dataclass
class Hide(ScriptElement):
    type: ClassVar[str] = "hide"

    image: str = ""
    transition: str | None = None


@dataclass
class Choice:
    id: str
    text: str
    condition: str | None = None
    actions: list[ScriptElement] = field(default_factory=list)


@dataclass
class Menu(ScriptElement):
    type: ClassVar[str] = "menu"

    choices: list[Choice] = field(default_factory=list)


@dataclass
class Label(ScriptElement):
    type: ClassVar[str] = "label"

    label: str = ""


@dataclass
class Jump(ScriptElement):
    type: ClassVar[str] = "jump"

    label: str = ""


@dataclass
class Call(ScriptElement):
    type: ClassVar[str] = "call"

    label: str = ""


@dataclass
class Play(ScriptElement):
    type: ClassVar[str] = "play"

    channel: str = "music"
    audio: str = ""


@dataclass
class Stop(ScriptElement):
    type: ClassVar[str] = "stop"

    channel: str = "music"


@dataclass
class Pause(ScriptElement):
    type: ClassVar[str] = "pause"

    duration: float | None = None


@dataclass
class SetVariable(ScriptElement):
    type: ClassVar[str] = "variable"

    variable: str = ""
    value: str = ""  # verbatim expression text, never evaluated


@dataclass
class Condition(ScriptElement):
    type: ClassVar[str] = "condition"

    condition: str = ""


@dataclass
class Code(ScriptElement):
    type: ClassVar[str] = "code"

    code: str = ""


@dataclass
class Return(ScriptElement):
    type: ClassVar[str] = "return"


ELEMENT_TYPES: dict[str, type[ScriptElement]] = {
    cls.type: cls
    for cls in (
        Dialogue,
        Scene,
        Show,
        Hide,
        Menu,
        Label,
        Jump,
        Call,
        Play,
        Stop,
        Pause,
        SetVariable,
        Condition,
        Code,
        Return,
    )
}


@dataclass
class Assets:
    """Asset catalog. Entries are opaque records owned by the editor UI."""

    images: list[dict] = field(default_factory=list)
    audio: list[dict] = field(default_factory=list)
    backgrounds: list[dict] = field(default_factory=list)


@dataclass
class Script:
    """A complete script document: characters, ordered elements and assets."""

    characters: list[Character] = field(default_factory=list)
    elements: list[ScriptElement] = field(default_factory=list)
    assets: Assets = field(default_factory=Assets)


@dataclass
class Issue:
    severity: Severity
    check_name: str
    message: str
    element_id: str | None = None
    line: int | None = None  # 1-based position in Script.elements
