"""JSON interchange format for Script documents.

The document shape is ``{"characters": [...], "elements": [...], "assets":
{...}}``.  Each element object carries ``id``, ``type`` and only the
variant fields that are set; ids are preserved as-is in both directions.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from .models import (
    ELEMENT_TYPES,
    Assets,
    Character,
    Choice,
    Issue,
    Menu,
    Pause,
    Script,
    ScriptElement,
    SetVariable,
)

logger = logging.getLogger("renpy_transcoder.codec")

_ASSET_KINDS = ("images", "audio", "backgrounds")


class DocumentError(ValueError):
    """Raised when a JSON document does not describe a valid Script."""


# --- Script -> dict ---


def _character_to_dict(char: Character) -> dict[str, Any]:
    data: dict[str, Any] = {"id": char.id, "name": char.name}
    if char.color is not None:
        data["color"] = char.color
    return data


def element_to_dict(element: ScriptElement) -> dict[str, Any]:
    data: dict[str, Any] = {"id": element.id, "type": element.type}
    for f in dataclasses.fields(element):
        if f.name == "id":
            continue
        value = getattr(element, f.name)
        if value is None:
            continue
        if f.name == "choices":
            value = [_choice_to_dict(c) for c in value]
        data[f.name] = value
    return data


def _choice_to_dict(choice: Choice) -> dict[str, Any]:
    data: dict[str, Any] = {"id": choice.id, "text": choice.text}
    if choice.condition is not None:
        data["condition"] = choice.condition
    data["actions"] = [element_to_dict(a) for a in choice.actions]
    return data


def script_to_dict(script: Script) -> dict[str, Any]:
    return {
        "characters": [_character_to_dict(c) for c in script.characters],
        "elements": [element_to_dict(e) for e in script.elements],
        "assets": {kind: list(getattr(script.assets, kind)) for kind in _ASSET_KINDS},
    }


def issue_to_dict(issue: Issue) -> dict[str, Any]:
    return {
        "severity": issue.severity.name.lower(),
        "check": issue.check_name,
        "message": issue.message,
        "element_id": issue.element_id,
        "line": issue.line,
    }


def dumps(script: Script) -> str:
    """Serialize *script* as pretty-printed JSON text."""
    return json.dumps(script_to_dict(script), indent=2, ensure_ascii=False)


# --- dict -> Script ---


def _expect(value: Any, kind: type | tuple[type, ...], path: str) -> Any:
    if not isinstance(value, kind):
        names = kind.__name__ if isinstance(kind, type) else "/".join(k.__name__ for k in kind)
        raise DocumentError(f"{path}: expected {names}, got {type(value).__name__}")
    return value


def _optional_str(data: dict, key: str, path: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return _expect(value, str, f"{path}.{key}")


def _literal_text(value: Any) -> str:
    """Render a JSON scalar as the Python literal Ren'Py would see."""
    if isinstance(value, str):
        return value
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value, ensure_ascii=False)


def _character_from_dict(data: Any, path: str) -> Character:
    _expect(data, dict, path)
    for key in ("id", "name"):
        if key not in data:
            raise DocumentError(f"{path}: missing '{key}'")
    return Character(
        id=_expect(data["id"], str, f"{path}.id"),
        name=_expect(data["name"], str, f"{path}.name"),
        color=_optional_str(data, "color", path),
    )


def _choice_from_dict(data: Any, path: str) -> Choice:
    _expect(data, dict, path)
    if "id" not in data:
        raise DocumentError(f"{path}: missing 'id'")
    actions = _expect(data.get("actions", []), list, f"{path}.actions")
    return Choice(
        id=_expect(data["id"], str, f"{path}.id"),
        text=_expect(data.get("text", ""), str, f"{path}.text"),
        condition=_optional_str(data, "condition", path),
        actions=[element_from_dict(a, f"{path}.actions[{i}]") for i, a in enumerate(actions)],
    )


def element_from_dict(data: Any, path: str = "element") -> ScriptElement:
    _expect(data, dict, path)
    if "id" not in data:
        raise DocumentError(f"{path}: missing 'id'")
    type_name = data.get("type")
    cls = ELEMENT_TYPES.get(type_name) if isinstance(type_name, str) else None
    if cls is None:
        raise DocumentError(f"{path}.type: unknown element type {type_name!r}")

    kwargs: dict[str, Any] = {"id": _expect(data["id"], str, f"{path}.id")}
    for f in dataclasses.fields(cls):
        if f.name == "id" or f.name not in data or data[f.name] is None:
            continue
        value = data[f.name]
        field_path = f"{path}.{f.name}"
        if cls is Menu and f.name == "choices":
            value = [
                _choice_from_dict(c, f"{field_path}[{i}]")
                for i, c in enumerate(_expect(value, list, field_path))
            ]
        elif cls is SetVariable and f.name == "value":
            value = _literal_text(value)
        elif cls is Pause and f.name == "duration":
            if isinstance(value, bool):
                raise DocumentError(f"{field_path}: expected number, got bool")
            value = float(_expect(value, (int, float), field_path))
        else:
            value = _expect(value, str, field_path)
        kwargs[f.name] = value
    return cls(**kwargs)


def script_from_dict(data: Any) -> Script:
    """Build a Script from a decoded JSON document.

    Raises
    ------
    DocumentError
        If the document is not an object, an element has an unknown
        ``type``, or a field has the wrong JSON type.
    """
    _expect(data, dict, "document")
    characters = _expect(data.get("characters", []), list, "characters")
    elements = _expect(data.get("elements", []), list, "elements")
    assets_data = _expect(data.get("assets", {}), dict, "assets")

    assets = Assets(
        **{kind: list(_expect(assets_data.get(kind, []), list, f"assets.{kind}")) for kind in _ASSET_KINDS}
    )
    script = Script(
        characters=[_character_from_dict(c, f"characters[{i}]") for i, c in enumerate(characters)],
        elements=[element_from_dict(e, f"elements[{i}]") for i, e in enumerate(elements)],
        assets=assets,
    )
    logger.debug(
        "Loaded document: %d character(s), %d element(s)",
        len(script.characters),
        len(script.elements),
    )
    return script


def loads(text: str) -> Script:
    """Parse JSON document text into a Script.

    Raises
    ------
    DocumentError
        If *text* is not valid JSON or does not describe a Script.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"Invalid JSON document: {exc}") from exc
    return script_from_dict(data)
