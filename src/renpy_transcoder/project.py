"""Load and save script documents from disk (.rpy text or .json document)."""

from __future__ import annotations

import logging
from pathlib import Path

from . import codec
from .generator import generate
from .models import Script
from .parser import parse

logger = logging.getLogger("renpy_transcoder.project")

JSON_SUFFIX = ".json"


def is_document_path(path: str | Path) -> bool:
    """True if *path* names a JSON document rather than script text."""
    return Path(path).suffix.lower() == JSON_SUFFIX


def load_script(path: str | Path) -> Script:
    """Load a Script from *path*.

    ``.json`` files are read as interchange documents; anything else is
    parsed as Ren'Py script text.

    Raises
    ------
    OSError
        If the file cannot be read.
    codec.DocumentError
        If a JSON document is malformed.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8", errors="replace")
    if is_document_path(path):
        script = codec.loads(text)
    else:
        script = parse(text)
    logger.info(
        "Loaded %s: %d character(s), %d element(s)",
        path.name,
        len(script.characters),
        len(script.elements),
    )
    return script


def render_script(script: Script, as_document: bool) -> str:
    if as_document:
        return codec.dumps(script) + "\n"
    return generate(script) + "\n"


def save_script(script: Script, path: str | Path) -> None:
    """Write *script* to *path*, as JSON for ``.json`` and script text otherwise."""
    path = Path(path)
    path.write_text(render_script(script, is_document_path(path)), encoding="utf-8")
    logger.info("Saved %s", path.name)
