"""Persistent settings for the Ren'Py transcoder, stored as JSON via platformdirs."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path

import platformdirs

logger = logging.getLogger("renpy_transcoder.settings")

_APP_NAME = "renpy-transcoder"
_SETTINGS_FILE = "settings.json"

# Expected types for each field, used to reject wrong-typed values from JSON
_FIELD_TYPES: dict[str, type] = {
    "check_toggles": dict,
    "output_format": str,
    "last_script_path": str,
    "fail_on_warnings": bool,
}

_OUTPUT_FORMATS = ("text", "json")


def _config_path() -> Path:
    """Return the platform-appropriate config directory."""
    return Path(platformdirs.user_config_dir(_APP_NAME))


@dataclass
class Settings:
    """User-persistent settings stored as JSON."""

    check_toggles: dict[str, bool] = field(default_factory=dict)
    output_format: str = "text"
    last_script_path: str = ""
    fail_on_warnings: bool = False

    def enabled_checks(self, available: list[str]) -> list[str]:
        """Checks from *available* not switched off in ``check_toggles``."""
        return [name for name in available if self.check_toggles.get(name, True)]

    def save(self) -> None:
        """Write settings to disk atomically.  Logs warnings on failure."""
        try:
            config_dir = _config_path()
            config_dir.mkdir(parents=True, exist_ok=True)
            filepath = config_dir / _SETTINGS_FILE
            payload = json.dumps(asdict(self), indent=2, ensure_ascii=False)
            # Atomic write: temp file in same dir, then rename
            fd, tmp = tempfile.mkstemp(dir=config_dir, prefix=".settings-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, filepath)
            except Exception:
                with contextlib.suppress(OSError):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            logger.warning("Failed to save settings: %s", exc)
        except Exception:
            logger.warning("Unexpected error saving settings", exc_info=True)

    @classmethod
    def load(cls) -> Settings:
        """Load settings from disk.  Returns defaults on any failure."""
        try:
            filepath = _config_path() / _SETTINGS_FILE
            if not filepath.exists():
                return cls()
            data = json.loads(filepath.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                logger.warning("Settings file has invalid format, using defaults")
                return cls()

            # Filter to known fields with correct types (forward-compatible)
            filtered: dict[str, object] = {}
            for k, v in data.items():
                expected = _FIELD_TYPES.get(k)
                if expected is None:
                    continue
                # bool is subclass of int in Python; require exact bool for bool fields
                if expected is bool:
                    if type(v) is bool:
                        filtered[k] = v
                elif isinstance(v, expected):
                    if k == "check_toggles":
                        filtered[k] = {name: on for name, on in v.items() if type(on) is bool}
                    elif k == "output_format" and v not in _OUTPUT_FORMATS:
                        logger.warning("Ignoring unknown output format in settings: %s", v)
                    else:
                        filtered[k] = v
            return cls(**filtered)  # type: ignore[arg-type]
        except json.JSONDecodeError:
            logger.warning("Settings file is corrupted, using defaults: %s", _config_path() / _SETTINGS_FILE)
            return cls()
        except OSError as exc:
            logger.warning("Cannot read settings file: %s", exc)
            return cls()
        except Exception:
            logger.warning("Unexpected error loading settings", exc_info=True)
            return cls()
