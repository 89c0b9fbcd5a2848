from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from platformdirs import user_config_dir

from .config import LIMITS
from .room.tiles import Cell, glyph_table

logger = logging.getLogger(__name__)

APP_NAME = "escape-room"
SETTINGS_FILENAME = "settings.yaml"
ENV_SETTINGS_FILE = "ESCAPE_ROOM_SETTINGS_FILE"

FRONTENDS = ("terminal", "headless", "gui")

Seed = Union[int, str]


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values into a bool.

    Accepts: True/False, 1/0, "true"/"false", "yes"/"no", "on"/"off" (case-insensitive).
    Anything else raises ValueError.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off"}:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    raise ValueError(f"not a boolean: {value!r}")


def _as_seed(value: Any) -> Optional[Seed]:
    if value is None or isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return text


def _as_int(value: Any) -> int:
    """Whole numbers only: 30, "30" and 30.0 pass; 30.5, "abc" and booleans do not."""
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"not an integer: {value!r}")


# Field name -> caster applied to every value read from a file, the
# environment or the command line. A caster raising ValueError drops the value.
CASTERS = {
    "frontend": str,
    "seed": _as_seed,
    "width": _as_int,
    "height": _as_int,
    "show_instructions": _as_bool,
    "tile_px": _as_int,
}


def _cast_fields(values: Mapping[str, Any], source: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, value in values.items():
        caster = CASTERS.get(name)
        if caster is None or value is None:
            out[name] = value
            continue
        try:
            out[name] = caster(value)
        except ValueError as exc:
            logger.error("Ignoring invalid %s from %s: %s", name, source, exc)
    return out


@dataclass
class Settings:
    """Runtime settings for room size, seeding, front end and glyphs.

    Built from (lowest to highest precedence):
    - defaults
    - a YAML file (``--config``, env ESCAPE_ROOM_SETTINGS_FILE, or
      ``settings.yaml`` in the user config directory)
    - environment variables (prefix ESCAPE_ROOM_)
    - explicit overrides (command line)

    Example file::

        room:
          width: 30
          height: 12
          seed: lucky
        display:
          frontend: terminal
          show_instructions: false
        glyphs:
          player: "@"
          key: "k"
    """

    frontend: str = "terminal"
    seed: Optional[Seed] = None
    width: Optional[int] = None
    height: Optional[int] = None
    show_instructions: bool = True
    tile_px: int = 24
    glyphs: Dict[str, str] = field(default_factory=dict)

    # ------------------------ Core API ------------------------
    @property
    def room_size(self) -> Optional[tuple[int, int]]:
        """The configured (width, height), or None when the player must be asked."""
        if self.width is None or self.height is None:
            return None
        return self.width, self.height

    def glyph_table(self) -> Dict[Cell, str]:
        return glyph_table(self.glyphs)

    def validate(self) -> None:
        """Validate and normalize settings to safe values."""
        defaults = {f.name: f.default for f in dataclasses.fields(self) if f.name in CASTERS}
        current = {name: getattr(self, name) for name in CASTERS}
        cast = _cast_fields(current, "settings")
        for name in CASTERS:
            value = cast.get(name)
            setattr(self, name, defaults[name] if value is None else value)

        if self.frontend not in FRONTENDS:
            logger.warning("Unknown frontend %r; using 'terminal'", self.frontend)
            self.frontend = "terminal"
        if self.room_size is not None:
            w, h = self.room_size
            if not (LIMITS.in_range(w, h) and LIMITS.interior_ok(w, h)):
                logger.warning("Configured room size %sx%s is invalid; will prompt instead", w, h)
                self.width, self.height = None, None
        self.tile_px = max(8, min(96, self.tile_px))
        if not isinstance(self.glyphs, dict):
            logger.warning("Ignoring glyph overrides that are not a mapping: %r", self.glyphs)
            self.glyphs = {}

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "ESCAPE_ROOM_FRONTEND": "frontend",
            "ESCAPE_ROOM_SEED": "seed",
            "ESCAPE_ROOM_WIDTH": "width",
            "ESCAPE_ROOM_HEIGHT": "height",
            "ESCAPE_ROOM_INSTRUCTIONS": "show_instructions",
            "ESCAPE_ROOM_TILE_PX": "tile_px",
        }
        raw = {name: env[key] for key, name in mapping.items() if env.get(key, "") != ""}
        return _cast_fields(raw, "environment")

    @classmethod
    def from_yaml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("r", encoding="utf-8") as f:
                doc = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Failed to read settings YAML %s: %s", path, exc)
            return {}
        if not isinstance(doc, dict):
            logger.error("Settings file %s must contain a mapping", path)
            return {}

        # Flatten [room] and [display]; keep [glyphs] as a mapping
        flat: Dict[str, Any] = {}
        for section in ("room", "display"):
            if isinstance(doc.get(section), dict):
                flat.update(doc[section])
        for k, v in doc.items():
            if isinstance(v, dict):
                continue
            flat[k] = v
        if isinstance(doc.get("glyphs"), dict):
            flat["glyphs"] = {str(k): str(v) for k, v in doc["glyphs"].items()}

        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = set(flat) - allowed
        if unknown:
            logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(sorted(unknown)))
        return _cast_fields({k: v for k, v in flat.items() if k in allowed}, str(path))

    @classmethod
    def discover_config_path(cls, env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
        env = os.environ if env is None else env
        env_path = env.get(ENV_SETTINGS_FILE)
        if env_path:
            return Path(env_path).expanduser().resolve()
        default_path = Path(user_config_dir(APP_NAME, appauthor=False)) / SETTINGS_FILENAME
        if default_path.exists():
            return default_path
        return None

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Path | str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "Settings":
        data: Dict[str, Any] = {}
        if file_path is not None:
            chosen_path: Optional[Path] = Path(file_path).expanduser().resolve()
        else:
            chosen_path = cls.discover_config_path(env)
        if chosen_path is not None:
            logger.debug("Loading settings from %s", chosen_path)
            data.update(cls.from_yaml_file(chosen_path))
        data.update(cls.from_env(env))
        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls(**data)
        settings.validate()
        return settings


__all__ = ["Settings", "FRONTENDS", "APP_NAME"]
