# preferences.py
#
# Parser settings. Defaults live on the dataclass; from_environment()
# overrides them from VRSCENE_* variables.

import os
from dataclasses import dataclass
from typing import Optional

from vrscene.logger.scene_logger import write_log

ENV_PREFIX = "VRSCENE_"


def _get_int(name, default):
    raw = os.environ.get(ENV_PREFIX + name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        write_log("Preferences", f"Invalid {ENV_PREFIX}{name}={raw!r}, using {default}")
        return default
    if value < 1:
        write_log("Preferences", f"{ENV_PREFIX}{name} must be positive, using {default}")
        return default
    return value


def _get_bool(name, default):
    raw = os.environ.get(ENV_PREFIX + name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    write_log("Preferences", f"Invalid {ENV_PREFIX}{name}={raw!r}, using {default}")
    return default


@dataclass
class ParserParams:
    """Limits and switches for one parse call."""
    max_nesting_depth: int = 64
    max_face_vertices: int = 1024
    max_grid_vertices: int = 262144
    ear_epsilon: float = 1e-9
    # False: every materialless object gets its own default gray.
    # True: it copies the nearest ancestor's materials instead.
    inherit_materials: bool = False
    log_file: Optional[str] = None
    verbose: bool = False

    @classmethod
    def from_environment(cls) -> 'ParserParams':
        defaults = cls()
        return cls(
            max_nesting_depth=_get_int("MAX_DEPTH", defaults.max_nesting_depth),
            max_face_vertices=_get_int("MAX_FACE_VERTICES", defaults.max_face_vertices),
            max_grid_vertices=_get_int("MAX_GRID_VERTICES", defaults.max_grid_vertices),
            inherit_materials=_get_bool("INHERIT_MATERIALS", defaults.inherit_materials),
            log_file=os.environ.get(ENV_PREFIX + "LOG_FILE") or None,
            verbose=_get_bool("VERBOSE", defaults.verbose),
        )
