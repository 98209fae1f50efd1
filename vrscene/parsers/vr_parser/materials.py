# materials.py
#
# Named materials for `material "name"` references. Callers may pass
# their own table to parse_into(); this one is used when they don't.

import copy

from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.scene_nodes import Material, default_material


def _rgb(r, g, b, **extra):
    return Material(ambient=[r * 0.2, g * 0.2, b * 0.2], diffuse=[r, g, b], **extra)


MATERIAL_TABLE = {
    "white": _rgb(1.0, 1.0, 1.0),
    "black": _rgb(0.0, 0.0, 0.0),
    "gray": _rgb(0.5, 0.5, 0.5),
    "grey": _rgb(0.5, 0.5, 0.5),
    "light_gray": _rgb(0.75, 0.75, 0.75),
    "dark_gray": _rgb(0.25, 0.25, 0.25),
    "red": _rgb(1.0, 0.0, 0.0),
    "green": _rgb(0.0, 1.0, 0.0),
    "blue": _rgb(0.0, 0.0, 1.0),
    "yellow": _rgb(1.0, 1.0, 0.0),
    "cyan": _rgb(0.0, 1.0, 1.0),
    "magenta": _rgb(1.0, 0.0, 1.0),
    "orange": _rgb(1.0, 0.5, 0.0),
    "brown": _rgb(0.55, 0.35, 0.15),
    "gold": _rgb(0.85, 0.65, 0.15, specular=[1.0, 0.9, 0.5], spec_power=0.6),
    "silver": _rgb(0.75, 0.75, 0.78, specular=[1.0, 1.0, 1.0], spec_power=0.7),
    "glass": _rgb(0.8, 0.9, 1.0, specular=[1.0, 1.0, 1.0], spec_power=0.9,
                  transparency=0.7),
}


def lookup_material(name, table=None):
    """
    Copy of the named material (case-insensitive), or the default gray with
    a warning when the name is unknown.
    """
    table = MATERIAL_TABLE if table is None else table
    found = table.get(name)
    if found is None:
        lowered = name.lower()
        for key, value in table.items():
            if key.lower() == lowered:
                found = value
                break
    if found is None:
        write_log("Warning", f"Unknown material '{name}', using default gray")
        material = default_material()
    else:
        material = copy.deepcopy(found)
    material.name = name
    return material
