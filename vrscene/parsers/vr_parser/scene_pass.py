# scene_pass.py
#
# Post-parse pass over the finished object tree:
#   - an object with no materials gets the default gray (or, with
#     inherit_materials, copies of its nearest ancestor's materials)
#   - each view's material_index / texture_index is resolved against its
#     owning object; absent or out of range falls back to entry 0
#
# Running the pass twice leaves the scene unchanged.

import copy

from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.scene_nodes import default_material


def _pick(entries, index, what, view, owner):
    if not entries:
        return None
    if index is None:
        return entries[0]
    if 0 <= index < len(entries):
        return entries[index]
    write_log("Warning",
              f"{view.kind} view in object '{owner.name or ''}': {what} {index} "
              f"out of range (0..{len(entries) - 1}), using 0")
    return entries[0]


def _ensure_materials(obj, inherited, params):
    if obj.materials:
        return
    if params.inherit_materials and inherited:
        obj.materials = copy.deepcopy(inherited)
        write_log("Debug", f"object '{obj.name or ''}' inherits {len(inherited)} materials")
    else:
        obj.materials.append(default_material())
        write_log("Debug", f"object '{obj.name or ''}' given default material")


def _finish_object(obj, inherited, params):
    _ensure_materials(obj, inherited, params)
    for view in obj.views:
        view.material = _pick(obj.materials, view.material_index, "material_index", view, obj)
        view.texture = _pick(obj.textures, view.texture_index, "texture_index", view, obj)
    for child in obj.children:
        _finish_object(child, obj.materials, params)


def finish_scene(scene, params):
    for obj in scene.objects:
        _finish_object(obj, None, params)
    return scene
