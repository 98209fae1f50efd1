# -*- coding: utf-8 -*-
"""
Scene graph produced by the .vr parser
--------------------------------------

Scene
  world     World
  objects   [SceneObject]            top level, declaration order

SceneObject
  materials / textures               positional, views index into them
  transforms                         applied in declaration order
  views                              BoxView, CylinderView, SphereView,
                                     MeshView, LinesView
  children  [SceneObject]            owned, parsed inside the parent block
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import ClassVar, List, Optional, Union

Vec3 = List[float]


def _vec(x, y, z):
    return field(default_factory=lambda: [float(x), float(y), float(z)])


# ----------------------------------------------------
# World
# ----------------------------------------------------

@dataclass
class World:
    name: Optional[str] = None
    background: Vec3 = _vec(0.2, 0.2, 0.25)
    start: Vec3 = _vec(0, 0, 3)
    fog: Optional[float] = None
    ambient: Vec3 = _vec(0.2, 0.2, 0.2)
    light_position: Vec3 = _vec(0, 0, 10)
    terrain: Optional[str] = None
    info: str = ""


# ----------------------------------------------------
# Materials
# ----------------------------------------------------

DEFAULT_GRAY = (0.5, 0.5, 0.5)


@dataclass
class Material:
    ambient: Vec3 = _vec(0, 0, 0)
    diffuse: Vec3 = _vec(*DEFAULT_GRAY)
    emission: Vec3 = _vec(0, 0, 0)
    specular: Vec3 = _vec(0, 0, 0)
    spec_power: float = 0.0
    transparency: float = 0.0
    name: Optional[str] = None


def default_material():
    """Neutral gray given to objects that declare no material."""
    return Material()


# ----------------------------------------------------
# Transforms
# ----------------------------------------------------

@dataclass
class Translate:
    vector: Vec3
    kind: ClassVar[str] = "translation"


@dataclass
class EulerXYZ:
    angles: Vec3
    kind: ClassVar[str] = "eulerxyz"


@dataclass
class FixedXYZ:
    angles: Vec3
    kind: ClassVar[str] = "fixedxyz"


@dataclass
class Rotation:
    rows: List[Vec3]
    kind: ClassVar[str] = "rotation"


Transform = Union[Translate, EulerXYZ, FixedXYZ, Rotation]


# ----------------------------------------------------
# Views
# ----------------------------------------------------

@dataclass
class ViewBase:
    view_index: Optional[int] = None
    name: Optional[str] = None
    material_index: Optional[int] = None
    texture_index: Optional[int] = None
    texture_mode: Optional[str] = None
    # Filled in by the post-parse pass from the owning object
    material: Optional[Material] = None
    texture: Optional[str] = None

    kind: ClassVar[str] = "view"


@dataclass
class BoxView(ViewBase):
    center: Vec3 = _vec(0, 0, 0)
    size: Vec3 = _vec(0, 0, 0)
    kind: ClassVar[str] = "box"


@dataclass
class CylinderView(ViewBase):
    center: Vec3 = _vec(0, 0, 0)
    rx: float = 0.0
    ry: float = 0.0
    height: float = 0.0
    kind: ClassVar[str] = "cylinder"


@dataclass
class SphereView(ViewBase):
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    kind: ClassVar[str] = "sphere"


@dataclass
class MeshView(ViewBase):
    positions: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    normals: Optional[List[float]] = None
    texcoords: Optional[List[float]] = None
    kind: ClassVar[str] = "mesh"

    @property
    def triangle_count(self):
        return len(self.indices) // 3


@dataclass
class LinesView(ViewBase):
    positions: List[float] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    kind: ClassVar[str] = "lines"


View = Union[BoxView, CylinderView, SphereView, MeshView, LinesView]


# ----------------------------------------------------
# Objects and scene
# ----------------------------------------------------

@dataclass
class Gateway:
    url: str
    position: Optional[Vec3] = None


@dataclass
class SceneObject:
    id: Optional[int] = None
    name: Optional[str] = None
    materials: List[Material] = field(default_factory=list)
    textures: List[str] = field(default_factory=list)
    transforms: List[Transform] = field(default_factory=list)
    views: List[View] = field(default_factory=list)
    children: List['SceneObject'] = field(default_factory=list)
    gateways: List[Gateway] = field(default_factory=list)

    def walk(self):
        """Yield this object and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Scene:
    world: World = field(default_factory=World)
    objects: List[SceneObject] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def walk_objects(self):
        for obj in self.objects:
            yield from obj.walk()


# ----------------------------------------------------
# Debug output
# ----------------------------------------------------

def _to_plain(value):
    if is_dataclass(value):
        out = {}
        kind = getattr(type(value), "kind", None)
        if kind:
            out["type"] = kind
        for f in fields(value):
            out[f.name] = _to_plain(getattr(value, f.name))
        return out
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def scene_to_dict(scene):
    """JSON-ready dict of the whole scene; views and transforms carry a 'type' key."""
    return _to_plain(scene)
