# -*- coding: utf-8 -*-
"""
Primitive sub-rules
-------------------

Each rule is entered with its keyword consumed and returns one View.
Arity or type problems raise VrSyntaxError / GeometryError; the view rule
catches them and drops the view.

    RBOX         Vector Vector
    CYL          [v cx cy cz] rx ry height
    SPHERE       [v] r  |  [v] rx ry rz
    N_POLY       count Vector{count}
    LINE         Vector Vector
    N_LINE       count Vector{count}
    QUAD_GRID    nx ny Vector Vector Vector Vector
    indexed_poly ['{'] Section* ['}']
"""

from vrscene.core.errors import GeometryError, VrSyntaxError
from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.geometry import (
    box_from_corners, fan_triangulate, flatten, polyline_indices, quad_grid,
)
from vrscene.parsers.vr_parser.lexer import EOF, IDENT, NUMBER, PUNCT
from vrscene.parsers.vr_parser.rule_helpers import (
    accept_separator, keyword, number_run, read_count, read_int, read_number,
    read_vector, skip_member, skip_stray,
)
from vrscene.parsers.vr_parser.scene_nodes import (
    BoxView, CylinderView, LinesView, MeshView, SphereView,
)
from vrscene.parsers.vr_parser.triangulate import build_indexed_mesh


def _read_vectors(cursor, count):
    vectors = []
    for _ in range(count):
        vectors.append(read_vector(cursor))
        accept_separator(cursor)
    return vectors


# -----------------------------
# Solids
# -----------------------------

def parse_rbox(ctx, cursor):
    a, b = _read_vectors(cursor, 2)
    center, size = box_from_corners(a, b)
    return BoxView(center=center, size=size)


def parse_cyl(ctx, cursor):
    center = [0.0, 0.0, 0.0]
    if cursor.check(IDENT, "v") or number_run(cursor) >= 6:
        center = read_vector(cursor)
    rx = read_number(cursor)
    ry = read_number(cursor)
    height = read_number(cursor)
    return CylinderView(center=center, rx=rx, ry=ry, height=height)


def parse_sphere(ctx, cursor):
    cursor.accept(IDENT, "v")
    rx = read_number(cursor)
    ry = rz = rx
    if cursor.check(NUMBER):
        ry = read_number(cursor)
        rz = read_number(cursor)
    return SphereView(rx=rx, ry=ry, rz=rz)


# -----------------------------
# Polygons and lines
# -----------------------------

def parse_n_poly(ctx, cursor):
    count = read_count(cursor, 3)
    points = _read_vectors(cursor, count)
    return MeshView(positions=flatten(points), indices=fan_triangulate(count))


def parse_line(ctx, cursor):
    points = _read_vectors(cursor, 2)
    return LinesView(positions=flatten(points), indices=polyline_indices(2))


def parse_n_line(ctx, cursor):
    count = read_count(cursor, 2)
    points = _read_vectors(cursor, count)
    return LinesView(positions=flatten(points), indices=polyline_indices(count))


def parse_quad_grid(ctx, cursor):
    line = cursor.line
    nx = read_count(cursor, 1)
    ny = read_count(cursor, 1)
    limit = ctx.params.max_grid_vertices
    if nx * ny > limit:
        raise GeometryError(f"QUAD_GRID {nx}x{ny} exceeds {limit} vertices", line)
    corners = _read_vectors(cursor, 4)
    positions, indices = quad_grid(corners, nx, ny)
    return MeshView(positions=positions, indices=indices)


# -----------------------------
# indexed_poly
# -----------------------------

VECTOR_SECTIONS = {"vertices": 3, "normals": 3, "texcoords": 2}
INDEX_SECTIONS = ("polylist", "normal_index", "texcoord_index")


def _read_section_numbers(cursor):
    """'{' (Number | 'v' | ',' | ';')* '}' -> list of floats"""
    cursor.expect(PUNCT, "{")
    values = []
    while True:
        tok = cursor.peek()
        if tok.kind == NUMBER:
            values.append(cursor.next().value)
        elif keyword(tok) == "v":
            cursor.next()
        elif accept_separator(cursor):
            continue
        elif tok.kind == PUNCT and tok.value == "}":
            cursor.next()
            return values
        else:
            raise VrSyntaxError("number or '}'", tok.describe(), tok.line)


def _group(values, width, section, line):
    if len(values) % width:
        raise GeometryError(
            f"{section} holds {len(values)} numbers, not a multiple of {width}", line)
    return [values[i:i + width] for i in range(0, len(values), width)]


def _split_faces(values, section, line):
    """Index lists separated by -1; a trailing list without -1 is kept."""
    faces = []
    face = []
    for value in values:
        if not float(value).is_integer():
            raise GeometryError(f"{section} index {value:g} is not an integer", line)
        index = int(value)
        if index < 0:
            faces.append(face)
            face = []
        else:
            face.append(index)
    if face:
        faces.append(face)
    return faces


def _parse_section(cursor, name, sections):
    line = cursor.line
    declared = None
    if cursor.check(NUMBER):
        declared = read_int(cursor)
    values = _read_section_numbers(cursor)

    if name in VECTOR_SECTIONS:
        items = _group(values, VECTOR_SECTIONS[name], name, line)
    else:
        items = _split_faces(values, name, line)

    if declared is not None and declared != len(items):
        write_log("Warning",
                  f"line {line}: {name} declares {declared} entries, found {len(items)}")
    if name in INDEX_SECTIONS:
        # Several face lists accumulate
        sections.setdefault(name, []).extend(items)
        return
    if name in sections:
        write_log("Warning", f"line {line}: repeated {name} section replaces the earlier one")
    sections[name] = items


def parse_indexed_poly(ctx, cursor):
    line = cursor.line
    braced = cursor.accept(PUNCT, "{") is not None
    sections = {}

    while True:
        tok = cursor.peek()
        key = keyword(tok)
        if key in VECTOR_SECTIONS or key in INDEX_SECTIONS:
            cursor.next()
            _parse_section(cursor, key, sections)
            continue
        if not braced:
            break
        if tok.kind == PUNCT and tok.value == "}":
            cursor.next()
            break
        if tok.kind == EOF:
            raise VrSyntaxError("'}'", tok.describe(), tok.line)
        if key is not None:
            cursor.next()
            skip_member(cursor, key, tok.line)
        else:
            skip_stray(cursor, "indexed_poly")

    if "vertices" not in sections or "polylist" not in sections:
        raise GeometryError("indexed_poly needs vertices and polylist sections", line)

    params = ctx.params
    mesh = build_indexed_mesh(
        sections["vertices"], sections["polylist"],
        normals=sections.get("normals"),
        normal_faces=sections.get("normal_index"),
        texcoords=sections.get("texcoords"),
        texcoord_faces=sections.get("texcoord_index"),
        epsilon=params.ear_epsilon,
        max_face_vertices=params.max_face_vertices,
    )
    return MeshView(**mesh)


# keyword (lower case) -> rule
PRIMITIVES = {
    "rbox": parse_rbox,
    "cyl": parse_cyl,
    "sphere": parse_sphere,
    "n_poly": parse_n_poly,
    "line": parse_line,
    "n_line": parse_n_line,
    "quad_grid": parse_quad_grid,
    "indexed_poly": parse_indexed_poly,
}

BLOCK_ONLY = ("indexed_poly",)
