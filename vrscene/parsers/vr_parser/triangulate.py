# -*- coding: utf-8 -*-
"""
Polygon triangulation for indexed_poly faces
-------------------------------------------

Faces with more than three vertices are ear clipped:

1. face normal by Newell's method (tolerates mild non-planarity)
2. project to 2D by dropping the axis of the largest normal component
3. clip ears (convex corners with no other remaining vertex inside)
   until three vertices are left

A face that never yields an ear within count * count attempts is finished
as a fan. Consecutive repeated points are collapsed before clipping.
"""

import math

from vrscene.core.errors import GeometryError
from vrscene.logger.scene_logger import write_log


# -----------------------------
# Normal / projection
# -----------------------------

def newell_normal(points):
    nx = ny = nz = 0.0
    n = len(points)
    for i in range(n):
        x1, y1, z1 = points[i]
        x2, y2, z2 = points[(i + 1) % n]
        nx += (y1 - y2) * (z1 + z2)
        ny += (z1 - z2) * (x1 + x2)
        nz += (x1 - x2) * (y1 + y2)
    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if length == 0.0:
        return [0.0, 0.0, 0.0]
    return [nx / length, ny / length, nz / length]


def projection_axes(normal):
    """
    The two axes kept when projecting onto the plane most facing `normal`.
    Kept axes are cyclic (y,z), (z,x), (x,y) so a counter-clockwise polygon
    around a positive normal component stays counter-clockwise.
    """
    ax, ay, az = (abs(c) for c in normal)
    if ax >= ay and ax >= az and ax > 0.0:
        return 1, 2
    if ay >= az and ay > 0.0:
        return 2, 0
    return 0, 1


# -----------------------------
# 2D predicates
# -----------------------------

def _cross(a, b, c):
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def polygon_area(points2d):
    """Signed shoelace area; positive for counter-clockwise."""
    area = 0.0
    n = len(points2d)
    for i in range(n):
        x1, y1 = points2d[i]
        x2, y2 = points2d[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def point_in_triangle(p, a, b, c, epsilon=1e-9):
    """Inside or on the boundary, either winding."""
    d1 = _cross(a, b, p)
    d2 = _cross(b, c, p)
    d3 = _cross(c, a, p)
    has_neg = d1 < -epsilon or d2 < -epsilon or d3 < -epsilon
    has_pos = d1 > epsilon or d2 > epsilon or d3 > epsilon
    return not (has_neg and has_pos)


def _is_ear(pts, remaining, k, orient, epsilon):
    m = len(remaining)
    i_prev = remaining[(k - 1) % m]
    i_cur = remaining[k]
    i_next = remaining[(k + 1) % m]
    a, b, c = pts[i_prev], pts[i_cur], pts[i_next]

    if orient * _cross(a, b, c) <= epsilon:
        return False
    for j in remaining:
        if j in (i_prev, i_cur, i_next):
            continue
        if point_in_triangle(pts[j], a, b, c, epsilon):
            return False
    return True


# -----------------------------
# Ear clipping
# -----------------------------

def _distinct_corners(points, epsilon):
    """Indices of `points` with repeated neighbours (cyclic) collapsed."""
    def same(a, b):
        return all(abs(x - y) <= epsilon for x, y in zip(a, b))

    keep = [0]
    for i in range(1, len(points)):
        if not same(points[i], points[keep[-1]]):
            keep.append(i)
    while len(keep) > 1 and same(points[keep[-1]], points[keep[0]]):
        keep.pop()
    return keep


def ear_clip(points, epsilon=1e-9, max_vertices=None):
    """
    Triangulate one polygon given as a list of 3D points.
    Returns a list of (i, j, k) index triples into `points`, in the
    polygon's own winding.

    Consecutive repeated points are collapsed first, so such a face yields
    fewer than count - 2 triangles.
    """
    n = len(points)
    if n < 3:
        raise GeometryError(f"face needs at least 3 vertices, got {n}")
    if max_vertices is not None and n > max_vertices:
        raise GeometryError(f"face has {n} vertices, limit is {max_vertices}")
    if n == 3:
        return [(0, 1, 2)]

    keep = _distinct_corners(points, epsilon)
    if len(keep) < n:
        write_log("Debug", f"ear clipping collapsed {n - len(keep)} repeated vertices")
    if len(keep) < 3:
        raise GeometryError(f"face has only {len(keep)} distinct vertices")
    if len(keep) == 3:
        return [tuple(keep)]

    u, v = projection_axes(newell_normal([points[i] for i in keep]))
    pts = [(points[i][u], points[i][v]) for i in keep]
    orient = 1.0 if polygon_area(pts) >= 0.0 else -1.0

    m = len(keep)
    remaining = list(range(m))
    triangles = []
    attempts = 0
    limit = m * m
    k = 0

    while len(remaining) > 3:
        if attempts >= limit:
            write_log("Warning",
                      f"ear clipping found no ear after {limit} attempts, "
                      f"fanning the last {len(remaining)} vertices")
            break
        attempts += 1
        r = len(remaining)
        k %= r
        if _is_ear(pts, remaining, k, orient, epsilon):
            triangles.append((remaining[(k - 1) % r], remaining[k], remaining[(k + 1) % r]))
            del remaining[k]
        else:
            k += 1

    first = remaining[0]
    for i in range(1, len(remaining) - 1):
        triangles.append((first, remaining[i], remaining[i + 1]))
    return [(keep[a], keep[b], keep[c]) for a, b, c in triangles]


# -----------------------------
# indexed_poly mesh
# -----------------------------

def _face_lookup(face_lists, face_no, corner, table, vertex_index, default):
    """Per-face index list first, then the vertex's own index, then default."""
    if face_lists is not None and face_no < len(face_lists):
        face = face_lists[face_no]
        if corner < len(face):
            idx = face[corner]
            if 0 <= idx < len(table):
                return table[idx]
    if 0 <= vertex_index < len(table):
        return table[vertex_index]
    return default


def build_indexed_mesh(vertices, faces, normals=None, normal_faces=None,
                       texcoords=None, texcoord_faces=None,
                       epsilon=1e-9, max_face_vertices=None):
    """
    Build an un-welded triangle mesh from shared vertex / normal / texcoord
    tables and per-face index lists. Every triangle corner gets its own
    output vertex so per-face normals and texcoords survive.

    Returns a dict with positions, indices, normals, texcoords (the last two
    None when the source has no table for them).
    """
    normals = normals or []
    texcoords = texcoords or []

    positions = []
    out_normals = []
    out_texcoords = []

    for face_no, face in enumerate(faces):
        if len(face) < 3:
            write_log("Warning", f"indexed_poly face {face_no} has {len(face)} vertices, dropped")
            continue
        bad = [i for i in face if i < 0 or i >= len(vertices)]
        if bad:
            write_log("Warning",
                      f"indexed_poly face {face_no} references missing vertex {bad[0]}, dropped")
            continue
        try:
            triangles = ear_clip([vertices[i] for i in face], epsilon, max_face_vertices)
        except GeometryError as e:
            write_log("Warning", f"indexed_poly face {face_no} dropped: {e}")
            continue

        for tri in triangles:
            for corner in tri:
                vi = face[corner]
                positions.extend(vertices[vi])
                if normals:
                    out_normals.extend(_face_lookup(normal_faces, face_no, corner,
                                                    normals, vi, [0.0, 0.0, 0.0]))
                if texcoords:
                    out_texcoords.extend(_face_lookup(texcoord_faces, face_no, corner,
                                                      texcoords, vi, [0.0, 0.0]))

    if not positions:
        raise GeometryError("indexed_poly produced no triangles")

    return {
        "positions": [float(c) for c in positions],
        "indices": list(range(len(positions) // 3)),
        "normals": [float(c) for c in out_normals] if normals else None,
        "texcoords": [float(c) for c in out_texcoords] if texcoords else None,
    }
