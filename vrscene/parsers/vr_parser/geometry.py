# geometry.py
#
# Pure numeric builders that turn primitive parameters into renderer-ready
# vertex / index arrays. Positions are flat [x, y, z, x, y, z, ...] lists.

from vrscene.core.errors import GeometryError


# -----------------------------
# Utility
# -----------------------------

def flatten(vectors):
    out = []
    for v in vectors:
        out.extend(float(c) for c in v)
    return out


def bbox(points):
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    zs = [p[2] for p in points]
    return [min(xs), min(ys), min(zs)], [max(xs), max(ys), max(zs)]


def lerp(a, b, t):
    return [a[i] + (b[i] - a[i]) * t for i in range(3)]


# -----------------------------
# Primitive builders
# -----------------------------

def box_from_corners(a, b):
    """
    Axis aligned box through two opposite corners, in either order.
    Returns (center, size).
    """
    lo, hi = bbox([a, b])
    center = [(lo[i] + hi[i]) / 2.0 for i in range(3)]
    size = [hi[i] - lo[i] for i in range(3)]
    return center, size


def fan_triangulate(count):
    """Indices (0, i, i+1) for i = 1..count-2. No convexity check."""
    if count < 3:
        raise GeometryError(f"polygon needs at least 3 vertices, got {count}")
    indices = []
    for i in range(1, count - 1):
        indices.extend((0, i, i + 1))
    return indices


def polyline_indices(count):
    """Segment pairs (i, i+1) joining `count` points in order."""
    if count < 2:
        raise GeometryError(f"line needs at least 2 points, got {count}")
    indices = []
    for i in range(count - 1):
        indices.extend((i, i + 1))
    return indices


def _grid_param(i, n):
    if n == 1:
        return 0.5
    return i / float(n - 1)


def quad_grid(corners, nx, ny):
    """
    Bilinear grid through four corners at parameters (0,0), (0,1), (1,0),
    (1,1), with nx x ny vertices. Vertex (i, j) has index j * nx + i.

    Two triangles per cell, always split along the (i,j)-(i+1,j+1) diagonal.
    Returns (positions, indices).
    """
    if nx < 1 or ny < 1:
        raise GeometryError(f"quad grid needs at least 1x1 vertices, got {nx}x{ny}")
    c00, c01, c10, c11 = corners

    positions = []
    for j in range(ny):
        ty = _grid_param(j, ny)
        left = lerp(c00, c01, ty)
        right = lerp(c10, c11, ty)
        for i in range(nx):
            tx = _grid_param(i, nx)
            positions.extend(lerp(left, right, tx))

    indices = []
    for j in range(ny - 1):
        for i in range(nx - 1):
            a = j * nx + i
            b = a + 1
            c = a + nx
            d = c + 1
            indices.extend((a, b, d, a, d, c))
    return positions, indices


# -----------------------------
# Validation
# -----------------------------

def validate_arrays(positions, indices, per_primitive):
    """
    Check flat position / index arrays before they reach a view.
    `per_primitive` is 3 for triangle lists and 2 for line lists.
    """
    if len(positions) % 3:
        raise GeometryError(f"position array length {len(positions)} is not a multiple of 3")
    if len(indices) % per_primitive:
        raise GeometryError(
            f"index array length {len(indices)} is not a multiple of {per_primitive}")
    vertex_count = len(positions) // 3
    for i in indices:
        if i < 0 or i >= vertex_count:
            raise GeometryError(f"index {i} out of range for {vertex_count} vertices")
