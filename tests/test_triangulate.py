import pytest

from vrscene import GeometryError
from vrscene.logger import capture_log
from vrscene.parsers.vr_parser.triangulate import (
    build_indexed_mesh, ear_clip, newell_normal, polygon_area,
    projection_axes,
)

SQUARE = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]]
L_SHAPE = [[0, 0, 0], [2, 0, 0], [2, 1, 0], [1, 1, 0], [1, 2, 0], [0, 2, 0]]


def _area2d(points, tri):
    a, b, c = (points[i] for i in tri)
    return abs((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])) / 2.0


def test_newell_normal_of_ccw_square():
    assert newell_normal(SQUARE) == [0.0, 0.0, 1.0]
    assert newell_normal(list(reversed(SQUARE))) == [0.0, 0.0, -1.0]


def test_newell_normal_of_degenerate_polygon_is_zero():
    assert newell_normal([[0, 0, 0], [1, 0, 0], [2, 0, 0]]) == [0.0, 0.0, 0.0]


@pytest.mark.parametrize(
    "normal, axes",
    [
        ([0, 0, 1], (0, 1)),
        ([0, -1, 0], (2, 0)),
        ([1, 0.2, 0.3], (1, 2)),
        ([0, 0, 0], (0, 1)),
    ],
)
def test_projection_drops_dominant_axis(normal, axes):
    assert projection_axes(normal) == axes


def test_polygon_area_sign_follows_winding():
    pts = [(p[0], p[1]) for p in SQUARE]
    assert polygon_area(pts) == 1.0
    assert polygon_area(list(reversed(pts))) == -1.0


def test_square_gives_two_triangles():
    triangles = ear_clip(SQUARE)
    assert len(triangles) == 2
    assert {i for tri in triangles for i in tri} == {0, 1, 2, 3}


@pytest.mark.parametrize("points", [L_SHAPE, list(reversed(L_SHAPE))])
def test_concave_polygon_triangles_cover_its_area(points):
    triangles = ear_clip(points)
    assert len(triangles) == len(points) - 2
    assert sum(_area2d(points, t) for t in triangles) == pytest.approx(3.0)


def test_polygon_in_yz_plane():
    points = [[0, y, z] for y, z in ([0, 0], [2, 0], [2, 1], [1, 1], [1, 2], [0, 2])]
    triangles = ear_clip(points)
    assert len(triangles) == 4
    flat = [[p[1], p[2]] for p in points]
    assert sum(_area2d(flat, t) for t in triangles) == pytest.approx(3.0)


def test_no_ear_falls_back_to_fan_with_warning():
    collinear = [[0, 0, 0], [1, 0, 0], [2, 0, 0], [3, 0, 0], [4, 0, 0]]
    with capture_log() as records:
        triangles = ear_clip(collinear)
    assert len(triangles) == 3
    assert any(level == "Warning" and "fanning" in msg for level, msg in records)


def test_face_limits():
    with pytest.raises(GeometryError):
        ear_clip(SQUARE[:2])
    with pytest.raises(GeometryError):
        ear_clip(SQUARE, max_vertices=3)


VERTS = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0], [2, 2, 0]]


def test_triangle_and_quad_make_three_triangles():
    mesh = build_indexed_mesh(VERTS, [[0, 1, 4], [0, 1, 2, 3]])
    assert len(mesh["indices"]) == 9
    assert len(mesh["positions"]) == 27
    assert mesh["normals"] is None
    assert mesh["texcoords"] is None


def test_mesh_is_unwelded():
    mesh = build_indexed_mesh(VERTS, [[0, 1, 2, 3]])
    assert mesh["indices"] == list(range(6))
    assert len(mesh["positions"]) == 18


def test_normals_prefer_face_index_lists():
    normals = [[0, 0, 1], [1, 0, 0]]
    mesh = build_indexed_mesh(VERTS, [[0, 1, 4]], normals=normals,
                              normal_faces=[[1, 1, 1]])
    assert mesh["normals"] == [1.0, 0.0, 0.0] * 3


def test_normals_fall_back_to_vertex_index_then_zero():
    normals = [[0, 0, 1], [0, 1, 0]]
    mesh = build_indexed_mesh(VERTS, [[0, 1, 4]], normals=normals)
    assert mesh["normals"] == [0.0, 0.0, 1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]


def test_texcoords_resolved_per_corner():
    texcoords = [[0, 0], [1, 0], [1, 1]]
    mesh = build_indexed_mesh(VERTS, [[0, 1, 4]], texcoords=texcoords,
                              texcoord_faces=[[2, 1, 0]])
    assert mesh["texcoords"] == [1.0, 1.0, 1.0, 0.0, 0.0, 0.0]


def test_bad_faces_are_dropped_with_warnings():
    with capture_log() as records:
        mesh = build_indexed_mesh(VERTS, [[0, 1], [0, 1, 9], [0, 1, 2]])
    assert len(mesh["indices"]) == 3
    assert len([r for r in records if r[0] == "Warning"]) == 2


def test_mesh_without_triangles_is_an_error():
    with pytest.raises(GeometryError):
        build_indexed_mesh(VERTS, [[0, 1]])


def test_repeated_vertex_is_collapsed_before_clipping():
    points = [[0, 0, 0], [1, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]]
    with capture_log() as records:
        triangles = ear_clip(points)
    assert len(triangles) == 2
    assert sum(_area2d(points, t) for t in triangles) == pytest.approx(1.0)
    assert 2 not in {i for tri in triangles for i in tri}
    assert not any("fanning" in msg for _, msg in records)


def test_closing_vertex_equal_to_first_is_collapsed():
    triangles = ear_clip(SQUARE + [SQUARE[0]])
    assert len(triangles) == 2
    assert {i for tri in triangles for i in tri} == {0, 1, 2, 3}


def test_face_of_one_repeated_point_is_an_error():
    with pytest.raises(GeometryError):
        ear_clip([[1, 1, 1]] * 4)
