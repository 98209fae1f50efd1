import pytest

from vrscene import MATERIAL_TABLE
from vrscene.logger import capture_log
from vrscene.parsers.vr_parser.materials import lookup_material
from vrscene.parsers.vr_parser.scene_nodes import DEFAULT_GRAY


def _materials(parse, body):
    return parse("object { %s }" % body).objects[0].materials


def test_rgb_sets_ambient_and_diffuse(parse):
    (mat,) = _materials(parse, "material rgb 0.2 0.4 0.6")
    assert mat.ambient == [0.2, 0.4, 0.6]
    assert mat.diffuse == [0.2, 0.4, 0.6]
    assert mat.emission == [0, 0, 0]


def test_named_material(parse):
    (mat,) = _materials(parse, 'material "red"')
    assert mat.diffuse == [1.0, 0.0, 0.0]
    assert mat.name == "red"


def test_named_material_is_case_insensitive(parse):
    (mat,) = _materials(parse, 'material "Gold"')
    assert mat.diffuse == MATERIAL_TABLE["gold"].diffuse
    assert mat.name == "Gold"


def test_unknown_name_defaults_to_gray_with_warning(parse):
    scene = parse('object { material "unobtainium" }')
    (mat,) = scene.objects[0].materials
    assert mat.diffuse == list(DEFAULT_GRAY)
    assert any("unobtainium" in w for w in scene.warnings)


def test_block_form(parse):
    (mat,) = _materials(parse, """
        material {
            ambient 0.1 0.1 0.1
            diffuse v 0.2 0.3 0.4
            emission 0 0 0.5
            specular 1 1 1
            spec_power 0.75
            transparency 0.25
        }
    """)
    assert mat.ambient == [0.1, 0.1, 0.1]
    assert mat.diffuse == [0.2, 0.3, 0.4]
    assert mat.emission == [0, 0, 0.5]
    assert mat.specular == [1, 1, 1]
    assert mat.spec_power == 0.75
    assert mat.transparency == 0.25


def test_named_base_with_block_override(parse):
    (mat,) = _materials(parse, 'material "blue" { transparency 0.5 }')
    assert mat.diffuse == [0.0, 0.0, 1.0]
    assert mat.transparency == 0.5


def test_out_of_range_values_are_clamped(parse):
    scene = parse("object { material { transparency 2 diffuse -1 0.5 3 } }")
    (mat,) = scene.objects[0].materials
    assert mat.transparency == 1.0
    assert mat.diffuse == [0.0, 0.5, 1.0]
    assert len([w for w in scene.warnings if "clamped" in w]) == 3


def test_bad_property_skipped_rest_applied(parse):
    scene = parse("object { material { diffuse 1 1 ambient 0.3 0.3 0.3 } }")
    (mat,) = scene.objects[0].materials
    assert mat.diffuse == list(DEFAULT_GRAY)
    assert mat.ambient == [0.3, 0.3, 0.3]
    assert any("diffuse" in w for w in scene.warnings)


def test_materials_are_positional(parse):
    mats = _materials(parse, 'material rgb 1 0 0 material "green" material { }')
    assert [m.diffuse for m in mats] == [[1, 0, 0], [0, 1, 0], list(DEFAULT_GRAY)]


def test_bad_material_form_is_skipped(parse):
    scene = parse("object { material 5 view { SPHERE 1 } }")
    obj = scene.objects[0]
    assert len(obj.views) == 1
    assert scene.warnings


def test_lookup_returns_independent_copies():
    a = lookup_material("red")
    a.diffuse[1] = 1.0
    assert lookup_material("red").diffuse == [1.0, 0.0, 0.0]
    assert MATERIAL_TABLE["red"].diffuse == [1.0, 0.0, 0.0]


def test_lookup_with_custom_table_falls_back():
    with capture_log() as records:
        mat = lookup_material("red", table={})
    assert mat.diffuse == list(DEFAULT_GRAY)
    assert records and records[0][0] == "Warning"


@pytest.mark.parametrize("name", sorted(MATERIAL_TABLE))
def test_table_entries_are_in_unit_range(name):
    mat = MATERIAL_TABLE[name]
    for color in (mat.ambient, mat.diffuse, mat.emission, mat.specular):
        assert all(0.0 <= c <= 1.0 for c in color)
    assert 0.0 <= mat.spec_power <= 1.0
    assert 0.0 <= mat.transparency <= 1.0
