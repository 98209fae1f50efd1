from vrscene import ParserParams
from vrscene.parsers.vr_parser.scene_nodes import DEFAULT_GRAY, Scene, SceneObject
from vrscene.parsers.vr_parser.scene_pass import finish_scene


def test_materialless_object_gets_default_gray(parse):
    obj = parse("object { view { SPHERE 1 } }").objects[0]
    assert len(obj.materials) == 1
    assert obj.materials[0].diffuse == list(DEFAULT_GRAY)
    assert obj.materials[0].ambient == [0, 0, 0]
    assert obj.views[0].material is obj.materials[0]


def test_flat_default_ignores_parent_materials(parse):
    parent = parse("object { material rgb 1 0 0 object { } }").objects[0]
    child = parent.children[0]
    assert parent.materials[0].diffuse == [1, 0, 0]
    assert child.materials[0].diffuse == list(DEFAULT_GRAY)


def test_inherit_materials_copies_nearest_ancestor(parse):
    scene = parse("""
        object {
            material rgb 1 0 0
            object {
                object { view { SPHERE 1 } }
            }
        }
    """, params=ParserParams(inherit_materials=True))
    parent = scene.objects[0]
    grandchild = parent.children[0].children[0]
    assert grandchild.materials[0].diffuse == [1, 0, 0]
    assert grandchild.materials[0] is not parent.materials[0]
    assert grandchild.views[0].material.diffuse == [1, 0, 0]


def test_material_and_texture_index_resolution(parse):
    scene = parse("""
        object {
            material rgb 1 0 0
            material rgb 0 1 0
            texture "a.gif"
            texture "b.gif"
            view { material_index 1 texture_index 1 SPHERE 1 }
            view 3 { material_index 7 RBOX 0 0 0 1 1 1 }
            view { SPHERE 2 }
        }
    """)
    first, second, third = scene.objects[0].views
    assert first.material.diffuse == [0, 1, 0]
    assert first.texture == "b.gif"
    assert second.material.diffuse == [1, 0, 0]
    assert second.material_index == 7
    assert second.view_index == 3
    assert third.material.diffuse == [1, 0, 0]
    assert third.texture == "a.gif"
    assert any("out of range" in w for w in scene.warnings)


def test_material_declared_after_view_is_honored(parse):
    obj = parse("""
        object {
            view { material_index 1 SPHERE 1 }
            material rgb 1 0 0
            material rgb 0 0 1
        }
    """).objects[0]
    assert obj.views[0].material.diffuse == [0, 0, 1]


def test_no_textures_leaves_texture_unset(parse):
    view = parse("object { view { texture_index 0 SPHERE 1 } }").objects[0].views[0]
    assert view.texture is None


def test_pass_is_idempotent():
    scene = Scene(objects=[SceneObject(children=[SceneObject()])])
    finish_scene(scene, ParserParams())
    finish_scene(scene, ParserParams())
    assert len(scene.objects[0].materials) == 1
    assert len(scene.objects[0].children[0].materials) == 1
