# -*- coding: utf-8 -*-
import io

import pytest

from quickmesh import ErrorCode, LoadError, Material, load_materials, parse_mtl, release_materials


SCENE_MTL = """\
# two materials
newmtl Red
Ka 0.1 0.0 0.0
Kd 0.8 0.1 0.1
Ks 0.5 0.5 0.5
Ns 96.0
Ni 1.45
d 0.75
illum 2
Tf 1 1 1
map_Kd textures/red diffuse.png
map_Bump textures/red_n.png

newmtl Plain
"""


def test_default_material():
    (mat,) = parse_mtl(io.StringIO("newmtl Foo\n"))
    assert mat.name == "Foo"
    assert mat.opacity == 1.0
    assert mat.specular_exp == 1.0
    assert mat.refraction_index == 1.0
    assert mat.ambient_color == (0.0, 0.0, 0.0)
    assert mat.diffuse_color == (0.0, 0.0, 0.0)
    assert mat.specular_color == (0.0, 0.0, 0.0)
    assert mat.ambient_map is None
    assert mat.diffuse_map is None
    assert mat.specular_map is None
    assert mat.normal_map is None
    assert mat.texture_paths == {}


def test_factory_matches_constructor_defaults():
    a = Material.default("x")
    b = Material("x")
    assert vars(a) == vars(b)


def test_full_material(write_file):
    path = write_file("scene.mtl", SCENE_MTL)
    materials, code = load_materials(path)
    assert code == ErrorCode.SUCCESS
    red, plain = materials
    assert red.ambient_color == pytest.approx((0.1, 0.0, 0.0))
    assert red.diffuse_color == pytest.approx((0.8, 0.1, 0.1))
    assert red.specular_color == pytest.approx((0.5, 0.5, 0.5))
    assert red.specular_exp == pytest.approx(96.0)
    assert red.refraction_index == pytest.approx(1.45)
    assert red.opacity == pytest.approx(0.75)
    assert red.diffuse_map == "textures/red diffuse.png"
    assert red.normal_map == "textures/red_n.png"
    assert red.texture_paths == {
        "diffuse": "textures/red diffuse.png",
        "normal": "textures/red_n.png",
    }
    assert plain.name == "Plain"
    assert plain.opacity == 1.0


def test_map_aliases():
    (mat,) = parse_mtl(io.StringIO("newmtl M\nmap_Ka a.png\nmap_Ks s.png\nbump n.png\n"))
    assert mat.ambient_map == "a.png"
    assert mat.specular_map == "s.png"
    assert mat.normal_map == "n.png"


def test_unsupported_command(write_file):
    path = write_file("bad.mtl", "newmtl M\nKe 1 1 1\n")
    assert load_materials(path) == ([], ErrorCode.UNSUPPORTED_COMMAND)


@pytest.mark.parametrize("text", [
    "Kd 1 1 1\n",
    "newmtl M\nKd 1 1\n",
    "newmtl M\nNs high\n",
    "newmtl M\nmap_Kd\n",
    "newmtl\n",
])
def test_invalid_material_file(text):
    with pytest.raises(LoadError) as info:
        parse_mtl(io.StringIO(text))
    assert info.value.code == ErrorCode.INVALID_FILE


def test_wrong_extension_and_missing_file(write_file, tmp_path):
    path = write_file("scene.obj", "newmtl M\n")
    assert load_materials(path) == ([], ErrorCode.INVALID_FILE)
    assert load_materials(tmp_path / "none.mtl") == ([], ErrorCode.IO_ERROR)


def test_release_materials(write_file):
    materials, _ = load_materials(write_file("scene.mtl", SCENE_MTL))
    release_materials(materials)
    assert materials == []
    release_materials([])
    release_materials(None)


def test_long_separator_comment_is_skipped():
    (mat,) = parse_mtl(io.StringIO("#" + "-" * 140 + "\nnewmtl A\n"))
    assert mat.name == "A"


def test_utf8_bom_is_stripped(tmp_path):
    path = tmp_path / "bom.mtl"
    path.write_bytes(b"\xef\xbb\xbf" + b"newmtl A\nKd 1 0 0\n")
    materials, code = load_materials(path)
    assert code == ErrorCode.SUCCESS
    assert materials[0].diffuse_color == (1.0, 0.0, 0.0)
