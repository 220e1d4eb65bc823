# -*- coding: utf-8 -*-
import json

from quickmesh import Config, ErrorCode, load_geometry, load_model
from quickmesh.__main__ import _main


MODEL_OBJ = """\
mtllib model.mtl
v 0 0 0
v 1 0 0
v 0 1 0
v 1 1 0
usemtl Red
f 1 2 3
usemtl Blue
f 2 4 3
"""

MODEL_MTL = """\
newmtl Red
Kd 1 0 0
newmtl Blue
Kd 0 0 1
"""


def test_load_model_follows_mtllib(write_file):
    write_file("model.mtl", MODEL_MTL)
    path = write_file("model.obj", MODEL_OBJ)
    meshes, materials, code = load_model(path)
    assert code == ErrorCode.SUCCESS
    assert [m.material for m in meshes] == ["Red", "Blue"]
    assert [m.name for m in materials] == ["Red", "Blue"]


def test_load_model_missing_library(write_file):
    path = write_file("model.obj", MODEL_OBJ)
    assert load_model(path) == ([], [], ErrorCode.IO_ERROR)


def test_load_model_bad_library(write_file):
    write_file("model.mtl", "newmtl Red\nxyz\n")
    path = write_file("model.obj", MODEL_OBJ)
    assert load_model(path) == ([], [], ErrorCode.UNSUPPORTED_COMMAND)


def test_config_defaults(tmp_path):
    config = Config(str(tmp_path / "absent.json"))
    assert config.max_token_len == 128
    assert config.initial_capacity == 32
    assert config["log_level"] == "INFO"
    assert Config(str(tmp_path / "absent.json")) is config


def test_config_bad_json_falls_back(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    config = Config(str(path))
    assert config.max_token_len == 128


def test_config_save_roundtrip(tmp_path):
    path = tmp_path / "cfg.json"
    config = Config(str(path))
    config["max_token_len"] = 8
    config.save()
    assert json.loads(path.read_text(encoding="utf-8"))["max_token_len"] == 8


def test_config_token_limit_applies(tmp_path, write_file):
    cfg_path = tmp_path / "limit.json"
    cfg_path.write_text(json.dumps({"max_token_len": 4}), encoding="utf-8")
    config = Config(str(cfg_path))
    path = write_file("long.obj", "mtllib x.mtl\n")
    assert load_geometry(path, config) == ([], ErrorCode.INVALID_FILE)


def test_cli_summary(write_file, capsys):
    write_file("model.mtl", MODEL_MTL)
    path = write_file("model.obj", MODEL_OBJ)
    assert _main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "material='Red'" in out
    assert "material 'Blue'" in out


def test_cli_error_code(write_file, capsys):
    path = write_file("bad.obj", "xyz\n")
    assert _main([str(path)]) == int(ErrorCode.UNSUPPORTED_COMMAND)
    assert "UNSUPPORTED_COMMAND" in capsys.readouterr().err


def test_cli_picks_material_grammar_by_suffix(write_file, capsys):
    path = write_file("model.mtl", MODEL_MTL)
    assert _main([str(path), "-v"]) == 0
    out = capsys.readouterr().out
    assert "material 'Red'" in out
    assert "mesh " not in out
