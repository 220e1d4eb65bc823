# -*- coding: utf-8 -*-
"""
conftest.py – общие фикстуры: запись OBJ/MTL‑текста во временные файлы
и конфигурация с маленькой начальной ёмкостью (чтобы тесты проходили
через все ветки роста буферов и перехэширования).
"""

import json
import textwrap

import pytest

from quickmesh.utils.config import Config


CUBE_OBJ = """\
# unit cube
o Cube
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
v 0 0 1
v 1 0 1
v 1 1 1
v 0 1 1
s off
f 1 2 3 4
f 5 8 7 6
f 1 5 6 2
f 2 6 7 3
f 3 7 8 4
f 5 1 4 8
"""


@pytest.fixture(autouse=True)
def _fresh_config():
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def write_file(tmp_path):
    """Записать текст (с убранным отступом) в ``tmp_path / name``."""
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def small_config(tmp_path):
    path = tmp_path / "quickmesh.json"
    path.write_text(json.dumps({"initial_capacity": 2}), encoding="utf-8")
    return Config(str(path))


@pytest.fixture
def cube_path(write_file):
    return write_file("cube.obj", CUBE_OBJ)
