# -*- coding: utf-8 -*-
"""
Командный цикл по грамматике ``.mtl``.

``newmtl`` открывает новый материал (со значениями по‑умолчанию) и
делает его текущим; остальные команды пишут в текущий материал.
``illum``, ``Tf`` и комментарии пропускаются, любая другая неизвестная
команда – ``UNSUPPORTED_COMMAND``.
"""

from __future__ import annotations

from quickmesh.assets.material import Material
from quickmesh.errors import invalid_file, unsupported_command
from quickmesh.utils.tokenizer import EOF, Tokenizer

_IGNORED = {"illum", "Tf"}

_COLOR_FIELDS = {
    "Ka": "ambient_color",
    "Kd": "diffuse_color",
    "Ks": "specular_color",
}

_SCALAR_FIELDS = {
    "d": "opacity",
    "Ns": "specular_exp",
    "Ni": "refraction_index",
}

_MAP_FIELDS = {
    "map_Ka": "ambient_map",
    "map_Kd": "diffuse_map",
    "map_Ks": "specular_map",
    "map_Bump": "normal_map",
    "map_bump": "normal_map",
    "bump": "normal_map",
}


def parse_floats(args: str, count: int, command: str, extra: bool = False) -> list[float]:
    """
    Прочитать ``count`` чисел из аргументов команды.  Лишние значения
    допустимы только при ``extra=True`` (и отбрасываются).
    """
    values = args.split()
    if len(values) < count or (len(values) > count and not extra):
        raise invalid_file(f"'{command}' expects {count} numbers, got '{args}'")
    try:
        return [float(v) for v in values[:count]]
    except ValueError as exc:
        raise invalid_file(f"'{command}': {exc}") from exc


class MtlParser:
    """Разбирает один MTL‑поток в список ``Material``."""

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer
        self.materials: list[Material] = []
        self.current: Material | None = None

    def _require_current(self, command: str) -> Material:
        if self.current is None:
            raise invalid_file(f"'{command}' before any 'newmtl'")
        return self.current

    # -------------------------------------------------------------
    def run(self) -> list[Material]:
        while True:
            token, end = self.tokenizer.next_token()
            if token:
                self.dispatch(token, end)
            if end == EOF:
                break
        return self.materials

    def dispatch(self, command: str, end: str) -> None:
        args = self.tokenizer.remainder_after(end)

        if command.startswith("#") or command in _IGNORED:
            return

        if command == "newmtl":
            if not args:
                raise invalid_file("'newmtl' without a name")
            self.current = Material.default(args)
            self.materials.append(self.current)
        elif command in _COLOR_FIELDS:
            material = self._require_current(command)
            setattr(material, _COLOR_FIELDS[command], tuple(parse_floats(args, 3, command)))
        elif command in _SCALAR_FIELDS:
            material = self._require_current(command)
            setattr(material, _SCALAR_FIELDS[command], parse_floats(args, 1, command)[0])
        elif command in _MAP_FIELDS:
            material = self._require_current(command)
            if not args:
                raise invalid_file(f"'{command}' without a path")
            setattr(material, _MAP_FIELDS[command], args)
        else:
            raise unsupported_command(command)
