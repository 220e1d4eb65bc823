# -*- coding: utf-8 -*-
"""
Построитель мешей: разбор команды ``f``, разрешение ссылок на вершины,
триангуляция веером и выдача вершин через карту дедупликации.

Формат ссылок (``i``, ``i/j``, ``i//k``, ``i/j/k``) определяется по
первой ссылке грани и обязателен для всех остальных ссылок этой грани,
а через меш – и для всех граней, попавших в тот же меш.

Триангуляция веером корректна только для выпуклых многоугольников с
согласованным обходом; невыпуклые грани дадут неверные треугольники.
"""

from __future__ import annotations

import re

import numpy as np

from quickmesh.containers.buffer import GrowableBuffer
from quickmesh.containers.vertex_map import VertexMap
from quickmesh.errors import invalid_file
from quickmesh.mesh.mesh import (
    ATTRIB_SIZE_NORMAL,
    ATTRIB_SIZE_POSITION,
    ATTRIB_SIZE_TEX_COORDS,
    Mesh,
    VertexLayout,
)

_INT_RE = re.compile(r"[+-]?\d+\Z")


class AttributePools:
    """Сырые пулы ``v`` / ``vn`` / ``vt`` в порядке появления в файле."""

    def __init__(self, capacity: int = 32):
        self.positions = GrowableBuffer(np.float32, ATTRIB_SIZE_POSITION, capacity, "positions")
        self.normals = GrowableBuffer(np.float32, ATTRIB_SIZE_NORMAL, capacity, "normals")
        self.tex_coords = GrowableBuffer(np.float32, ATTRIB_SIZE_TEX_COORDS, capacity, "tex coords")

    def release(self):
        self.positions.release()
        self.normals.release()
        self.tex_coords.release()


# ---------------------------------------------------------------------
# Ссылки на вершины
# ---------------------------------------------------------------------
def sniff_layout(ref: str) -> VertexLayout:
    """Определить набор атрибутов по шаблону ссылки."""
    parts = ref.split("/")
    if len(parts) == 1:
        return VertexLayout.POSITION
    if len(parts) == 2 and parts[1]:
        return VertexLayout.POSITION_TEX_COORD
    if len(parts) == 3:
        if not parts[1]:
            return VertexLayout.POSITION_NORMAL
        return VertexLayout.POSITION_TEX_COORD_NORMAL
    raise invalid_file(f"malformed vertex reference '{ref}'")


def _parse_int(text: str, ref: str) -> int:
    if not _INT_RE.match(text):
        raise invalid_file(f"malformed vertex index in '{ref}'")
    return int(text)


def parse_vertex_ref(ref: str, layout: VertexLayout) -> tuple[int, int, int]:
    """
    Разобрать одну ссылку в сырую тройку ``(pos, tex, normal)``;
    отсутствующие компоненты равны 0.
    """
    if sniff_layout(ref) is not layout:
        raise invalid_file(f"vertex reference '{ref}' does not match face format {layout.name}")
    parts = ref.split("/")
    pos = _parse_int(parts[0], ref)
    tex = _parse_int(parts[1], ref) if layout.has_tex_coords else 0
    normal = _parse_int(parts[2], ref) if layout.has_normals else 0
    return pos, tex, normal


def resolve_index(value: int, pool_size: int, what: str) -> int:
    """
    Отрицательный индекс считается от конца пула (``-1`` – последний
    элемент на данный момент).  Результат обязан лежать в ``[1, pool_size]``.
    """
    if value < 0:
        value = pool_size + value + 1
    if value < 1 or value > pool_size:
        raise invalid_file(f"{what} index out of range (pool holds {pool_size})")
    return value


def resolve_vertex_ref(ref, layout: VertexLayout, pools: AttributePools) -> tuple[int, int, int]:
    pos, tex, normal = ref
    pos = resolve_index(pos, len(pools.positions), "position")
    if layout.has_tex_coords:
        tex = resolve_index(tex, len(pools.tex_coords), "tex coord")
    if layout.has_normals:
        normal = resolve_index(normal, len(pools.normals), "normal")
    return pos, tex, normal


def parse_face(args: str, pools: AttributePools) -> tuple[VertexLayout, list]:
    """
    Разобрать аргументы ``f``: вернуть формат грани и список уже
    разрешённых ссылок (не меньше трёх).
    """
    refs = args.split()
    if len(refs) < 3:
        raise invalid_file(f"face needs at least 3 vertices, got {len(refs)}")
    layout = sniff_layout(refs[0])
    resolved = [
        resolve_vertex_ref(parse_vertex_ref(ref, layout), layout, pools)
        for ref in refs
    ]
    return layout, resolved


def fan_triangles(refs):
    """Веер: ``(pivot, prev, cur)`` для каждой пары соседних вершин после первой."""
    pivot = refs[0]
    for prev, cur in zip(refs[1:-1], refs[2:]):
        yield pivot, prev, cur


# ---------------------------------------------------------------------
# Построитель одного меша
# ---------------------------------------------------------------------
class MeshBuilder:
    """Накапливает вершины/индексы одного материала во время загрузки."""

    def __init__(self, material: str | None, layout: VertexLayout, capacity: int = 32):
        self.material = material
        self.layout = layout
        self._vertices = GrowableBuffer(np.float32, layout.stride, capacity, "mesh vertices")
        self._indices = GrowableBuffer(np.uint32, 3, capacity, "mesh indices")
        self._map = VertexMap(capacity)

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_triangles(self) -> int:
        return len(self._indices)

    # -----------------------------------------------------------------
    def add_face(self, layout: VertexLayout, refs, pools: AttributePools) -> None:
        if layout is not self.layout:
            raise invalid_file(
                f"face format {layout.name} differs from mesh format {self.layout.name}"
            )
        for v0, v1, v2 in fan_triangles(refs):
            self.add_triangle(v0, v1, v2, pools)

    def add_triangle(self, v0, v1, v2, pools: AttributePools) -> None:
        self._indices.ensure_capacity(len(self._indices) + 1)
        self._vertices.ensure_capacity(len(self._vertices) + 3)
        tri = (self._emit(v0, pools), self._emit(v1, pools), self._emit(v2, pools))
        self._indices.append(tri)

    def _emit(self, ref, pools: AttributePools) -> int:
        candidate = len(self._vertices)
        index = self._map.get_or_insert(ref, candidate)
        if index == candidate:
            self._vertices.append(self._interleave(ref, pools))
        return index

    def _interleave(self, ref, pools: AttributePools) -> np.ndarray:
        pos, tex, normal = ref
        parts = [pools.positions.row(pos - 1)]
        if self.layout.has_normals:
            parts.append(pools.normals.row(normal - 1))
        if self.layout.has_tex_coords:
            parts.append(pools.tex_coords.row(tex - 1))
        return np.concatenate(parts)

    # -----------------------------------------------------------------
    def build(self) -> Mesh:
        """Сжать буферы до реального размера и отдать готовый ``Mesh``."""
        return Mesh(
            self.layout,
            self._vertices.to_array(),
            self._indices.to_array(),
            self.material,
        )

    def release(self) -> None:
        self._vertices.release()
        self._indices.release()
        self._map.release()
