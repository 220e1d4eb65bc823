# -*- coding: utf-8 -*-
"""
Готовый к отрисовке меш: один материал, чередующиеся (interleaved)
вершины и треугольный индекс‑буфер.

Порядок атрибутов внутри вершины фиксирован: позиция (3 float),
нормаль (3 float), текстурные координаты (2 float) – отсутствующие
атрибуты просто не занимают места.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

ATTRIB_SIZE_POSITION = 3
ATTRIB_SIZE_NORMAL = 3
ATTRIB_SIZE_TEX_COORDS = 2


class VertexLayout(Enum):
    """
    Четыре допустимых набора атрибутов.  Значение – ``(has_tex, has_normal)``;
    позиция есть всегда.
    """
    POSITION = (False, False)
    POSITION_TEX_COORD = (True, False)
    POSITION_NORMAL = (False, True)
    POSITION_TEX_COORD_NORMAL = (True, True)

    @property
    def has_tex_coords(self) -> bool:
        return self.value[0]

    @property
    def has_normals(self) -> bool:
        return self.value[1]

    @property
    def stride(self) -> int:
        return _LAYOUT_TABLE[self][0]

    @property
    def position_offset(self) -> int:
        return _LAYOUT_TABLE[self][1]

    @property
    def normal_offset(self):
        return _LAYOUT_TABLE[self][2]

    @property
    def tex_coord_offset(self):
        return _LAYOUT_TABLE[self][3]


def _build_layout_table():
    table = {}
    for layout in VertexLayout:
        has_tex, has_normal = layout.value
        stride = ATTRIB_SIZE_POSITION
        normal_offset = None
        tex_offset = None
        if has_normal:
            normal_offset = stride
            stride += ATTRIB_SIZE_NORMAL
        if has_tex:
            tex_offset = stride
            stride += ATTRIB_SIZE_TEX_COORDS
        table[layout] = (stride, 0, normal_offset, tex_offset)
    return table

# (stride, pos offset, normal offset | None, tex offset | None)
_LAYOUT_TABLE = _build_layout_table()


class Mesh:
    """Меш с одним материалом, содержит только треугольники."""

    def __init__(self,
                 layout: VertexLayout,
                 vertices: np.ndarray,
                 indices: np.ndarray,
                 material: str | None = None):
        self.layout = layout
        self.stride = layout.stride
        self.position_offset = layout.position_offset
        self.normal_offset = layout.normal_offset
        self.tex_coord_offset = layout.tex_coord_offset

        self.vertices = np.asarray(vertices, dtype=np.float32).reshape(-1)
        self.indices = np.asarray(indices, dtype=np.uint32).reshape(-1)
        self.material = material

    def __repr__(self) -> str:
        return (f"Mesh(material={self.material!r}, layout={self.layout.name}, "
                f"vertices={self.num_vertices}, triangles={self.num_triangles})")

    # -----------------------------------------------------------------
    @property
    def num_vertices(self) -> int:
        if self.vertices is None:
            return 0
        return len(self.vertices) // self.stride

    @property
    def num_indices(self) -> int:
        return 0 if self.indices is None else len(self.indices)

    @property
    def num_triangles(self) -> int:
        return self.num_indices // 3

    @property
    def triangles(self) -> np.ndarray:
        """Индексы формы ``(n, 3)``."""
        return self.indices.reshape(-1, 3)

    # -----------------------------------------------------------------
    def _attribute(self, offset, size):
        if offset is None:
            return None
        table = self.vertices.reshape(-1, self.stride)
        return table[:, offset:offset + size]

    @property
    def positions(self) -> np.ndarray:
        return self._attribute(self.position_offset, ATTRIB_SIZE_POSITION)

    @property
    def normals(self):
        return self._attribute(self.normal_offset, ATTRIB_SIZE_NORMAL)

    @property
    def texcoords(self):
        return self._attribute(self.tex_coord_offset, ATTRIB_SIZE_TEX_COORDS)

    # -----------------------------------------------------------------
    @property
    def bounding_sphere(self) -> tuple[np.ndarray, float]:
        """(центр, радиус) в локальных координатах меша."""
        verts = self.positions
        if verts is None or len(verts) == 0:
            return np.zeros(3, dtype=np.float32), 0.0
        centre = verts.mean(axis=0).astype(np.float32)
        radius = float(np.linalg.norm(verts - centre, axis=1).max())
        return centre, radius

    # -----------------------------------------------------------------
    def release(self):
        """Отпустить буферы меша."""
        self.vertices = None
        self.indices = None
