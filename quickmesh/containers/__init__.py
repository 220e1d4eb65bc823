"""Контейнеры, которыми пользуется загрузчик: растущий буфер и карта вершин."""
from quickmesh.containers.buffer import GrowableBuffer
from quickmesh.containers.vertex_map import VertexMap

__all__ = ["GrowableBuffer", "VertexMap"]
