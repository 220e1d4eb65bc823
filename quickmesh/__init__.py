"""
QuickMesh – загрузчик Wavefront OBJ/MTL в буферы, готовые к отрисовке.
Один меш на материал (interleaved float32 вершины + uint32 индексы)
и список материалов.
"""

from quickmesh.utils import logger
from quickmesh.errors import ErrorCode, LoadError
from quickmesh.mesh import Mesh, VertexLayout
from quickmesh.assets.material import Material
from quickmesh.utils.config import Config
from quickmesh.loader import (
    load_geometry,
    load_materials,
    load_model,
    parse_obj,
    parse_mtl,
    release_geometry,
    release_materials,
)

__version__ = "1.0.0"

__all__ = [
    "ErrorCode",
    "LoadError",
    "Mesh",
    "VertexLayout",
    "Material",
    "Config",
    "load_geometry",
    "load_materials",
    "load_model",
    "parse_obj",
    "parse_mtl",
    "release_geometry",
    "release_materials",
]
