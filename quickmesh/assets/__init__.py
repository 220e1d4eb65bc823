# quickmesh/assets/__init__.py
"""Пакет с материалами и парсером MTL."""
from quickmesh.assets.material import Material
from quickmesh.assets.mtl_parser import MtlParser

__all__ = ["Material", "MtlParser"]
