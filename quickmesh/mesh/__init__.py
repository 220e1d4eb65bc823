"""Меши и их построитель."""
from quickmesh.mesh.mesh import Mesh, VertexLayout
from quickmesh.mesh.builder import MeshBuilder, AttributePools

__all__ = ["Mesh", "VertexLayout", "MeshBuilder", "AttributePools"]
