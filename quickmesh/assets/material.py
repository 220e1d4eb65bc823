# -*- coding: utf-8 -*-
"""
Материал из ``.mtl`` (не PBR): цвета Ka/Kd/Ks, прозрачность, показатель
блеска, коэффициент преломления и пути к картам.

Карты хранятся только как строки путей – декодировать изображения
должен тот, кто будет их загружать в GPU.  ``None`` означает «карты нет».
"""

from __future__ import annotations

Color = tuple[float, float, float]

BLACK: Color = (0.0, 0.0, 0.0)


class Material:
    """Параметры одного материала, ключ – ``name`` из ``newmtl``."""

    def __init__(
        self,
        name: str,
        ambient_color: Color = BLACK,
        diffuse_color: Color = BLACK,
        specular_color: Color = BLACK,
        ambient_map: str | None = None,
        diffuse_map: str | None = None,
        specular_map: str | None = None,
        normal_map: str | None = None,
        opacity: float = 1.0,
        specular_exp: float = 1.0,
        refraction_index: float = 1.0,
    ) -> None:
        self.name = name

        self.ambient_color = ambient_color
        self.diffuse_color = diffuse_color
        self.specular_color = specular_color

        self.ambient_map = ambient_map
        self.diffuse_map = diffuse_map
        self.specular_map = specular_map
        self.normal_map = normal_map

        self.opacity = opacity
        self.specular_exp = specular_exp
        self.refraction_index = refraction_index

    @classmethod
    def default(cls, name: str) -> "Material":
        """Материал сразу после ``newmtl``: всё по‑умолчанию."""
        return cls(
            name,
            ambient_color=BLACK,
            diffuse_color=BLACK,
            specular_color=BLACK,
            opacity=1.0,
            specular_exp=1.0,
            refraction_index=1.0,
        )

    def __repr__(self) -> str:
        return f"Material({self.name!r}, Kd={self.diffuse_color}, d={self.opacity})"

    # -------------------------------------------------------------
    @property
    def texture_paths(self) -> dict[str, str]:
        """Только заданные карты: ``{"ambient": path, ...}``."""
        maps = {
            "ambient": self.ambient_map,
            "diffuse": self.diffuse_map,
            "specular": self.specular_map,
            "normal": self.normal_map,
        }
        return {kind: path for kind, path in maps.items() if path is not None}

    def release(self) -> None:
        self.ambient_map = None
        self.diffuse_map = None
        self.specular_map = None
        self.normal_map = None
