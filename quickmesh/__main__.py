"""
Консольная обёртка: ``python -m quickmesh model.obj`` печатает сводку
по мешам (или материалам для ``.mtl``).  Код возврата = ``ErrorCode``.
"""

import sys
from argparse import ArgumentParser
from pathlib import Path

from quickmesh.errors import ErrorCode
from quickmesh.loader import load_materials, load_model, release_geometry, release_materials
from quickmesh.utils.config import Config
from quickmesh.utils.logger import set_log_level


def _main(argv=None) -> int:
    parser = ArgumentParser(prog="quickmesh", description="Inspect Wavefront OBJ/MTL files")
    parser.add_argument("path", type=Path, help=".obj or .mtl file")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    config = Config(str(args.config)) if args.config else Config()
    if args.verbose:
        set_log_level("DEBUG")

    if args.path.suffix.lower() == ".mtl":
        materials, code = load_materials(args.path, config)
        meshes = []
    else:
        meshes, materials, code = load_model(args.path, config)

    if code != ErrorCode.SUCCESS:
        print(f"{args.path}: {code.name}", file=sys.stderr)
        return int(code)

    for mesh in meshes:
        print(f"mesh  material={mesh.material!r} layout={mesh.layout.name} "
              f"vertices={mesh.num_vertices} triangles={mesh.num_triangles}")
    for material in materials:
        print(f"material {material.name!r} Kd={material.diffuse_color} "
              f"maps={material.texture_paths}")

    release_geometry(meshes)
    release_materials(materials)
    return int(ErrorCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(_main())
