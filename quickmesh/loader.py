# -*- coding: utf-8 -*-
"""
Загрузчик Wavefront ``.obj`` / ``.mtl`` – один проход, один результат.

Два уровня API:

* ``parse_obj`` / ``parse_mtl`` работают с уже открытым текстовым потоком
  и бросают ``LoadError`` при первой же ошибке;
* ``load_geometry`` / ``load_materials`` / ``load_model`` принимают путь,
  проверяют расширение, открывают файл и никогда не бросают исключений
  загрузки – возвращают ``([], code)`` при ошибке и ``(items, SUCCESS)``
  при успехе.

Рабочее состояние (сырые пулы, карты дедупликации, растущие буферы
мешей) принадлежит объекту‑оркестратору и освобождается в ``__exit__``
при любом исходе; при ошибке вместе с ним освобождаются и все меши,
построенные к этому моменту.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from quickmesh.assets.material import Material
from quickmesh.assets.mtl_parser import MtlParser, parse_floats
from quickmesh.errors import ErrorCode, LoadError, invalid_file, unsupported_command
from quickmesh.mesh.builder import AttributePools, MeshBuilder, parse_face
from quickmesh.mesh.mesh import Mesh
from quickmesh.utils.config import Config
from quickmesh.utils.logger import logger
from quickmesh.utils.profiler import Profiler
from quickmesh.utils.tokenizer import EOF, NEWLINE, Tokenizer

# команды, у которых пропускается остаток строки
_IGNORED = {"o", "g", "s"}


class LoadState(Enum):
    IDLE = "idle"
    READING = "reading"
    SUCCESS = "success"
    FAILED = "failed"


# ---------------------------------------------------------------------
# Оркестратор OBJ
# ---------------------------------------------------------------------
class ObjLoader:
    """
    Командный цикл по грамматике ``.obj``.

    Используется как контекст‑менеджер::

        with ObjLoader(stream) as loader:
            meshes = loader.run()
    """

    def __init__(self, stream, config: Config | None = None, on_mtllib=None):
        self.config = config if config is not None else Config()
        self.tokenizer = Tokenizer(stream, self.config.max_token_len)
        self.on_mtllib = on_mtllib
        self.state = LoadState.IDLE

        self.pools: AttributePools | None = None
        self.builders: list[MeshBuilder] = []
        self.meshes: list[Mesh] = []

        # активный материал меняет только usemtl; None – «ещё не задан»
        self.material: str | None = None
        self.active: MeshBuilder | None = None

    # -----------------------------------------------------------------
    def __enter__(self):
        self.state = LoadState.READING
        try:
            self.pools = AttributePools(self.config.initial_capacity)
        except MemoryError as exc:
            self.state = LoadState.FAILED
            raise LoadError(ErrorCode.OUT_OF_MEMORY, "failed to allocate attribute pools") from exc
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.state = LoadState.FAILED
            for mesh in self.meshes:
                mesh.release()
            self.meshes = []
        self._release_scratch()
        return False

    def _release_scratch(self) -> None:
        if self.pools is not None:
            self.pools.release()
            self.pools = None
        for builder in self.builders:
            builder.release()
        self.builders = []
        self.active = None

    # -----------------------------------------------------------------
    def run(self) -> list[Mesh]:
        """Прочитать поток до конца и вернуть меши (по одному на материал)."""
        try:
            while True:
                token, end = self.tokenizer.next_token()
                if token:
                    self.dispatch(token, end)
                if end == EOF:
                    break
            for builder in self.builders:
                logger.debug(f"[Loader] Mesh {builder.material!r}: {builder.num_vertices} vertices, "
                             f"{builder.num_triangles} triangles")
            self.meshes = [builder.build() for builder in self.builders]
        except MemoryError as exc:
            raise LoadError(ErrorCode.OUT_OF_MEMORY, "out of memory while parsing") from exc
        except LoadError as exc:
            if exc.code != ErrorCode.OUT_OF_MEMORY:
                exc.message = f"line {self.tokenizer.line_number}: {exc.message}"
            raise
        self.state = LoadState.SUCCESS
        return self.meshes

    def dispatch(self, command: str, end: str) -> None:
        if command.startswith("#") or command in _IGNORED:
            self.tokenizer.remainder_after(end)
        elif command == "v":
            self.pools.positions.append(self._floats(end, 3, command))
        elif command == "vn":
            self.pools.normals.append(self._floats(end, 3, command))
        elif command == "vt":
            # третья координата (w) допустима, но не используется
            self.pools.tex_coords.append(self._floats(end, 2, command))
        elif command == "f":
            self._face(end)
        elif command == "usemtl":
            self.material = self.tokenizer.remainder_after(end)
            self.active = None
        elif command == "mtllib":
            library = self.tokenizer.remainder_after(end)
            if self.on_mtllib is not None and library:
                self.on_mtllib(library)
        else:
            raise unsupported_command(command)

    # -----------------------------------------------------------------
    def _floats(self, end: str, count: int, command: str) -> list[float]:
        return parse_floats(self.tokenizer.remainder_after(end), count, command, extra=True)

    def _face(self, end: str) -> None:
        if end in (NEWLINE, EOF):
            raise invalid_file("face declaration without vertices")
        layout, refs = parse_face(self.tokenizer.read_line_remainder(), self.pools)
        if self.active is None:
            self.active = self._find_or_create(layout)
        self.active.add_face(layout, refs, self.pools)

    def _find_or_create(self, layout) -> MeshBuilder:
        for builder in self.builders:
            if builder.material == self.material:
                return builder
        builder = MeshBuilder(self.material, layout, self.config.initial_capacity)
        self.builders.append(builder)
        logger.debug(f"[Loader] New mesh for material {self.material!r} ({layout.name})")
        return builder


# ---------------------------------------------------------------------
# Потоковый API
# ---------------------------------------------------------------------
def parse_obj(stream, config: Config | None = None, on_mtllib=None) -> list[Mesh]:
    """
    Разобрать открытый OBJ‑поток.  ``mtllib`` ядро пропускает; если задан
    ``on_mtllib``, его аргумент передаётся в этот callback.
    """
    with ObjLoader(stream, config, on_mtllib) as loader:
        return loader.run()


def parse_mtl(stream, config: Config | None = None) -> list[Material]:
    """Разобрать открытый MTL‑поток."""
    config = config if config is not None else Config()
    parser = MtlParser(Tokenizer(stream, config.max_token_len))
    try:
        return parser.run()
    except MemoryError as exc:
        release_materials(parser.materials)
        raise LoadError(ErrorCode.OUT_OF_MEMORY, "out of memory while parsing") from exc
    except LoadError as exc:
        release_materials(parser.materials)
        exc.message = f"line {parser.tokenizer.line_number}: {exc.message}"
        raise


# ---------------------------------------------------------------------
# API по пути к файлу
# ---------------------------------------------------------------------
def _load(path, suffix: str, parse, config):
    path = Path(path)
    if path.suffix.lower() != suffix:
        logger.error(f"[Loader] {path}: expected a '{suffix}' file")
        return [], ErrorCode.INVALID_FILE
    try:
        stream = path.open("r", encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        logger.error(f"[Loader] Cannot open {path}: {exc}")
        return [], ErrorCode.IO_ERROR

    with stream, Profiler(f"load {path.name}"):
        try:
            items = parse(stream, config)
        except LoadError as exc:
            logger.error(f"[Loader] Failed to load {path}: {exc}")
            return [], exc.code
        except OSError as exc:
            logger.error(f"[Loader] Read error in {path}: {exc}")
            return [], ErrorCode.IO_ERROR

    logger.debug(f"[Loader] Loaded {len(items)} item(s) from {path}")
    return items, ErrorCode.SUCCESS


def load_geometry(path, config: Config | None = None) -> tuple[list[Mesh], ErrorCode]:
    """Загрузить ``.obj``: ``(meshes, ErrorCode)``; при ошибке список пуст."""
    return _load(path, ".obj", parse_obj, config)


def load_materials(path, config: Config | None = None) -> tuple[list[Material], ErrorCode]:
    """Загрузить ``.mtl``: ``(materials, ErrorCode)``; при ошибке список пуст."""
    return _load(path, ".mtl", parse_mtl, config)


def _library_paths(base: Path, argument: str) -> list[Path]:
    whole = base / argument
    if whole.is_file():
        return [whole]
    return [base / name for name in argument.split()]


def load_model(path, config: Config | None = None):
    """
    Загрузить ``.obj`` вместе со всеми ``mtllib``, на которые он ссылается
    (пути считаются относительно каталога ``.obj``).

    Возвращает ``(meshes, materials, ErrorCode)``; при любой ошибке оба
    списка пусты.
    """
    libraries: list[str] = []

    def parse(stream, cfg):
        return parse_obj(stream, cfg, on_mtllib=libraries.append)

    meshes, code = _load(path, ".obj", parse, config)
    if code != ErrorCode.SUCCESS:
        return [], [], code

    base = Path(path).parent
    materials: list[Material] = []
    for argument in libraries:
        for lib_path in _library_paths(base, argument):
            loaded, code = load_materials(lib_path, config)
            if code != ErrorCode.SUCCESS:
                release_geometry(meshes)
                release_materials(materials)
                return [], [], code
            materials.extend(loaded)
    return meshes, materials, ErrorCode.SUCCESS


def release_geometry(meshes) -> None:
    """Освободить меши; пустая коллекция или ``None`` – no‑op."""
    if not meshes:
        return
    for mesh in meshes:
        mesh.release()
    if isinstance(meshes, list):
        meshes.clear()


def release_materials(materials) -> None:
    """Освободить материалы; пустая коллекция или ``None`` – no‑op."""
    if not materials:
        return
    for material in materials:
        material.release()
    if isinstance(materials, list):
        materials.clear()
