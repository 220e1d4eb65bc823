# quickmesh/errors.py
"""
Коды ошибок загрузчика и исключение, которым их пробрасывают.

Внутренние компоненты (токенизатор, буферы, построитель мешей, парсер MTL)
бросают ``LoadError`` в месте обнаружения проблемы.  Перехватывает его
только оркестратор в ``quickmesh.loader``: он освобождает всё, что успел
построить, и отдаёт вызывающему ровно один код ошибки.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Коды, общие для загрузчика OBJ и загрузчика MTL."""
    SUCCESS = 0
    INVALID_FILE = 1          # неверное расширение или битое содержимое
    IO_ERROR = 2              # файл не открывается
    OUT_OF_MEMORY = 3         # не удалось (пере)выделить буфер
    UNSUPPORTED_COMMAND = 4   # неизвестная команда верхнего уровня


class LoadError(Exception):
    """Ошибка загрузки с кодом ``ErrorCode``."""

    def __init__(self, code: ErrorCode, message: str = "") -> None:
        super().__init__(message or code.name)
        self.code = code
        self.message = message or code.name

    def __str__(self) -> str:
        return f"{self.code.name}: {self.message}"


def invalid_file(message: str) -> LoadError:
    return LoadError(ErrorCode.INVALID_FILE, message)


def unsupported_command(command: str) -> LoadError:
    return LoadError(ErrorCode.UNSUPPORTED_COMMAND, f"unsupported command '{command}'")
