# -*- coding: utf-8 -*-
"""
Растущий буфер на numpy: явная ёмкость, удвоение при нехватке места.

numpy‑массив сам не амортизирует рост, поэтому ёмкость хранится явно,
а перевыделение идёт через единственную функцию ``_allocate``.
Любой ``MemoryError`` оттуда превращается в ``OUT_OF_MEMORY`` для всей
загрузки – без повторов и без «урезания» данных.

Важно: после ``append``/``ensure_capacity`` старый массив может быть
заменён новым, поэтому ``view()``/``row()`` нужно брать заново после
каждой вставки, а не держать между ними.
"""

from __future__ import annotations

import numpy as np

from quickmesh.errors import ErrorCode, LoadError

#: максимальное число элементов (индексы в мешах – uint32)
MAX_CAPACITY = 2 ** 32 - 1


def _allocate(shape, dtype) -> np.ndarray:
    """Единая точка выделения памяти для всех буферов и хэш‑карт."""
    return np.zeros(shape, dtype=dtype)


def allocate(shape, dtype, what: str = "buffer") -> np.ndarray:
    try:
        return _allocate(shape, dtype)
    except MemoryError as exc:
        raise LoadError(ErrorCode.OUT_OF_MEMORY, f"failed to allocate {what}") from exc


def grow_capacity(capacity: int, required: int) -> int:
    """Удваивать ``capacity``, пока она меньше ``required`` (с насыщением)."""
    if required > MAX_CAPACITY:
        raise LoadError(ErrorCode.OUT_OF_MEMORY, f"{required} elements exceed buffer limit")
    new_cap = max(capacity, 1)
    while new_cap < required:
        if new_cap > MAX_CAPACITY // 2:
            new_cap = MAX_CAPACITY
            break
        new_cap *= 2
    return new_cap


class GrowableBuffer:
    """
    Буфер «строк» фиксированной ширины: ``width`` значений типа ``dtype``
    на элемент.  Используется для сырых пулов (v/vn/vt), для вершин и
    индексов мешей.
    """

    def __init__(self, dtype, width: int = 1, capacity: int = 32, name: str = "buffer"):
        self.dtype = np.dtype(dtype)
        self.width = width
        self.name = name
        self._size = 0
        self._capacity = max(1, capacity)
        self._data = allocate((self._capacity, width), self.dtype, name)

    # -------------------------------------------------------------
    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def released(self) -> bool:
        return self._data is None

    # -------------------------------------------------------------
    def ensure_capacity(self, required: int) -> None:
        """Гарантировать место под ``required`` элементов."""
        if required <= self._capacity:
            return
        new_cap = grow_capacity(self._capacity, required)
        new_data = allocate((new_cap, self.width), self.dtype, self.name)
        new_data[:self._size] = self._data[:self._size]
        self._data = new_data
        self._capacity = new_cap

    def append(self, values) -> int:
        """Добавить один элемент, вернуть его (0‑based) индекс."""
        self.ensure_capacity(self._size + 1)
        idx = self._size
        self._data[idx] = values
        self._size += 1
        return idx

    def row(self, index: int) -> np.ndarray:
        """Элемент по 0‑based индексу (представление, не копия)."""
        return self._data[index]

    def view(self) -> np.ndarray:
        """Заполненная часть буфера формы ``(len, width)``."""
        return self._data[:self._size]

    def to_array(self) -> np.ndarray:
        """Плотная копия заполненной части (``len * width`` значений)."""
        out = allocate((self._size, self.width), self.dtype, self.name)
        out[:] = self._data[:self._size]
        return out.reshape(-1)

    def release(self) -> None:
        """Отпустить хранилище; повторный вызов – no‑op."""
        self._data = None
        self._size = 0
        self._capacity = 0
