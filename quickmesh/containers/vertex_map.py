# -*- coding: utf-8 -*-
"""
Хэш‑карта «ссылка на вершину → индекс вершины в меше».

Открытая адресация, линейное пробирование.  Ключ – тройка уже
разрешённых (положительных) индексов ``(pos, tex, normal)``; слот с
``pos == 0`` считается пустым.  Коэффициент заполнения держится ниже 0.5:
как только ``size >= capacity / 2``, таблица удваивается и *все*
живые ключи перехэшируются заново (позиции слотов меняются).

Одна карта на меш, живёт только во время одной загрузки.
"""

from __future__ import annotations

import numpy as np

from quickmesh.containers.buffer import allocate, grow_capacity

FNV_OFFSET = 14695981039346656037
FNV_PRIME = 1099511628211
MASK64 = 0xFFFFFFFFFFFFFFFF


def hash_key(key) -> int:
    """64‑битный FNV‑1a‑подобный хэш по трём компонентам ключа."""
    h = FNV_OFFSET
    for component in key:
        h ^= int(component) & MASK64
        h = (h * FNV_PRIME) & MASK64
    return h


class VertexMap:
    """Карта дедупликации вершин одного меша."""

    def __init__(self, capacity: int = 32):
        self.size = 0
        self.capacity = max(2, capacity)
        self._keys = allocate((self.capacity, 3), np.int64, "vertex map keys")
        self._vals = allocate((self.capacity,), np.uint32, "vertex map values")

    def __len__(self) -> int:
        return self.size

    # -------------------------------------------------------------
    def _probe(self, keys: np.ndarray, capacity: int, key) -> int:
        """Слот с ``key`` либо первый пустой слот на пути пробирования."""
        p, t, n = key
        slot = hash_key(key) % capacity
        while True:
            stored = keys[slot]
            if stored[0] == 0:
                return slot
            if stored[0] == p and stored[1] == t and stored[2] == n:
                return slot
            slot = (slot + 1) % capacity

    def get(self, key):
        """Индекс для ``key`` или ``None``, если ключа нет."""
        slot = self._probe(self._keys, self.capacity, key)
        if self._keys[slot, 0] == 0:
            return None
        return int(self._vals[slot])

    def get_or_insert(self, key, candidate: int) -> int:
        """
        Вернуть индекс, уже сохранённый для ``key``; если ключа нет –
        записать ``candidate`` и вернуть его.  Вызывающий узнаёт о вставке
        по тому, что результат совпал с ``candidate``.
        """
        if key[0] <= 0:
            raise ValueError(f"vertex key must be resolved, got {tuple(key)}")

        slot = self._probe(self._keys, self.capacity, key)
        if self._keys[slot, 0] != 0:
            return int(self._vals[slot])

        self._keys[slot] = key
        self._vals[slot] = candidate
        self.size += 1
        if self.size >= self.capacity // 2:
            self._rehash(grow_capacity(self.capacity, self.capacity * 2))
        return candidate

    # -------------------------------------------------------------
    def _rehash(self, new_capacity: int) -> None:
        new_keys = allocate((new_capacity, 3), np.int64, "vertex map keys")
        new_vals = allocate((new_capacity,), np.uint32, "vertex map values")
        for slot in np.flatnonzero(self._keys[:, 0]):
            key = tuple(int(c) for c in self._keys[slot])
            new_slot = self._probe(new_keys, new_capacity, key)
            new_keys[new_slot] = key
            new_vals[new_slot] = self._vals[slot]
        self._keys = new_keys
        self._vals = new_vals
        self.capacity = new_capacity

    def release(self) -> None:
        self._keys = None
        self._vals = None
        self.size = 0
        self.capacity = 0
