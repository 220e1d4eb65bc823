"""
Простой загрузчик/сохранитель конфигурации парсера в формате JSON.
Если файл не найден – используются настройки по‑умолчанию
(файл при этом не создаётся, для этого есть ``save()``).
"""

import json
from pathlib import Path
from quickmesh.utils.logger import logger, set_log_level

DEFAULT_CONFIG = {
    "max_token_len": 128,
    "initial_capacity": 32,
    "log_level": "INFO",
}

class Config:
    """Singleton‑подобный объект конфигурации (один объект на путь)."""
    _instances = {}

    def __new__(cls, path: str = "quickmesh.json"):
        key = str(Path(path).expanduser().resolve())
        if key not in cls._instances:
            inst = super().__new__(cls)
            inst.path = Path(key)
            inst._load()
            cls._instances[key] = inst
        return cls._instances[key]

    @classmethod
    def reset(cls):
        """Забыть все загруженные конфигурации (нужно тестам)."""
        cls._instances.clear()

    def _load(self):
        self.data = DEFAULT_CONFIG.copy()
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("top-level JSON value must be an object")
                self.data.update(loaded)
                logger.info(f"[Config] Loaded configuration from {self.path}.")
            except (OSError, ValueError) as exc:
                logger.error(f"[Config] Failed to read config: {exc}")
                self.data = DEFAULT_CONFIG.copy()
        else:
            logger.info("[Config] No config file – using defaults.")
        set_log_level(self.data["log_level"])

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value
        if key == "log_level":
            set_log_level(value)

    def get(self, key, default=None):
        return self.data.get(key, default)

    # -------------------------------------------------------------
    # Типизированные поля, которыми пользуется парсер
    # -------------------------------------------------------------
    @property
    def max_token_len(self) -> int:
        return int(self["max_token_len"])

    @property
    def initial_capacity(self) -> int:
        return max(1, int(self["initial_capacity"]))
