# quickmesh/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger    – готовый объект logging.Logger (с level INFO)
    * Config    – JSON‑конфигурация парсера
    * Profiler  – замер времени загрузки
    * Tokenizer – токенизатор OBJ/MTL
"""

from .logger import logger, set_log_level
from .config import Config
from .profiler import Profiler
from .tokenizer import Tokenizer

__all__ = ["logger", "set_log_level", "Config", "Profiler", "Tokenizer"]
