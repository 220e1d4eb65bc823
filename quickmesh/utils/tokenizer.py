# -*- coding: utf-8 -*-
"""
Токенизатор для OBJ/MTL: выдаёт токены, разделённые пробелами,
и «остаток строки» (имена, пути к картам, комментарии).

Поток читается построчно (``readline``), но наружу отдаётся ровно то,
что нужно командному циклу: текст токена и символ, на котором он
закончился (пробел, перевод строки или ``EOF``).
"""

import re

from quickmesh.errors import invalid_file

#: «символ‑терминатор» для конца потока
EOF = ""
NEWLINE = "\n"

MAX_TOKEN_LEN = 128

_TOKEN_RE = re.compile(r"\S*")


class Tokenizer:
    """Токенизатор поверх открытого текстового потока."""

    def __init__(self, stream, max_token_len: int = MAX_TOKEN_LEN):
        self._stream = stream
        self._max_token_len = max_token_len
        self._line = ""
        self._pos = 0
        self.line_number = 0

    # -------------------------------------------------------------
    def next_token(self) -> tuple[str, str]:
        """
        Вернуть ``(token, terminator)``.

        Пустой токен возможен (несколько пробелов подряд, пустая строка) –
        командный цикл его просто пропускает.  ``terminator == EOF``
        означает, что после этого токена поток закончился.
        """
        if self._pos >= len(self._line):
            self._line = self._stream.readline()
            self._pos = 0
            if not self._line:
                return "", EOF
            self.line_number += 1

        match = _TOKEN_RE.match(self._line, self._pos)
        token = match.group()
        end = match.end()
        # комментарий длиннее лимита просто пропускается командным циклом
        if len(token) > self._max_token_len and not token.startswith("#"):
            raise invalid_file(
                f"token longer than {self._max_token_len} characters"
            )

        if end < len(self._line):
            self._pos = end + 1
            return token, self._line[end]

        # строка без '\n' бывает только последней
        self._pos = end
        return token, EOF

    # -------------------------------------------------------------
    def read_line_remainder(self) -> str:
        """Дочитать текущую строку до конца и обрезать пробелы по краям."""
        rest = self._line[self._pos:]
        self._pos = len(self._line)
        return rest.strip()

    def remainder_after(self, terminator: str) -> str:
        """
        Остаток строки после команды, закончившейся на ``terminator``.
        Если команда уже закончила строку (или поток) – аргументов нет.
        """
        if terminator in (NEWLINE, EOF):
            return ""
        return self.read_line_remainder()
