# -*- coding: utf-8 -*-
import io

import pytest

from quickmesh.errors import ErrorCode, LoadError
from quickmesh.utils.tokenizer import EOF, NEWLINE, Tokenizer


def tokens(text, **kw):
    tok = Tokenizer(io.StringIO(text), **kw)
    out = []
    while True:
        token, end = tok.next_token()
        out.append((token, end))
        if end == EOF:
            return out


def test_tokens_and_terminators():
    assert tokens("v 1 2\nf") == [
        ("v", " "), ("1", " "), ("2", NEWLINE), ("f", EOF),
    ]


def test_blank_lines_give_empty_tokens():
    assert tokens("\n\nx\n") == [("", NEWLINE), ("", NEWLINE), ("x", NEWLINE), ("", EOF)]


def test_read_line_remainder_is_trimmed():
    tok = Tokenizer(io.StringIO("usemtl   Red Paint  \nv 1 2 3\n"))
    assert tok.next_token() == ("usemtl", " ")
    assert tok.read_line_remainder() == "Red Paint"
    assert tok.next_token() == ("v", " ")
    assert tok.line_number == 2


def test_remainder_after_newline_is_empty():
    tok = Tokenizer(io.StringIO("g\nv 1 2 3\n"))
    token, end = tok.next_token()
    assert (token, end) == ("g", NEWLINE)
    # следующая строка не должна быть съедена
    assert tok.remainder_after(end) == ""
    assert tok.next_token() == ("v", " ")


def test_token_too_long_is_invalid_file():
    tok = Tokenizer(io.StringIO("x" * 20 + " 1\n"), max_token_len=16)
    with pytest.raises(LoadError) as info:
        tok.next_token()
    assert info.value.code == ErrorCode.INVALID_FILE


def test_token_at_limit_is_accepted():
    tok = Tokenizer(io.StringIO("x" * 16 + "\n"), max_token_len=16)
    assert tok.next_token() == ("x" * 16, NEWLINE)


def test_long_comment_token_is_not_limited():
    comment = "#" + "=" * 140
    tok = Tokenizer(io.StringIO(comment + "\nv 1 2 3\n"), max_token_len=128)
    assert tok.next_token() == (comment, NEWLINE)
    assert tok.next_token() == ("v", " ")
