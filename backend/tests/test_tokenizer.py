from __future__ import annotations

import pytest

from wkt.errors import LexicalError
from wkt.tokenizer import TokenKind, token_stream, tokenize


def _kinds_and_text(text: str, **kw) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.text) for t in tokenize(text, **kw)]


def test_tokenize_point_skips_whitespace_and_keeps_case():
    toks = _kinds_and_text(" \n\tpoint\r( 10\n-20 )  ")
    assert toks == [
        (TokenKind.word, "point"),
        (TokenKind.lparen, "("),
        (TokenKind.number, "10"),
        (TokenKind.number, "-20"),
        (TokenKind.rparen, ")"),
    ]


def test_tokenize_records_positions():
    toks = list(tokenize("POINT (1 2)"))
    assert [t.position for t in toks] == [0, 6, 7, 9, 10]


def test_tokenize_number_forms():
    toks = _kinds_and_text("-0 0.5 .5 5. 1e10 2.5E-3")
    assert [t for _, t in toks] == ["-0", "0.5", ".5", "5.", "1e10", "2.5E-3"]
    assert all(k == TokenKind.number for k, _ in toks)


def test_tokenize_comma_between_words_and_numbers():
    toks = _kinds_and_text("LINESTRING(0 0,1 1)")
    assert [k for k, _ in toks] == [
        TokenKind.word,
        TokenKind.lparen,
        TokenKind.number,
        TokenKind.number,
        TokenKind.comma,
        TokenKind.number,
        TokenKind.number,
        TokenKind.rparen,
    ]


def test_tokenize_unknown_character_is_lexical_error():
    with pytest.raises(LexicalError) as exc:
        list(tokenize("POINT (1 2) ;"))
    assert exc.value.position == 12


def test_tokenize_is_lazy():
    # Tokens before the bad character are produced before the error.
    it = tokenize("POINT @")
    first = next(it)
    assert first.text == "POINT"
    with pytest.raises(LexicalError):
        next(it)


def test_plus_sign_is_rejected_unless_enabled():
    with pytest.raises(LexicalError):
        list(tokenize("+1"))
    toks = _kinds_and_text("+1.5", allow_plus_sign=True)
    assert toks == [(TokenKind.number, "+1.5")]


def test_exponent_disabled_makes_literal_malformed():
    with pytest.raises(LexicalError):
        list(tokenize("1e10", allow_exponent=False))


def test_malformed_numbers():
    for text in ["-", "1.2.3", "12abc", "--1"]:
        with pytest.raises(LexicalError):
            list(tokenize(text))


def test_token_stream_peek_then_advance():
    ts = token_stream("POINT EMPTY")
    assert ts.peek().text == "POINT"
    assert ts.peek().text == "POINT"
    assert ts.advance().text == "POINT"
    assert ts.advance().text == "EMPTY"
    assert ts.at_end()
    assert ts.advance() is None
    assert ts.found() == "end of input"
    assert ts.position() == len("POINT EMPTY")
