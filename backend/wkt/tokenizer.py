from __future__ import annotations

import re
import string
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterator

from wkt.errors import END_OF_INPUT, LexicalError


class TokenKind(str, Enum):
    word = "word"
    number = "number"
    comma = "comma"
    lparen = "lparen"
    rparen = "rparen"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    # 0-based offset of the first character in the source text.
    position: int

    def upper(self) -> str:
        return self.text.upper()

    def describe(self) -> str:
        return f"'{self.text}'"


_WHITESPACE = frozenset(" \t\n\r")
_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_PUNCTUATION = {
    ",": TokenKind.comma,
    "(": TokenKind.lparen,
    ")": TokenKind.rparen,
}
_WORD_RE = re.compile(r"[A-Za-z]+")


@lru_cache(maxsize=4)
def _number_re(allow_exponent: bool, allow_plus_sign: bool) -> re.Pattern[str]:
    sign = r"[-+]?" if allow_plus_sign else r"-?"
    exponent = r"(?:[eE][-+]?\d+)?" if allow_exponent else ""
    return re.compile(sign + r"(?:\d+(?:\.\d*)?|\.\d+)" + exponent)


def tokenize(
    text: str,
    *,
    allow_exponent: bool = True,
    allow_plus_sign: bool = False,
) -> Iterator[Token]:
    """
    Lazily scan WKT text into tokens.

    Keywords are not recognised here: anything alphabetic is a `word` and the parser
    compares its upper-cased text. Lexical errors surface only when the scan reaches
    the offending character.
    """
    number_re = _number_re(allow_exponent, allow_plus_sign)
    number_starts = set(_DIGITS) | {".", "-"}
    if allow_plus_sign:
        number_starts.add("+")

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _WHITESPACE:
            i += 1
            continue

        kind = _PUNCTUATION.get(ch)
        if kind is not None:
            yield Token(kind=kind, text=ch, position=i)
            i += 1
            continue

        if ch in _LETTERS:
            m = _WORD_RE.match(text, i)
            # m cannot be None: text[i] is a letter.
            yield Token(kind=TokenKind.word, text=m.group(0), position=i)
            i = m.end()
            continue

        if ch in number_starts:
            m = number_re.match(text, i)
            if m is None:
                raise LexicalError(f"malformed number starting with '{ch}'", position=i)
            end = m.end()
            # "1.2.3", "12abc" and friends are one malformed literal, not two tokens.
            if end < n and (text[end] in _LETTERS or text[end] in _DIGITS or text[end] == "."):
                raise LexicalError(
                    f"malformed number '{text[i:end + 1]}'", position=i
                )
            yield Token(kind=TokenKind.number, text=m.group(0), position=i)
            i = end
            continue

        raise LexicalError(f"unexpected character {ch!r}", position=i)


class TokenStream:
    """
    Single-token lookahead over a token iterator.

    Parsers peek to decide which rule applies, then advance to consume it.
    """

    def __init__(self, tokens: Iterator[Token], *, end_position: int):
        self._tokens = tokens
        self._peeked: Token | None = None
        self._exhausted = False
        self.end_position = end_position

    def peek(self) -> Token | None:
        if self._peeked is None and not self._exhausted:
            try:
                self._peeked = next(self._tokens)
            except StopIteration:
                self._exhausted = True
        return self._peeked

    def advance(self) -> Token | None:
        tok = self.peek()
        self._peeked = None
        return tok

    def position(self) -> int:
        tok = self.peek()
        return tok.position if tok is not None else self.end_position

    def found(self) -> str:
        tok = self.peek()
        return tok.describe() if tok is not None else END_OF_INPUT

    def at_end(self) -> bool:
        return self.peek() is None


def token_stream(
    text: str,
    *,
    allow_exponent: bool = True,
    allow_plus_sign: bool = False,
) -> TokenStream:
    return TokenStream(
        tokenize(text, allow_exponent=allow_exponent, allow_plus_sign=allow_plus_sign),
        end_position=len(text),
    )
