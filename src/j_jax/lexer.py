"""Tokenization for the J expression subset."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from . import config
from .errors import InvalidNumber, InvalidVector, UnknownCharacter
from .values import INT_MAX, JArray, scalar, vector

VERB_SYMBOLS = frozenset("+~#{<,")

_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
}

_NUMBER_CHARS = frozenset("0123456789.")
_INTEGER_RE = re.compile(r"^[0-9]+$")
_MAX_DIGITS = len(str(INT_MAX))


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int
    value: JArray | None = field(default=None, compare=False, repr=False)


def _scan_while(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    return source[start:i], i


def _parse_integer(text: str, pos: int) -> int:
    if not _INTEGER_RE.match(text) or len(text.lstrip("0")) > _MAX_DIGITS:
        raise InvalidNumber(text, pos)
    value = int(text)
    if value > INT_MAX:
        raise InvalidNumber(text, pos)
    return value


def _scan_number_run(source: str, start: int) -> tuple[JArray, int]:
    """Scan numbers separated only by whitespace into one array literal."""
    numbers: list[int] = []
    i = start
    end = start
    while True:
        text, word_end = _scan_while(source, i, lambda ch: ch in _NUMBER_CHARS)
        numbers.append(_parse_integer(text, i))
        end = word_end
        _, gap_end = _scan_while(source, word_end, str.isspace)
        if gap_end == word_end or gap_end >= len(source) or source[gap_end] not in _NUMBER_CHARS:
            break
        i = gap_end

    if len(numbers) > config.max_elements():
        raise InvalidVector(source[start:end], start)
    if len(numbers) == 1:
        return scalar(numbers[0]), end
    return vector(numbers), end


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0

    while i < len(source):
        ch = source[i]

        if ch.isspace():
            i += 1
            continue

        if ch in _NUMBER_CHARS:
            value, end = _scan_number_run(source, i)
            tokens.append(Token("NUMBER_RUN", source[i:end], i, end, value))
            i = end
            continue

        if ch in VERB_SYMBOLS:
            tokens.append(Token("VERB", ch, i, i + 1))
            i += 1
            continue

        if ch in _SINGLE_TOKENS:
            tokens.append(Token(_SINGLE_TOKENS[ch], ch, i, i + 1))
            i += 1
            continue

        raise UnknownCharacter(ch, i)

    return tokens
