"""Parser producing unresolved syntax trees for the J expression subset.

Grammar (right-recursive, so the rightmost application is innermost)::

    expression := term (VERB expression)?
    term       := VERB term | atom
    atom       := NUMBER_RUN | '(' expression ')'

A verb receives a left operand only when it directly follows a completed
term, i.e. a number run or a closing parenthesis. A verb at the start of
input, after another verb or after '(' gets none and is later resolved as
monadic.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Sequence

from . import config
from .ast import Literal, RawExpr, Unresolved, Verb
from .errors import InvalidExpression, RecursionLimitExceeded, UnexpectedEndOfInput, UnexpectedToken
from .lexer import Token, tokenize


@dataclass
class _Parser:
    tokens: Sequence[Token]
    limit: int
    index: int = 0
    depth: int = 0

    def parse_expression_only(self) -> RawExpr:
        if not self.tokens:
            raise InvalidExpression("Empty expression")
        expr = self._parse_expression()
        tok = self._peek()
        if tok is not None:
            self._unexpected(tok, expected=("VERB", "EOF"))
        return expr

    def _peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _unexpected(self, tok: Token, *, expected: tuple[str, ...] = ()) -> None:
        raise UnexpectedToken(tok.text, tok.pos, expected=expected)

    @contextmanager
    def _nested(self):
        if self.depth >= self.limit:
            raise RecursionLimitExceeded(self.limit, stage="Parse")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def _parse_expression(self) -> RawExpr:
        with self._nested():
            left = self._parse_term()

            tok = self._peek()
            if tok is None or tok.kind == "RPAREN":
                return left
            if tok.kind != "VERB":
                self._unexpected(tok, expected=("VERB", "RPAREN", "EOF"))

            self._advance()
            if self._peek() is None:
                raise UnexpectedEndOfInput(expected=f"right operand of '{tok.text}'")
            right = self._parse_expression()
            return Unresolved(verb=Verb(tok.text), left=left, right=right)

    def _parse_term(self) -> RawExpr:
        tok = self._peek()
        if tok is None:
            raise UnexpectedEndOfInput(expected="operand")

        if tok.kind == "VERB":
            with self._nested():
                self._advance()
                if self._peek() is None:
                    raise UnexpectedEndOfInput(expected=f"right operand of '{tok.text}'")
                right = self._parse_term()
                return Unresolved(verb=Verb(tok.text), left=None, right=right)

        return self._parse_atom()

    def _parse_atom(self) -> RawExpr:
        tok = self._advance()

        if tok.kind == "NUMBER_RUN":
            if tok.value is None:
                raise InvalidExpression(f"Number run {tok.text!r} at position {tok.pos} carries no value")
            return Literal(tok.value)

        if tok.kind == "LPAREN":
            inner_start = self._peek()
            if inner_start is None:
                raise UnexpectedEndOfInput(expected="')'")
            if inner_start.kind == "RPAREN":
                raise InvalidExpression(f"Empty parentheses at position {tok.pos}")
            inner = self._parse_expression()
            if self._peek() is None:
                raise UnexpectedEndOfInput(expected="')'")
            self._advance()
            return inner

        self._unexpected(tok, expected=("NUMBER_RUN", "LPAREN", "VERB"))
        raise AssertionError("unreachable")


def parse(tokens: Sequence[Token], *, max_depth: int | None = None) -> RawExpr:
    """Build the unresolved syntax tree for a token sequence."""
    return _Parser(tokens=tokens, limit=config.max_depth(max_depth)).parse_expression_only()


def parse_source(source: str, *, max_depth: int | None = None) -> RawExpr:
    return parse(tokenize(source), max_depth=max_depth)
