"""Structured error types, one family per pipeline stage."""

from __future__ import annotations


def _arity_text(arity: object) -> str:
    return str(getattr(arity, "value", arity))


class JError(Exception):
    """Base class for every language-level failure."""

    stage = "Interpreter"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.stage} Error: {self.message}"


class TokenError(JError):
    stage = "Token"


class InvalidNumber(TokenError):
    def __init__(self, text: str, pos: int) -> None:
        super().__init__(f"Invalid number {text!r} at index {pos}")
        self.text = text
        self.pos = pos


class UnknownCharacter(TokenError):
    def __init__(self, char: str, pos: int) -> None:
        super().__init__(f"Unknown character {char!r} at index {pos}")
        self.char = char
        self.pos = pos


class InvalidVector(TokenError):
    def __init__(self, text: str, pos: int) -> None:
        super().__init__(f"Invalid vector {text!r} at index {pos}")
        self.text = text
        self.pos = pos


class ParseError(JError):
    stage = "Parse"


class UnexpectedToken(ParseError):
    def __init__(self, token: str, position: int, *, expected: tuple[str, ...] = ()) -> None:
        message = f"Unexpected token {token!r} at position {position}"
        if expected:
            message += f"; expected {', '.join(expected)}"
        super().__init__(message)
        self.token = token
        self.position = position
        self.expected = expected


class UnexpectedEndOfInput(ParseError):
    def __init__(self, expected: str | None = None) -> None:
        message = "Unexpected end of input"
        if expected:
            message += f"; expected {expected}"
        super().__init__(message)
        self.expected = expected


class InvalidExpression(ParseError):
    pass


class SemanticError(JError):
    stage = "Semantic"


class AmbiguousVerbContext(SemanticError):
    def __init__(self, verb: str, detail: str) -> None:
        super().__init__(f"Ambiguous context for verb '{verb}': {detail}")
        self.verb = verb


class InvalidVerbUsage(SemanticError):
    def __init__(self, verb: str, arity: object) -> None:
        super().__init__(f"Verb '{verb}' has no {_arity_text(arity)} form")
        self.verb = verb
        self.arity = arity


class UnresolvedAmbiguity(SemanticError):
    pass


class EvaluationError(JError):
    stage = "Evaluation"


class UnsupportedVerb(EvaluationError):
    def __init__(self, verb: str, arity: object) -> None:
        super().__init__(f"Unsupported verb '{verb}': {_arity_text(arity)} form is not defined")
        self.verb = verb
        self.arity = arity


class DimensionMismatch(EvaluationError):
    pass


class DomainError(EvaluationError):
    pass


class RankError(EvaluationError):
    pass


class RecursionLimitExceeded(EvaluationError):
    """Nesting exceeded the configured depth ceiling.

    Raised by the parser, analyzer and evaluator alike; ``stage`` records
    which of them hit the ceiling.
    """

    def __init__(self, limit: int, *, stage: str = "Evaluation") -> None:
        super().__init__(f"Recursion limit of {limit} exceeded")
        self.limit = limit
        self.stage = stage


class RequestError(JError):
    stage = "Request"
