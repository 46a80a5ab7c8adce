"""j-jax public API."""

from .errors import (
    DimensionMismatch,
    DomainError,
    EvaluationError,
    JError,
    ParseError,
    RankError,
    RecursionLimitExceeded,
    SemanticError,
    TokenError,
    UnexpectedEndOfInput,
)
from .evaluator import evaluate
from .formatting import format_array, render_tree
from .interpreter import Interpreter, evaluate_expression, execute_with_debug, handle_request, help_text, run
from .lexer import tokenize
from .parser import parse, parse_source
from .semantic import analyze
from .values import ElementKind, JArray, make_array, scalar, vector

__all__ = [
    "tokenize",
    "parse",
    "parse_source",
    "analyze",
    "evaluate",
    "run",
    "evaluate_expression",
    "execute_with_debug",
    "handle_request",
    "help_text",
    "Interpreter",
    "format_array",
    "render_tree",
    "JArray",
    "ElementKind",
    "make_array",
    "scalar",
    "vector",
    "JError",
    "TokenError",
    "ParseError",
    "SemanticError",
    "EvaluationError",
    "UnexpectedEndOfInput",
    "DimensionMismatch",
    "DomainError",
    "RankError",
    "RecursionLimitExceeded",
]
