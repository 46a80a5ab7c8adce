"""End-to-end pipeline: text -> tokens -> raw tree -> resolved tree -> value."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, TypeVar

from . import config
from .ast import Arity, Verb
from .errors import JError, RecursionLimitExceeded, RequestError
from .evaluator import evaluate
from .formatting import format_array, render_tree
from .lexer import tokenize
from .parser import parse
from .semantic import analyze
from .values import JArray
from .verbs import lookup_verb

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def _guard_stack(stage: str, limit: int, fn: Callable[[], _T]) -> _T:
    try:
        return fn()
    except RecursionError as err:
        raise RecursionLimitExceeded(limit, stage=stage) from err


@dataclass(frozen=True)
class Interpreter:
    """Stateless evaluator; one instance may be shared across threads."""

    max_depth: int | None = None

    def _pipeline(self, source: str):
        limit = config.max_depth(self.max_depth)
        tokens = tokenize(source)
        logger.debug("tokenized %r into %d tokens", source, len(tokens))
        raw = _guard_stack("Parse", limit, lambda: parse(tokens, max_depth=limit))
        resolved = _guard_stack("Semantic", limit, lambda: analyze(raw, max_depth=limit))
        value = _guard_stack("Evaluation", limit, lambda: evaluate(resolved, max_depth=limit))
        logger.debug("evaluated %r to shape %s", source, value.shape)
        return raw, value

    def run(self, source: str) -> JArray:
        """Evaluate source text, raising the originating stage's error on failure."""
        _, value = self._pipeline(source)
        return value

    def execute_with_debug(self, source: str) -> tuple[JArray, str]:
        raw, value = self._pipeline(source)
        return value, f"Parse Tree:\n{render_tree(raw)}"

    def evaluate_expression(self, source: str) -> str:
        try:
            value = self.run(source)
        except JError as err:
            logger.debug("evaluation of %r failed: %s", source, err)
            return f"Error: {err}"
        return format_array(value)

    def handle_request(self, payload: str | bytes | Mapping[str, object]) -> dict[str, str]:
        """Serve one ``{"expression": ...}`` request as ``{"result": ...}``."""
        try:
            expression = _request_expression(payload)
        except RequestError as err:
            logger.debug("rejected request: %s", err)
            return {"result": f"Error: {err}"}
        return {"result": self.evaluate_expression(expression.strip())}


def _request_expression(payload: str | bytes | Mapping[str, object]) -> str:
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as err:
            raise RequestError(f"Malformed JSON request: {err.msg}") from err
    if not isinstance(payload, Mapping):
        raise RequestError("Request body must be a JSON object")
    expression = payload.get("expression")
    if not isinstance(expression, str):
        raise RequestError("Request field 'expression' must be a string")
    return expression


def help_text() -> str:
    lines = ["Verbs (monadic | dyadic):"]
    for verb in Verb:
        forms = []
        examples = []
        for arity in Arity:
            spec = lookup_verb(verb, arity)
            forms.append(spec.name if spec is not None else "-")
            if spec is not None:
                examples.append(spec.example)
        lines.append(f"  {verb.value}  {forms[0]} | {forms[1]}    e.g. {', '.join(examples)}")
    return "\n".join(lines)


_DEFAULT_INTERPRETER = Interpreter()


def run(source: str) -> JArray:
    return _DEFAULT_INTERPRETER.run(source)


def evaluate_expression(source: str) -> str:
    return _DEFAULT_INTERPRETER.evaluate_expression(source)


def execute_with_debug(source: str) -> tuple[JArray, str]:
    return _DEFAULT_INTERPRETER.execute_with_debug(source)


def handle_request(payload: str | bytes | Mapping[str, object]) -> dict[str, str]:
    return _DEFAULT_INTERPRETER.handle_request(payload)
