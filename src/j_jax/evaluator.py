"""Post-order evaluation of resolved syntax trees on top of JAX."""

from __future__ import annotations

from . import config
from .ast import Arity, Dyadic, Literal, Monadic, ResolvedExpr
from .errors import RecursionLimitExceeded, UnsupportedVerb
from .values import JArray
from .verbs import lookup_verb


def _eval_expr(expr: ResolvedExpr, *, limit: int, depth: int) -> JArray:
    if depth >= limit:
        raise RecursionLimitExceeded(limit, stage="Evaluation")

    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, Monadic):
        spec = lookup_verb(expr.verb, Arity.MONADIC)
        if spec is None:
            raise UnsupportedVerb(expr.verb.value, Arity.MONADIC)
        right = _eval_expr(expr.right, limit=limit, depth=depth + 1)
        return spec.fn(right)

    if isinstance(expr, Dyadic):
        spec = lookup_verb(expr.verb, Arity.DYADIC)
        if spec is None:
            raise UnsupportedVerb(expr.verb.value, Arity.DYADIC)
        right = _eval_expr(expr.right, limit=limit, depth=depth + 1)
        left = _eval_expr(expr.left, limit=limit, depth=depth + 1)
        return spec.fn(left, right)

    raise TypeError(f"Unsupported expression node: {type(expr)!r}")


def evaluate(tree: ResolvedExpr, *, max_depth: int | None = None) -> JArray:
    """Evaluate a resolved tree to a single array value."""
    return _eval_expr(tree, limit=config.max_depth(max_depth), depth=0)
