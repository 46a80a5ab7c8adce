"""Commits every verb occurrence to its monadic or dyadic form."""

from __future__ import annotations

from . import config
from .ast import Arity, Dyadic, Literal, Monadic, RawExpr, ResolvedExpr, Unresolved
from .errors import AmbiguousVerbContext, InvalidVerbUsage, RecursionLimitExceeded, UnresolvedAmbiguity
from .verbs import is_defined


def _resolve(node: RawExpr, *, limit: int, depth: int) -> ResolvedExpr:
    if depth >= limit:
        raise RecursionLimitExceeded(limit, stage="Semantic")

    if isinstance(node, Literal):
        return node

    if isinstance(node, Unresolved):
        if node.right is None:
            raise AmbiguousVerbContext(node.verb.value, "verb has no right operand")
        right = _resolve(node.right, limit=limit, depth=depth + 1)
        if node.left is None:
            if not is_defined(node.verb, Arity.MONADIC):
                raise InvalidVerbUsage(node.verb.value, Arity.MONADIC)
            return Monadic(verb=node.verb, right=right)
        left = _resolve(node.left, limit=limit, depth=depth + 1)
        if not is_defined(node.verb, Arity.DYADIC):
            raise InvalidVerbUsage(node.verb.value, Arity.DYADIC)
        return Dyadic(verb=node.verb, left=left, right=right)

    raise UnresolvedAmbiguity(f"Cannot resolve node of type {type(node).__name__}")


def analyze(tree: RawExpr, *, max_depth: int | None = None) -> ResolvedExpr:
    """Resolve a parsed tree, validating each verb's arity against the verb table."""
    return _resolve(tree, limit=config.max_depth(max_depth), depth=0)
