"""Syntax trees before and after monadic/dyadic resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .values import JArray


class Verb(str, Enum):
    TILDE = "~"
    PLUS = "+"
    HASH = "#"
    LBRACE = "{"
    LESS = "<"
    COMMA = ","


class Arity(str, Enum):
    MONADIC = "monadic"
    DYADIC = "dyadic"


@dataclass(frozen=True)
class Literal:
    value: JArray


@dataclass(frozen=True)
class Unresolved:
    """Verb occurrence whose valence is decided by the analyzer."""

    verb: Verb
    left: "RawExpr | None"
    right: "RawExpr | None"


@dataclass(frozen=True)
class Monadic:
    verb: Verb
    right: "ResolvedExpr"


@dataclass(frozen=True)
class Dyadic:
    verb: Verb
    left: "ResolvedExpr"
    right: "ResolvedExpr"


RawExpr = Union[Literal, Unresolved]
ResolvedExpr = Union[Literal, Monadic, Dyadic]
