"""Primitive verbs and the (symbol, arity) dispatch table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final

import jax.numpy as jnp

from . import config
from .ast import Arity, Verb
from .errors import DimensionMismatch, DomainError, RankError
from .values import INT_DTYPE, ElementKind, JArray, box as box_value, item_shape, make_array, scalar, shape_size, tally


@dataclass(frozen=True)
class VerbSpec:
    verb: Verb
    arity: Arity
    name: str
    fn: Callable[..., JArray]
    example: str


def _require_integer(value: JArray, *, where: str) -> None:
    if value.kind is not ElementKind.INTEGER:
        raise DomainError(f"{where} requires an integer argument, got boxed data")


def _require_size(size: int, *, where: str) -> None:
    limit = config.max_elements()
    if size > limit:
        raise DomainError(f"{where} result of {size} elements exceeds the limit of {limit}")


def iota(y: JArray) -> JArray:
    _require_integer(y, where="iota")
    if y.rank != 0:
        raise DomainError(f"iota requires a scalar argument, got rank {y.rank}")
    n = y.elements()[0]
    if n < 0:
        raise DomainError("iota requires a non-negative argument")
    _require_size(n, where="iota")
    return make_array((n,), jnp.arange(n, dtype=INT_DTYPE))


def identity(y: JArray) -> JArray:
    return y


def plus(x: JArray, y: JArray) -> JArray:
    _require_integer(x, where="plus")
    _require_integer(y, where="plus")
    if x.rank == 0:
        shape = y.shape
    elif y.rank == 0:
        shape = x.shape
    elif x.shape == y.shape:
        shape = x.shape
    else:
        raise DimensionMismatch(f"plus operands have incompatible shapes {x.shape} and {y.shape}")

    a = x.data
    b = y.data
    total = a + b
    # Same-sign operands whose sum flips sign wrapped around the integer range.
    wrapped = ((a >= 0) == (b >= 0)) & ((total >= 0) != (a >= 0))
    if bool(jnp.any(wrapped)):
        raise DomainError("plus overflowed the integer range")
    return make_array(shape, total)


def tally_of(y: JArray) -> JArray:
    return scalar(tally(y))


def reshape(x: JArray, y: JArray) -> JArray:
    _require_integer(x, where="reshape")
    target = tuple(x.elements())
    if any(dim < 0 for dim in target):
        raise DomainError(f"reshape dimensions must be non-negative, got {target}")
    size = shape_size(target)
    _require_size(size, where="reshape")
    if size == 0:
        return make_array(target, (), y.kind)
    if y.size == 0:
        raise DomainError("reshape cannot fill a non-empty shape from an empty array")

    if y.kind is ElementKind.INTEGER:
        positions = jnp.arange(size, dtype=INT_DTYPE) % y.size
        return make_array(target, jnp.take(y.data, positions))
    return make_array(target, (y.data[i % y.size] for i in range(size)), ElementKind.BOX)


def ravel(y: JArray) -> JArray:
    return make_array((y.size,), y.data, y.kind)


def append(x: JArray, y: JArray) -> JArray:
    if x.kind is not y.kind:
        raise DomainError("append requires operands of the same element kind")

    if x.rank <= 1 and y.rank <= 1:
        shape = (x.size + y.size,)
    elif item_shape(x) == item_shape(y):
        shape = (tally(x) + tally(y), *item_shape(x))
    else:
        raise DimensionMismatch(f"append operands have incompatible item shapes {item_shape(x)} and {item_shape(y)}")

    if x.kind is ElementKind.INTEGER:
        return make_array(shape, jnp.concatenate((x.data, y.data)))
    return make_array(shape, x.data + y.data, ElementKind.BOX)


def box(y: JArray) -> JArray:
    return box_value(y)


def from_(x: JArray, y: JArray) -> JArray:
    _require_integer(x, where="from")
    if x.rank > 1:
        raise RankError(f"from requires a scalar or vector of indices, got rank {x.rank}")

    count = tally(y)
    positions = x.elements()
    for position in positions:
        if not 0 <= position < count:
            raise DomainError(f"index {position} is out of range for length {count}")

    cell_shape = item_shape(y)
    if x.rank == 0:
        return list(y.items())[positions[0]]

    shape = (len(positions), *cell_shape)
    if y.kind is ElementKind.INTEGER:
        cells = jnp.reshape(y.data, (count, shape_size(cell_shape)))
        picked = jnp.take(cells, jnp.asarray(positions, dtype=INT_DTYPE), axis=0)
        return make_array(shape, jnp.ravel(picked))

    items = list(y.items())
    return make_array(shape, (element for p in positions for element in items[p].data), ElementKind.BOX)


VERB_TABLE: Final[dict[tuple[Verb, Arity], VerbSpec]] = {
    (spec.verb, spec.arity): spec
    for spec in (
        VerbSpec(Verb.TILDE, Arity.MONADIC, "iota", iota, "~5"),
        VerbSpec(Verb.PLUS, Arity.MONADIC, "identity", identity, "+1 2 3"),
        VerbSpec(Verb.PLUS, Arity.DYADIC, "plus", plus, "1 2 3+4 5 6"),
        VerbSpec(Verb.HASH, Arity.MONADIC, "tally", tally_of, "#~5"),
        VerbSpec(Verb.HASH, Arity.DYADIC, "reshape", reshape, "2 3#1 2 3 4 5 6"),
        VerbSpec(Verb.COMMA, Arity.MONADIC, "ravel", ravel, ",(2 2#~4)"),
        VerbSpec(Verb.COMMA, Arity.DYADIC, "append", append, "1 2,3 4 5"),
        VerbSpec(Verb.LESS, Arity.MONADIC, "box", box, "<1 2 3"),
        VerbSpec(Verb.LBRACE, Arity.DYADIC, "from", from_, "1{2 3#~6"),
    )
}


def lookup_verb(verb: Verb, arity: Arity) -> VerbSpec | None:
    return VERB_TABLE.get((verb, arity))


def is_defined(verb: Verb, arity: Arity) -> bool:
    return (verb, arity) in VERB_TABLE
