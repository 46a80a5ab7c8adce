"""Runtime array model shared by every pipeline stage."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import jax.numpy as jnp

INT_DTYPE = jnp.asarray(0).dtype
INT_MIN = int(jnp.iinfo(INT_DTYPE).min)
INT_MAX = int(jnp.iinfo(INT_DTYPE).max)


class ElementKind(str, Enum):
    INTEGER = "integer"
    BOX = "box"


@dataclass(frozen=True)
class ValueInfo:
    kind: ElementKind
    shape: tuple[int, ...]
    rank: int
    depth: int


def shape_size(shape: tuple[int, ...]) -> int:
    return math.prod(shape)


@dataclass(frozen=True, eq=False)
class JArray:
    """Immutable rank/shape/data triple.

    ``data`` is a flat ``jax.numpy`` integer vector for integer arrays and a
    tuple of nested ``JArray`` values for boxed arrays. Its length always
    equals the product of ``shape``.
    """

    kind: ElementKind
    shape: tuple[int, ...]
    data: object

    def __post_init__(self) -> None:
        if any(dim < 0 for dim in self.shape):
            raise ValueError(f"JArray shape must be non-negative, got {self.shape}")
        if self.kind is ElementKind.INTEGER:
            if not isinstance(self.data, jnp.ndarray) or self.data.ndim != 1:
                raise ValueError("Integer JArray data must be a flat jax array")
        elif self.kind is ElementKind.BOX:
            if not isinstance(self.data, tuple) or not all(isinstance(item, JArray) for item in self.data):
                raise ValueError("Boxed JArray data must be a tuple of JArray values")
        else:
            raise ValueError(f"Unknown element kind {self.kind!r}")
        expected = shape_size(self.shape)
        if self.size != expected:
            raise ValueError(f"JArray data length {self.size} does not match shape {self.shape} (expected {expected})")

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        if self.kind is ElementKind.INTEGER:
            return int(self.data.shape[0])
        return len(self.data)

    @property
    def is_boxed(self) -> bool:
        return self.kind is ElementKind.BOX

    def elements(self) -> list[object]:
        """Flat elements as Python ints (integer kind) or nested arrays (box kind)."""
        if self.kind is ElementKind.INTEGER:
            return [int(x) for x in self.data.tolist()]
        return list(self.data)

    def items(self) -> Iterator["JArray"]:
        """Yield the leading-axis items; a scalar is its own single item."""
        if self.rank == 0:
            yield self
            return
        cell_shape = self.shape[1:]
        cell_size = shape_size(cell_shape)
        for i in range(self.shape[0]):
            yield _slice(self, i * cell_size, (i + 1) * cell_size, cell_shape)

    def tolist(self):
        flat = self.elements()
        if self.rank == 0:
            return flat[0]
        return _nest(flat, self.shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JArray):
            return NotImplemented
        if self.kind is not other.kind or self.shape != other.shape:
            return False
        if self.kind is ElementKind.INTEGER:
            return bool(jnp.array_equal(self.data, other.data))
        return all(a == b for a, b in zip(self.data, other.data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JArray(kind={self.kind.value}, shape={self.shape}, data={self.elements()!r})"


def _nest(flat: list[object], shape: tuple[int, ...]):
    if len(shape) == 1:
        return list(flat)
    step = shape_size(shape[1:])
    return [_nest(flat[i * step : (i + 1) * step], shape[1:]) for i in range(shape[0])]


def _slice(arr: JArray, start: int, stop: int, shape: tuple[int, ...]) -> JArray:
    return JArray(arr.kind, shape, arr.data[start:stop])


def int_vector(values) -> jnp.ndarray:
    return jnp.asarray(list(values), dtype=INT_DTYPE)


def scalar(value: int) -> JArray:
    return JArray(ElementKind.INTEGER, (), int_vector([value]))


def vector(values) -> JArray:
    data = int_vector(values)
    return JArray(ElementKind.INTEGER, (int(data.shape[0]),), data)


def make_array(shape, data, kind: ElementKind = ElementKind.INTEGER) -> JArray:
    """Build an array from an explicit shape and flat data.

    Raises ``ValueError`` if the data length disagrees with the shape.
    """
    shape = tuple(int(dim) for dim in shape)
    if kind is ElementKind.INTEGER:
        if not isinstance(data, jnp.ndarray):
            data = int_vector(data)
        else:
            data = jnp.ravel(data).astype(INT_DTYPE)
    else:
        data = tuple(data)
    return JArray(kind, shape, data)


def box(value: JArray) -> JArray:
    return JArray(ElementKind.BOX, (), (value,))


def tally(arr: JArray) -> int:
    if arr.rank == 0:
        return 1
    return arr.shape[0]


def item_shape(arr: JArray) -> tuple[int, ...]:
    return arr.shape[1:]


def depth_of(arr: JArray) -> int:
    if arr.kind is ElementKind.INTEGER:
        return 0
    if not arr.data:
        return 1
    return 1 + max(depth_of(item) for item in arr.data)


def value_info(arr: JArray) -> ValueInfo:
    return ValueInfo(kind=arr.kind, shape=arr.shape, rank=arr.rank, depth=depth_of(arr))
