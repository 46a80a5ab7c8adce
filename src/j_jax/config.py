"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: Final[int] = 128
DEFAULT_MAX_ELEMENTS: Final[int] = 10_000_000

_ENV_MAX_DEPTH: Final[str] = "J_JAX_MAX_DEPTH"
_ENV_MAX_ELEMENTS: Final[str] = "J_JAX_MAX_ELEMENTS"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring non-integer %s=%r; using %d", name, raw, default)
        return default


def max_depth(override: int | None = None) -> int:
    """Recursion ceiling shared by the parser, analyzer and evaluator."""
    if override is not None:
        return max(1, int(override))
    return max(1, _env_int(_ENV_MAX_DEPTH, DEFAULT_MAX_DEPTH))


def max_elements() -> int:
    """Largest array a literal or a single verb may construct."""
    return max(1, _env_int(_ENV_MAX_ELEMENTS, DEFAULT_MAX_ELEMENTS))
