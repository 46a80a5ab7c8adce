"""Display text for array values and syntax trees."""

from __future__ import annotations

from .ast import Dyadic, Literal, Monadic, Unresolved
from .values import ElementKind, JArray


def _cell_texts(arr: JArray) -> list[str]:
    if arr.kind is ElementKind.INTEGER:
        return [str(x) for x in arr.elements()]
    return [f"<{format_array(inner)}>" for inner in arr.data]


def _blank_lines_before(row: int, row_shape: tuple[int, ...]) -> int:
    """Blank lines separating row from the previous one at higher-axis boundaries."""
    count = 0
    span = 1
    for dim in reversed(row_shape[1:]):
        span *= dim
        if row % span == 0:
            count += 1
        else:
            break
    return count


def format_array(arr: JArray) -> str:
    """Canonical display text: scalars bare, vectors space-separated, tables right-aligned."""
    cells = _cell_texts(arr)
    if arr.rank == 0:
        return cells[0]
    if arr.rank == 1:
        return " ".join(cells)

    columns = arr.shape[-1]
    if columns == 0 or not cells:
        return ""
    widths = [0] * columns
    for index, text in enumerate(cells):
        widths[index % columns] = max(widths[index % columns], len(text))

    row_shape = arr.shape[:-1]
    lines: list[str] = []
    for row in range(len(cells) // columns):
        if row:
            lines.extend([""] * _blank_lines_before(row, row_shape))
        chunk = cells[row * columns : (row + 1) * columns]
        lines.append(" ".join(text.rjust(widths[col]) for col, text in enumerate(chunk)))
    return "\n".join(lines)


def _literal_text(arr: JArray) -> str:
    if arr.rank == 0:
        return format_array(arr)
    return f"[{' '.join(_cell_texts(arr))}] shape={arr.shape}"


def render_tree(node, depth: int = 0) -> str:
    """Indented outline of a raw or resolved syntax tree."""
    indent = "  " * depth

    if isinstance(node, Literal):
        return f"{indent}Literal: {_literal_text(node.value)}"

    if isinstance(node, Monadic):
        return f"{indent}Monadic: '{node.verb.value}'\n{render_tree(node.right, depth + 1)}"

    if isinstance(node, Dyadic):
        return (
            f"{indent}Dyadic: '{node.verb.value}'\n"
            f"{render_tree(node.left, depth + 1)}\n"
            f"{render_tree(node.right, depth + 1)}"
        )

    if isinstance(node, Unresolved):
        out = f"{indent}Unresolved: '{node.verb.value}'"
        if node.left is not None:
            out += f"\n{indent}Left:\n{render_tree(node.left, depth + 1)}"
        if node.right is not None:
            out += f"\n{indent}Right:\n{render_tree(node.right, depth + 1)}"
        return out

    raise TypeError(f"Unsupported syntax node: {type(node)!r}")
