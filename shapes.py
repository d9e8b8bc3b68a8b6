# shapes.py
# Shape definitions + rotations/flips

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

Grid = tuple[tuple[bool, ...], ...]


@dataclass(frozen=True)
class Shape:
    id: int
    cells: Grid  # H x W, True = filled

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0


@dataclass(frozen=True)
class Variant:
    rows: Grid  # bounding-box trimmed

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def offsets(self) -> tuple[tuple[int, int], ...]:
        # (dy, dx) of filled cells, row-major
        return tuple(
            (y, x)
            for y, row in enumerate(self.rows)
            for x, filled in enumerate(row)
            if filled
        )

    @property
    def key(self) -> str:
        return _grid_key(self.rows)


def shape_from_rows(shape_id: int, rows: Sequence[str]) -> Shape:
    """Build a shape from '#'/'.' rows."""
    return Shape(shape_id, tuple(tuple(ch == "#" for ch in row) for row in rows))


def _grid_key(grid: Grid) -> str:
    return "|".join("".join("#" if c else "." for c in row) for row in grid)


def _normalize(grid: Grid) -> Grid:
    # Strip fully-empty border rows and columns.
    rows = [row for row in grid if any(row)]
    if not rows:
        return ()
    cols = [x for x in range(len(rows[0])) if any(row[x] for row in rows)]
    min_c, max_c = cols[0], cols[-1]
    return tuple(tuple(row[min_c : max_c + 1]) for row in rows)


def _rotate90(grid: Grid) -> Grid:
    # Clockwise: new[x][h - 1 - y] = old[y][x]
    if not grid:
        return grid
    h = len(grid)
    w = len(grid[0])
    return tuple(tuple(grid[y][x] for y in range(h - 1, -1, -1)) for x in range(w))


def _flip_horizontal(grid: Grid) -> Grid:
    return tuple(tuple(reversed(row)) for row in grid)


def generate_variants(shape: Shape) -> list[Variant]:
    """All unique rotations + horizontal flip orientations, trimmed to their bounding box.

    Order is deterministic: for each of the four rotations the plain grid is
    tried before its reflection. A shape with no filled cells gives a single
    empty variant.
    """
    seen: set[str] = set()
    result: list[Variant] = []

    current = shape.cells
    for _ in range(4):
        for candidate in (current, _flip_horizontal(current)):
            norm = _normalize(candidate)
            key = _grid_key(norm)
            if key not in seen:
                seen.add(key)
                result.append(Variant(norm))
        current = _rotate90(current)

    return result


def cell_count(shape: Shape) -> int:
    return sum(1 for row in shape.cells for filled in row if filled)
