# placements.py
# Generate all placements of a shape's variants inside a width x height grid

from __future__ import annotations

from typing import Iterable

from shapes import Variant

# Row-major cell indices (y * width + x) covered by one positioned variant.
Placement = tuple[int, ...]


def cell_index(x: int, y: int, width: int) -> int:
    return y * width + x


def cell_coords(index: int, width: int) -> tuple[int, int]:
    """Inverse of cell_index, returns (x, y)."""
    return index % width, index // width


def generate_placements(
    variants: Iterable[Variant],
    width: int,
    height: int,
) -> list[Placement]:
    """Generate every placement of every variant on a width x height grid.

    Variants that are larger than the grid (or empty) contribute nothing, so a
    shape that cannot fit at all simply yields an empty list.
    """
    placements: list[Placement] = []

    for variant in variants:
        offsets = variant.offsets
        if not offsets:
            continue

        # Slide the variant's top-left anchor over the grid
        for py in range(height - variant.height + 1):
            for px in range(width - variant.width + 1):
                placements.append(
                    tuple(cell_index(px + dx, py + dy, width) for dy, dx in offsets)
                )

    return placements
