# regions.py
# Rectangular regions and the piece instances they require

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


class UnknownShapeError(KeyError):
    """A region names a shape id that is not in the catalog."""


@dataclass(frozen=True)
class Region:
    width: int
    height: int
    required_counts: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self):
        # Own copy, so a caller's dict cannot change the region afterwards.
        object.__setattr__(self, "required_counts", dict(self.required_counts))

    def __hash__(self) -> int:
        return hash((self.width, self.height, tuple(sorted(self.required_counts.items()))))

    @property
    def area(self) -> int:
        return self.width * self.height

    def label(self) -> str:
        counts = " ".join(str(self.required_counts[k]) for k in sorted(self.required_counts))
        return f"{self.width}x{self.height}: {counts}".rstrip()


def piece_instances(region: Region, catalog: Mapping[int, object]) -> list[int]:
    """One shape id per required unit, in ascending shape id order."""
    instances: list[int] = []
    for shape_id in sorted(region.required_counts):
        if shape_id not in catalog:
            raise UnknownShapeError(shape_id)
        count = region.required_counts[shape_id]
        if count < 0:
            raise ValueError(f"negative count {count} for shape {shape_id}")
        instances.extend([shape_id] * count)
    return instances
