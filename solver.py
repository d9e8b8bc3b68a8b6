# solver.py
# Combines everything; decides whether a region can hold its pieces

from __future__ import annotations

import logging
import threading
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from config import CFG
from dlx import DLXSolver
from placements import Placement, generate_placements
from regions import Region, piece_instances
from shapes import Shape, Variant, cell_count, generate_variants

log = logging.getLogger(__name__)


@dataclass
class RegionResult:
    ok: bool
    reason: str
    placements: List[Tuple[int, Placement]] = field(default_factory=list)  # (shape id, cells)
    nodes: int = 0


class PackingContext:
    """Memoized variants, placements and cell counts for one shape catalog.

    Caches are keyed by shape id, so a context must only ever see one
    catalog. Each key is computed once under a lock, which makes a context
    safe to share between threads.
    """

    def __init__(self):
        self.variant_cache: Dict[int, List[Variant]] = {}
        self.placement_cache: Dict[Tuple[int, int, int], List[Placement]] = {}
        self.cell_count_cache: Dict[int, int] = {}
        self.stats: Dict[str, int] = {
            "variant_builds": 0,
            "placement_builds": 0,
            "matrices": 0,
            "pruned": 0,
        }
        self._lock = threading.Lock()

    def variants(self, shape: Shape) -> List[Variant]:
        with self._lock:
            if shape.id not in self.variant_cache:
                self.variant_cache[shape.id] = generate_variants(shape)
                self.stats["variant_builds"] += 1
            return self.variant_cache[shape.id]

    def placements(self, shape: Shape, width: int, height: int) -> List[Placement]:
        key = (shape.id, width, height)
        variants = self.variants(shape)
        with self._lock:
            if key not in self.placement_cache:
                self.placement_cache[key] = generate_placements(variants, width, height)
                self.stats["placement_builds"] += 1
            return self.placement_cache[key]

    def cell_count(self, shape: Shape) -> int:
        with self._lock:
            if shape.id not in self.cell_count_cache:
                self.cell_count_cache[shape.id] = cell_count(shape)
            return self.cell_count_cache[shape.id]

    def count(self, name: str) -> None:
        with self._lock:
            self.stats[name] += 1


def build_exact_cover(
    region: Region,
    catalog: Mapping[int, Shape],
    context: PackingContext,
    instances: Sequence[int] | None = None,
) -> tuple[DLXSolver, List[Tuple[int, Placement]]]:
    # Column mapping:
    # First one column per piece instance, then one per grid cell.
    if instances is None:
        instances = piece_instances(region, catalog)
    num_pieces = len(instances)

    solver = DLXSolver(num_pieces, region.area)
    rows: List[Tuple[int, Placement]] = []

    # Build rows.
    for piece_idx, shape_id in enumerate(instances):
        for cells in context.placements(catalog[shape_id], region.width, region.height):
            cols: List[int] = [piece_idx]
            cols.extend(num_pieces + c for c in cells)
            solver.add_row(len(rows), cols)
            rows.append((shape_id, cells))

    context.count("matrices")
    return solver, rows


def solve_region(
    region: Region,
    catalog: Mapping[int, Shape],
    context: PackingContext | None = None,
    node_limit: int | None = None,
    time_limit: float | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> RegionResult:
    if context is None:
        context = PackingContext()
    if node_limit is None:
        node_limit = CFG.NODE_LIMIT
    if time_limit is None:
        time_limit = CFG.TIME_LIMIT

    instances = piece_instances(region, catalog)

    # Early pruning: total cells needed must fit in the grid.
    needed = sum(context.cell_count(catalog[shape_id]) for shape_id in instances)
    if needed > region.area:
        context.count("pruned")
        log.debug("%s: needs %d cells, only %d available", region.label(), needed, region.area)
        return RegionResult(False, "area")

    if not instances:
        return RegionResult(True, "empty")

    solver, rows = build_exact_cover(region, catalog, context, instances)
    found = solver.solve_one(node_limit=node_limit, time_limit=time_limit, should_stop=should_stop)
    reason = str(solver.stats["reason"])
    nodes = int(solver.stats["nodes"])

    if found is None:
        if reason in ("node_limit", "time_limit", "cancelled"):
            log.warning("%s: search stopped (%s) after %d nodes", region.label(), reason, nodes)
        else:
            log.debug("%s: no packing (%d rows, %d nodes)", region.label(), len(rows), nodes)
        return RegionResult(False, reason, nodes=nodes)

    log.debug("%s: packed %d pieces in %d nodes", region.label(), len(found), nodes)
    return RegionResult(True, reason, [rows[rid] for rid in found], nodes)


def can_fit(
    region: Region,
    catalog: Mapping[int, Shape],
    context: PackingContext | None = None,
    **limits,
) -> bool:
    return solve_region(region, catalog, context, **limits).ok


# Per-process state of a count_fitting worker, set by _init_worker.
_worker_catalog: Mapping[int, Shape] = {}
_worker_context: PackingContext | None = None


def _init_worker(catalog: Mapping[int, Shape]) -> None:
    global _worker_catalog, _worker_context
    _worker_catalog = catalog
    _worker_context = PackingContext()


def _check_region(args) -> bool:
    region, node_limit, time_limit = args
    return can_fit(region, _worker_catalog, _worker_context,
                   node_limit=node_limit, time_limit=time_limit)


def count_fitting(
    regions: Sequence[Region],
    catalog: Mapping[int, Shape],
    workers: int | None = None,
    node_limit: int | None = None,
    time_limit: float | None = None,
    context: PackingContext | None = None,
) -> int:
    """Count the regions that can hold all of their pieces.

    With workers > 1 the regions are spread over worker processes, each with
    one PackingContext reused for every region it checks. A context cannot
    cross process boundaries, so passing one together with workers > 1 is an
    error.
    """
    if workers is None:
        workers = CFG.WORKERS

    if workers > 1:
        if context is not None:
            raise ValueError("a PackingContext cannot be shared with worker processes")
        jobs = [(region, node_limit, time_limit) for region in regions]
        with ProcessPoolExecutor(
            max_workers=workers, initializer=_init_worker, initargs=(catalog,)
        ) as executor:
            results = list(executor.map(_check_region, jobs))
    else:
        if context is None:
            context = PackingContext()
        results = [
            can_fit(region, catalog, context, node_limit=node_limit, time_limit=time_limit)
            for region in regions
        ]

    count = sum(1 for ok in results if ok)
    log.info("%d of %d regions can fit all presents", count, len(regions))
    return count
