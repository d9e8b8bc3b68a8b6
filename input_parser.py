# input_parser.py
# Parse the puzzle text into shapes and regions

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from config import CFG
from regions import Region
from shapes import Shape, shape_from_rows

_SHAPE_HEADER_RE = re.compile(r"^(\d+):\s*$")
_REGION_RE = re.compile(r"^(\d+)x(\d+):\s*(.+)$")
_SHAPE_ROW_RE = re.compile(r"^[#.]+$")


class ParseError(ValueError):
    def __init__(self, message: str, line_no: int | None = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


def _check_block(shape_id: int, rows: List[str], header_line: int, size: int) -> None:
    if not rows:
        raise ParseError(f"shape {shape_id} has no rows", header_line)
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ParseError(f"shape {shape_id} rows differ in length", header_line)
    if size > 0 and (len(rows) != size or width != size):
        raise ParseError(
            f"shape {shape_id} is {width}x{len(rows)}, expected {size}x{size}", header_line
        )


def parse_shapes(text: str, size: int | None = None) -> Dict[int, Shape]:
    """Parse every '<id>:' block. Region lines are skipped."""
    shapes, _ = parse_puzzle(text, size=size)
    return shapes


def parse_regions(text: str, shape_ids: Iterable[int] | None = None) -> List[Region]:
    """Parse 'WxH: n0 n1 ...' lines, skipping everything else.

    The i-th count belongs to the i-th id of shape_ids in ascending order.
    Without shape_ids the catalog is taken to be 0, 1, 2, ...
    """
    ids = sorted(shape_ids) if shape_ids is not None else None
    regions: List[Region] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        parsed = _parse_region_line(raw.strip(), line_no)
        if parsed is None:
            continue
        width, height, counts = parsed
        regions.append(_keyed_region(width, height, counts, ids, line_no))
    return regions


def _parse_region_line(line: str, line_no: int) -> Tuple[int, int, List[int]] | None:
    match = _REGION_RE.match(line)
    if not match:
        return None
    width, height = int(match.group(1)), int(match.group(2))
    try:
        counts = [int(tok) for tok in match.group(3).split()]
    except ValueError:
        raise ParseError(f"bad counts {match.group(3)!r}", line_no) from None
    if any(n < 0 for n in counts):
        raise ParseError("counts must be non-negative", line_no)
    return width, height, counts


def _keyed_region(
    width: int, height: int, counts: List[int], ids: List[int] | None, line_no: int
) -> Region:
    if ids is None:
        ids = list(range(len(counts)))
    if len(counts) > len(ids):
        raise ParseError(f"{len(counts)} counts given but only {len(ids)} shapes defined", line_no)
    return Region(width, height, dict(zip(ids, counts)))


def parse_puzzle(text: str, size: int | None = None) -> Tuple[Dict[int, Shape], List[Region]]:
    """Parse the whole input.

    The i-th count of a region line belongs to the i-th shape id in
    ascending order; the returned regions are keyed by real shape ids.
    """
    if size is None:
        size = CFG.SHAPE_SIZE

    shapes: Dict[int, Shape] = {}
    raw_regions: List[Tuple[int, int, List[int], int]] = []

    current_id: int | None = None
    current_rows: List[str] = []
    header_line = 0

    def _close_block() -> None:
        nonlocal current_id, current_rows
        if current_id is not None:
            _check_block(current_id, current_rows, header_line, size)
            shapes[current_id] = shape_from_rows(current_id, current_rows)
        current_id = None
        current_rows = []

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()

        if not line:
            _close_block()
            continue

        header = _SHAPE_HEADER_RE.match(line)
        if header:
            _close_block()
            shape_id = int(header.group(1))
            if shape_id in shapes:
                raise ParseError(f"duplicate shape id {shape_id}", line_no)
            current_id = shape_id
            header_line = line_no
            continue

        parsed = _parse_region_line(line, line_no)
        if parsed is not None:
            _close_block()
            raw_regions.append((*parsed, line_no))
            continue

        if current_id is not None and _SHAPE_ROW_RE.match(line):
            current_rows.append(line)
            continue

        raise ParseError(f"unexpected line {line!r}", line_no)

    _close_block()

    ids = sorted(shapes)
    regions = [
        _keyed_region(width, height, counts, ids, line_no)
        for width, height, counts, line_no in raw_regions
    ]
    return shapes, regions


def load_puzzle(path: str | Path) -> Tuple[Dict[int, Shape], List[Region]]:
    return parse_puzzle(Path(path).read_text(encoding="utf-8"))
