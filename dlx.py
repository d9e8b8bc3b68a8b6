# dlx.py
# Algorithm X (Dancing Links) with primary and secondary columns

from __future__ import annotations

import sys
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator

ROOT = 0
_RECURSION_MARGIN = 64

# The recursion limit is process-wide; running searches register their depth here.
_limit_lock = threading.Lock()
_running_depths: list[int] = []
_base_limit = 0


@contextmanager
def _recursion_headroom(depth: int) -> Iterator[None]:
    global _base_limit
    with _limit_lock:
        if not _running_depths:
            _base_limit = sys.getrecursionlimit()
        _running_depths.append(depth)
        sys.setrecursionlimit(_base_limit + max(_running_depths) + _RECURSION_MARGIN)
    try:
        yield
    finally:
        with _limit_lock:
            _running_depths.remove(depth)
            if _running_depths:
                sys.setrecursionlimit(_base_limit + max(_running_depths) + _RECURSION_MARGIN)
            else:
                sys.setrecursionlimit(_base_limit)


class DLXSolver:
    """Generalized exact cover over a sparse 0/1 matrix.

    Primary columns must be covered exactly once, secondary columns at most
    once. Nodes live in flat lists and link to each other by index: slot 0 is
    the root, slots 1..n are the column headers, the rest are matrix cells.

    Only primary headers are linked into the root's ring. Secondary headers
    are self-linked horizontally, so they are never chosen and never need to
    be covered, but covering one still removes every row that overlaps it.
    """

    def __init__(self, num_primary: int, num_secondary: int = 0):
        self.num_primary = num_primary
        self.num_columns = num_primary + num_secondary

        n = self.num_columns + 1
        self.left: list[int] = list(range(n))
        self.right: list[int] = list(range(n))
        self.up: list[int] = list(range(n))
        self.down: list[int] = list(range(n))
        self.column: list[int] = list(range(n))
        self.row_id: list[int] = [-1] * n
        self.size: list[int] = [0] * n
        self.num_rows = 0

        # Create primary headers in a circular doubly-linked list.
        last = ROOT
        for header in range(1, num_primary + 1):
            self.left[header] = last
            self.right[header] = ROOT
            self.right[last] = header
            self.left[ROOT] = header
            last = header

        self.stats: dict[str, object] = {}
        self._solution: list[int] = []
        self._found: list[int] | None = None
        self._abort_reason: str | None = None
        self._nodes = 0
        self._node_limit = 0
        self._deadline: float | None = None
        self._should_stop: Callable[[], bool] | None = None

    def _header(self, c_idx: int) -> int:
        if not 0 <= c_idx < self.num_columns:
            raise IndexError(f"column {c_idx} out of range 0..{self.num_columns - 1}")
        return c_idx + 1

    def is_primary(self, header: int) -> bool:
        return 1 <= header <= self.num_primary

    def add_row(self, row_id: int, column_indices: Iterable[int]) -> None:
        first = -1
        prev = -1

        for c_idx in sorted(set(column_indices)):
            header = self._header(c_idx)
            node = len(self.left)
            self.column.append(header)
            self.row_id.append(row_id)

            # Insert into column (at bottom)
            self.down.append(header)
            self.up.append(self.up[header])
            self.down[self.up[header]] = node
            self.up[header] = node
            self.size[header] += 1

            # Link horizontally within row
            if first == -1:
                first = node
                self.left.append(node)
                self.right.append(node)
            else:
                self.left.append(prev)
                self.right.append(first)
                self.right[prev] = node
                self.left[first] = node
            prev = node

        if first != -1:
            self.num_rows += 1

    def cover(self, header: int) -> None:
        self.right[self.left[header]] = self.right[header]
        self.left[self.right[header]] = self.left[header]
        row = self.down[header]
        while row != header:
            node = self.right[row]
            while node != row:
                self.up[self.down[node]] = self.up[node]
                self.down[self.up[node]] = self.down[node]
                self.size[self.column[node]] -= 1
                node = self.right[node]
            row = self.down[row]

    def uncover(self, header: int) -> None:
        row = self.up[header]
        while row != header:
            node = self.left[row]
            while node != row:
                self.size[self.column[node]] += 1
                self.up[self.down[node]] = node
                self.down[self.up[node]] = node
                node = self.left[node]
            row = self.up[row]
        self.left[self.right[header]] = header
        self.right[self.left[header]] = header

    def link_state(self) -> tuple[tuple[int, ...], ...]:
        """Snapshot of every link and column size."""
        return (
            tuple(self.left),
            tuple(self.right),
            tuple(self.up),
            tuple(self.down),
            tuple(self.size),
        )

    def _choose_column(self) -> int:
        # Heuristic: choose primary column with smallest size.
        c = self.right[ROOT]
        best = c
        while c != ROOT:
            if self.size[c] < self.size[best]:
                best = c
                if self.size[best] == 0:
                    break
            c = self.right[c]
        return best

    def _limits_exceeded(self) -> bool:
        if self._abort_reason is not None:
            return True
        if self._node_limit and self._nodes >= self._node_limit:
            self._abort_reason = "node_limit"
        elif self._deadline is not None and time.monotonic() >= self._deadline:
            self._abort_reason = "time_limit"
        elif self._should_stop is not None and self._should_stop():
            self._abort_reason = "cancelled"
        return self._abort_reason is not None

    def _search(self) -> bool:
        if self.right[ROOT] == ROOT:
            self._found = [self.row_id[node] for node in self._solution]
            return True

        column = self._choose_column()
        if self.size[column] == 0:
            return False

        self.cover(column)

        found = False
        row = self.down[column]
        while row != column:
            if self._limits_exceeded():
                break
            self._nodes += 1
            self._solution.append(row)

            node = self.right[row]
            while node != row:
                self.cover(self.column[node])
                node = self.right[node]

            found = self._search()

            self._solution.pop()
            node = self.left[row]
            while node != row:
                self.uncover(self.column[node])
                node = self.left[node]

            if found:
                break
            row = self.down[row]

        self.uncover(column)
        return found

    def solve_one(
        self,
        node_limit: int = 0,
        time_limit: float = 0.0,
        should_stop: Callable[[], bool] | None = None,
    ) -> list[int] | None:
        """Return the row ids of the first solution, or None.

        node_limit caps the number of rows tried and time_limit the seconds
        spent; zero means unlimited. should_stop is polled before every row.
        When a limit trips the search unwinds and returns None, with the
        reason left in stats["reason"]. The matrix is fully restored either way.
        """
        self._solution = []
        self._found = None
        self._abort_reason = None
        self._nodes = 0
        self._node_limit = max(0, int(node_limit))
        self._deadline = time.monotonic() + time_limit if time_limit and time_limit > 0 else None
        self._should_stop = should_stop

        # One frame per primary column on the deepest path.
        with _recursion_headroom(self.num_primary):
            found = self._search()

        if found:
            reason = "solved"
        else:
            reason = self._abort_reason or "exhausted"
        self.stats = {"nodes": self._nodes, "reason": reason, "rows": self.num_rows}
        return self._found if found else None

    def has_solution(
        self,
        node_limit: int = 0,
        time_limit: float = 0.0,
        should_stop: Callable[[], bool] | None = None,
    ) -> bool:
        found = self.solve_one(node_limit=node_limit, time_limit=time_limit, should_stop=should_stop)
        return found is not None
