"""Three-dimensional routing grid with per-point locking."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from typing import TextIO

from circuitroute.coordinate import Coordinate

POINT_FULL = -2
POINT_EMPTY = -1


class Grid:
    """A width x height x depth array of point values stored flat.

    Each point holds ``POINT_EMPTY``, ``POINT_FULL`` or a non-negative cost.
    Points are addressed by coordinates or by their flat index, which is
    ``(z * height + y) * width + x``.
    """

    def __init__(self, width: int, height: int, depth: int) -> None:
        if width < 1 or height < 1 or depth < 1:
            raise ValueError(
                f"invalid grid dimensions ({width}, {height}, {depth})"
            )
        self.width = width
        self.height = height
        self.depth = depth
        size = width * height * depth
        self.points: list[int] = [POINT_EMPTY] * size
        self._locks = [threading.Lock() for _ in range(size)]

    def __len__(self) -> int:
        return len(self.points)

    def copy_from(self, other: Grid) -> None:
        """Overwrite this grid's values with those of ``other``."""
        if (self.width, self.height, self.depth) != (
            other.width,
            other.height,
            other.depth,
        ):
            raise ValueError("grid dimensions differ")
        self.points[:] = other.points

    def is_valid(self, x: int, y: int, z: int) -> bool:
        """Return True if the coordinates lie inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def index(self, x: int, y: int, z: int) -> int:
        """Return the flat index of a point."""
        return (z * self.height + y) * self.width + x

    def indices(self, index: int) -> Coordinate:
        """Return the coordinates of the point with the given flat index."""
        area = self.width * self.height
        z, index2d = divmod(index, area)
        y, x = divmod(index2d, self.width)
        return Coordinate(x, y, z)

    def get(self, x: int, y: int, z: int) -> int:
        """Return the value stored at a point."""
        return self.points[self.index(x, y, z)]

    def set(self, x: int, y: int, z: int, value: int) -> None:
        """Store a value at a point."""
        self.points[self.index(x, y, z)] = value

    def is_empty(self, x: int, y: int, z: int) -> bool:
        return self.get(x, y, z) == POINT_EMPTY

    def is_full(self, x: int, y: int, z: int) -> bool:
        return self.get(x, y, z) == POINT_FULL

    def add_path(self, coordinates: Iterable[Coordinate]) -> None:
        """Mark every given coordinate as full."""
        for c in coordinates:
            self.set(c.x, c.y, c.z, POINT_FULL)

    def _sort_key(self, index: int) -> tuple[int, int, int]:
        c = self.indices(index)
        return (c.x, c.y, c.z)

    def claim_path(self, path: Sequence[int]) -> bool:
        """Atomically mark the interior points of a path as full.

        ``path`` is a sequence of flat indices whose first and last entries
        are the endpoints and are left untouched. The interior points are
        locked in (x, y, z) order; if any of them is already full, nothing
        is changed and False is returned.
        """
        interior = sorted(path[1:-1], key=self._sort_key)
        acquired: list[threading.Lock] = []
        try:
            for index in interior:
                lock = self._locks[index]
                lock.acquire()
                acquired.append(lock)
                if self.points[index] == POINT_FULL:
                    return False
            for index in interior:
                self.points[index] = POINT_FULL
            return True
        finally:
            for lock in acquired:
                lock.release()

    def render(self) -> str:
        """Return a text dump of the grid, one block per z layer."""
        parts: list[str] = []
        for z in range(self.depth):
            parts.append(f"[z = {z}]\n")
            for x in range(self.width):
                parts.append(
                    "".join(f"{self.get(x, y, z):4d}" for y in range(self.height))
                )
                parts.append("\n")
            parts.append("\n")
        return "".join(parts)

    def write(self, fp: TextIO) -> None:
        """Write the text dump of the grid to ``fp``."""
        fp.write(self.render())