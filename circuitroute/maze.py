"""Maze description: dimensions, walls and source/destination pairs."""

from __future__ import annotations

import re
import threading
from collections import deque
from collections.abc import Iterable, Sequence
from functools import cmp_to_key
from typing import TextIO

from circuitroute.coordinate import Coordinate, compare_pairs
from circuitroute.grid import POINT_EMPTY, Grid

Pair = tuple[Coordinate, Coordinate]

_INT_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_MAX_INTS = 6


class MazeError(Exception):
    """Raised when a maze description is unreadable or invalid."""


class Maze:
    """A routing problem: the grid plus the work still to be routed."""

    def __init__(
        self,
        grid: Grid,
        walls: Sequence[Coordinate],
        sources: Sequence[Coordinate],
        destinations: Sequence[Coordinate],
        work: Iterable[Pair],
    ) -> None:
        self.grid = grid
        self.walls = list(walls)
        self.sources = list(sources)
        self.destinations = list(destinations)
        self.work: deque[Pair] = deque(work)
        self._work_lock = threading.Lock()

    def pop_work(self) -> Pair | None:
        """Take the next source/destination pair, or None when none are left."""
        with self._work_lock:
            return self.work.popleft() if self.work else None

    def check_paths(
        self,
        path_lists: Iterable[Iterable[Sequence[int]]],
        out: TextIO,
        print_paths: bool,
    ) -> bool:
        """Verify that routed paths are contiguous and do not overlap.

        Each path is a sequence of flat grid indices running from one
        endpoint to the other. When ``print_paths`` is true and the check
        passes, the routed maze is written to ``out``.
        """
        grid = self.grid
        test_grid = Grid(grid.width, grid.height, grid.depth)
        test_grid.add_path(self.walls)
        for c in self.sources:
            test_grid.set(c.x, c.y, c.z, 0)
        for c in self.destinations:
            test_grid.set(c.x, c.y, c.z, 0)

        path_id = 0
        for paths in path_lists:
            for path in paths:
                path_id += 1
                if len(path) < 2:
                    return False
                start = grid.indices(path[0])
                if test_grid.get(start.x, start.y, start.z) != 0:
                    return False
                prev = start
                for index in path[1:-1]:
                    curr = grid.indices(index)
                    if not curr.is_adjacent(prev):
                        return False
                    prev = curr
                    if test_grid.get(curr.x, curr.y, curr.z) != POINT_EMPTY:
                        return False
                    test_grid.set(curr.x, curr.y, curr.z, path_id)
                end = grid.indices(path[-1])
                if test_grid.get(end.x, end.y, end.z) != 0:
                    return False

        if print_paths:
            out.write("\nRouted Maze:\n")
            test_grid.write(out)
        return True


def _scan_ints(text: str) -> list[int]:
    """Read up to six integers, stopping at the first that does not parse."""
    values: list[int] = []
    pos = 0
    while len(values) < _MAX_INTS:
        match = _INT_RE.match(text, pos)
        if match is None:
            break
        sign, digits = match.groups()
        if digits[:2] in ("0x", "0X"):
            value = int(digits[2:], 16)
        elif len(digits) > 1:
            value = int(digits[1:], 8)
        else:
            value = int(digits)
        values.append(-value if sign == "-" else value)
        pos = match.end()
    return values


def _add_to_grid(grid: Grid, coordinates: Sequence[Coordinate], kind: str) -> None:
    for c in coordinates:
        if not grid.is_valid(c.x, c.y, c.z):
            raise MazeError(f"Error: {kind} ({c.x}, {c.y}, {c.z}) invalid")
    grid.add_path(coordinates)


def parse_maze(lines: Iterable[str], out: TextIO) -> Maze:
    """Build a maze from the lines of a maze description.

    Writes the maze dimensions and number of paths to route to ``out``.
    Raises MazeError on any malformed line or invalid coordinate.
    """
    width = height = depth = -1
    walls: list[Coordinate] = []
    sources: list[Coordinate] = []
    destinations: list[Coordinate] = []
    pairs: list[Pair] = []

    for line_number, line in enumerate(lines, start=1):
        stripped = line.lstrip()
        if not stripped:
            continue
        code = stripped[0]
        values = _scan_ints(stripped[1:])
        num_tokens = 1 + len(values)

        if code == "#":
            continue
        if code == "d" and num_tokens == 4:
            width, height, depth = values
            if width >= 1 and height >= 1 and depth >= 1:
                continue
        elif code == "p" and num_tokens == 7:
            src = Coordinate(*values[:3])
            dst = Coordinate(*values[3:])
            if src != dst:
                pairs.append((src, dst))
                sources.append(src)
                destinations.append(dst)
                continue
        elif code == "w" and num_tokens == 4:
            walls.append(Coordinate(*values))
            continue
        raise MazeError(f"Error: line {line_number} invalid")

    if width < 1 or height < 1 or depth < 1:
        raise MazeError(f"Error: Invalid dimensions ({width}, {height}, {depth})")

    grid = Grid(width, height, depth)
    _add_to_grid(grid, walls, "wall")
    _add_to_grid(grid, sources, "source")
    _add_to_grid(grid, destinations, "destination")
    out.write(f"Maze dimensions = {width} x {height} x {depth}\n")
    out.write(f"Paths to route  = {len(pairs)}\n")

    # Longest pairs first; among equals, the one read last goes first.
    work = sorted(reversed(pairs), key=cmp_to_key(compare_pairs))
    return Maze(grid, walls, sources, destinations, work)


def read_maze(path: str, out: TextIO) -> Maze:
    """Read a maze description from a file."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fp:
            return parse_maze(fp, out)
    except OSError as exc:
        raise MazeError(f"Error: Could not read {path}") from exc