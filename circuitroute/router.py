"""Lee-style maze routing: wave expansion followed by traceback."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field, replace
from enum import IntEnum

from circuitroute.coordinate import Coordinate
from circuitroute.grid import POINT_EMPTY, POINT_FULL, Grid
from circuitroute.maze import Maze

Path = list[int]


class Momentum(IntEnum):
    """Direction of the last step taken during traceback."""

    ZERO = 0
    POSX = 1
    POSY = 2
    POSZ = 3
    NEGX = 4
    NEGY = 5
    NEGZ = 6


@dataclass(frozen=True)
class _Move:
    dx: int
    dy: int
    dz: int
    momentum: Momentum


_MOVES = (
    _Move(1, 0, 0, Momentum.POSX),
    _Move(0, 1, 0, Momentum.POSY),
    _Move(0, 0, 1, Momentum.POSZ),
    _Move(-1, 0, 0, Momentum.NEGX),
    _Move(0, -1, 0, Momentum.NEGY),
    _Move(0, 0, -1, Momentum.NEGZ),
)


@dataclass
class _Point:
    x: int
    y: int
    z: int
    value: int
    momentum: Momentum

    def same_place(self, other: _Point) -> bool:
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)


@dataclass
class Router:
    """Routing costs for each axis and for changing direction."""

    x_cost: int = 1
    y_cost: int = 1
    z_cost: int = 2
    bend_cost: int = 1
    _add_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @staticmethod
    def _expand_to_neighbor(
        my_grid: Grid, x: int, y: int, z: int, value: int, queue: deque[int]
    ) -> None:
        if not my_grid.is_valid(x, y, z):
            return
        index = my_grid.index(x, y, z)
        neighbor_value = my_grid.points[index]
        if neighbor_value == POINT_EMPTY or (
            neighbor_value != POINT_FULL and value < neighbor_value
        ):
            my_grid.points[index] = value
            queue.append(index)

    def expand(self, my_grid: Grid, src: Coordinate, dst: Coordinate) -> bool:
        """Spread a cost wave from ``src`` over ``my_grid``.

        Returns True if the wave reached ``dst``.
        """
        queue: deque[int] = deque([my_grid.index(src.x, src.y, src.z)])
        my_grid.set(src.x, src.y, src.z, 0)
        my_grid.set(dst.x, dst.y, dst.z, POINT_EMPTY)
        dst_index = my_grid.index(dst.x, dst.y, dst.z)

        while queue:
            index = queue.popleft()
            if index == dst_index:
                return True
            c = my_grid.indices(index)
            value = my_grid.points[index]
            x, y, z = c.x, c.y, c.z
            self._expand_to_neighbor(my_grid, x + 1, y, z, value + self.x_cost, queue)
            self._expand_to_neighbor(my_grid, x - 1, y, z, value + self.x_cost, queue)
            self._expand_to_neighbor(my_grid, x, y + 1, z, value + self.y_cost, queue)
            self._expand_to_neighbor(my_grid, x, y - 1, z, value + self.y_cost, queue)
            self._expand_to_neighbor(my_grid, x, y, z + 1, value + self.z_cost, queue)
            self._expand_to_neighbor(my_grid, x, y, z - 1, value + self.z_cost, queue)
        return False

    def _trace_to_neighbor(
        self,
        my_grid: Grid,
        curr: _Point,
        move: _Move,
        use_momentum: bool,
        nxt: _Point,
    ) -> None:
        x = curr.x + move.dx
        y = curr.y + move.dy
        z = curr.z + move.dz
        if (
            my_grid.is_valid(x, y, z)
            and not my_grid.is_empty(x, y, z)
            and not my_grid.is_full(x, y, z)
        ):
            value = my_grid.get(x, y, z)
            bend = (
                self.bend_cost
                if use_momentum and curr.momentum != move.momentum
                else 0
            )
            # '<=' favours neighbours over the current point.
            if value + bend <= nxt.value:
                nxt.x, nxt.y, nxt.z = x, y, z
                nxt.value = value
                nxt.momentum = move.momentum

    def traceback(self, grid: Grid, my_grid: Grid, dst: Coordinate) -> Path | None:
        """Walk back from ``dst`` to the wave's origin over ``my_grid``.

        Returns the path as flat indices of ``grid``, from the destination
        to the source, or None if no way back can be found.
        """
        path: Path = []
        nxt = _Point(dst.x, dst.y, dst.z, my_grid.get(dst.x, dst.y, dst.z), Momentum.ZERO)

        while True:
            path.append(grid.index(nxt.x, nxt.y, nxt.z))
            my_grid.set(nxt.x, nxt.y, nxt.z, POINT_FULL)
            if nxt.value == 0:
                return path
            curr = replace(nxt)

            for move in _MOVES:
                self._trace_to_neighbor(my_grid, curr, move, True, nxt)

            if curr.same_place(nxt):
                # Bend costs may hide every neighbour; retry ignoring momentum.
                nxt.value = curr.value
                for move in _MOVES:
                    self._trace_to_neighbor(my_grid, curr, move, False, nxt)
                if curr.same_place(nxt):
                    return None

    def solve(self, maze: Maze, path_lists: list[list[Path]]) -> list[Path]:
        """Route pairs from the maze's work queue until it is empty.

        The paths routed are appended, as one list, to ``path_lists`` and
        also returned. Safe to run from several threads on one maze.
        """
        grid = maze.grid
        my_grid = Grid(grid.width, grid.height, grid.depth)
        my_paths: list[Path] = []

        while (pair := maze.pop_work()) is not None:
            src, dst = pair
            while True:
                my_grid.copy_from(grid)
                if not self.expand(my_grid, src, dst):
                    break
                path = self.traceback(grid, my_grid, dst)
                if path is None:
                    break
                if grid.claim_path(path):
                    my_paths.append(path)
                    break

        with self._add_lock:
            path_lists.append(my_paths)
        return my_paths


def solve_parallel(maze: Maze, router: Router, n_threads: int) -> list[list[Path]]:
    """Route the whole maze with ``n_threads`` worker threads.

    Returns one list of paths per thread.
    """
    if n_threads < 1:
        raise ValueError(f"thread count must be positive, got {n_threads}")
    path_lists: list[list[Path]] = []
    threads = [
        threading.Thread(target=router.solve, args=(maze, path_lists))
        for _ in range(n_threads)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return path_lists