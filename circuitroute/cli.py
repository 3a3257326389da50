"""Command line entry point: route every path of a maze file in parallel."""

from __future__ import annotations

import getopt
import os
import re
import sys
import time
from collections.abc import Sequence
from typing import TextIO

from circuitroute.maze import MazeError, read_maze
from circuitroute.router import Router, solve_parallel

_PROG = "circuitroute"

DEFAULT_BEND_COST = 1
DEFAULT_X_COST = 1
DEFAULT_Y_COST = 1
DEFAULT_Z_COST = 2

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _to_int(text: str) -> int:
    """Parse a leading integer the lenient way: garbage yields 0."""
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def _usage() -> str:
    return (
        f"Usage: {_PROG} [options] input_filename\n"
        "\nOptions:                            (defaults)\n\n"
        f"    b <INT>    [b]end cost          ({DEFAULT_BEND_COST})\n"
        f"    x <UINT>   [x] movement cost    ({DEFAULT_X_COST})\n"
        f"    y <UINT>   [y] movement cost    ({DEFAULT_Y_COST})\n"
        f"    z <UINT>   [z] movement cost    ({DEFAULT_Z_COST})\n"
        "    h          [h]elp message       (false)\n"
    )


def _exit_with_usage() -> None:
    sys.stdout.write(_usage())
    sys.stdout.flush()
    raise SystemExit(1)


def parse_args(argv: Sequence[str]) -> tuple[str, Router, int]:
    """Parse command line arguments (without the program name).

    Returns ``(input_file, router, n_threads)``. Prints the usage text and
    raises SystemExit(1) on ``-h``, an unknown option or a missing input file.
    """
    costs = {
        "b": DEFAULT_BEND_COST,
        "x": DEFAULT_X_COST,
        "y": DEFAULT_Y_COST,
        "z": DEFAULT_Z_COST,
    }
    n_threads = 1
    try:
        opts, rest = getopt.gnu_getopt(list(argv), "hb:x:y:z:t:")
    except getopt.GetoptError as exc:
        print(f"{_PROG}: {exc.msg}", file=sys.stderr)
        _exit_with_usage()
        raise  # unreachable; keeps type checkers content

    for opt, value in opts:
        name = opt.lstrip("-")
        if name == "h":
            _exit_with_usage()
        elif name == "t":
            n_threads = _to_int(value)
        else:
            costs[name] = _to_int(value)

    if not rest:
        print("Missing input file", file=sys.stderr)
        _exit_with_usage()

    router = Router(
        x_cost=costs["x"],
        y_cost=costs["y"],
        z_cost=costs["z"],
        bend_cost=costs["b"],
    )
    return rest[0], router, n_threads


def open_output(input_file: str) -> TextIO:
    """Open ``<input_file>.res`` for writing, keeping any old one as ``.res.old``."""
    result_path = f"{input_file}.res"
    if os.path.exists(result_path):
        os.replace(result_path, f"{input_file}.res.old")
    return open(result_path, "w", encoding="utf-8")


def run(input_file: str, router: Router, n_threads: int, print_paths: bool) -> int:
    """Route the maze in ``input_file`` and write the report beside it.

    Returns the number of paths routed. Raises MazeError if the maze cannot
    be read and RuntimeError if the routed paths fail verification.
    """
    with open_output(input_file) as out:
        maze = read_maze(input_file, out)
        num_to_route = len(maze.sources)

        start = time.perf_counter()
        path_lists = solve_parallel(maze, router, n_threads) if n_threads > 0 else []
        stop = time.perf_counter()

        num_routed = sum(len(paths) for paths in path_lists)
        out.write(f"Paths routed    = {num_routed}\n")
        out.write(f"Elapsed time    = {stop - start:f} seconds\n")

        if num_routed > num_to_route:
            raise RuntimeError("more paths routed than requested")
        if not maze.check_paths(path_lists, out, print_paths):
            raise RuntimeError("verification of routed paths failed")
        out.write("Verification passed.\n")
    return num_routed


def main(argv: Sequence[str] | None = None) -> int:
    """Run the router from the command line; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        input_file, router, n_threads = parse_args(args)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    try:
        run(input_file, router, n_threads, True)
    except MazeError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error opening output file: {exc}", file=sys.stderr)
        return 1
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())