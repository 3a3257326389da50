# circuitroute

Routes source/destination pairs through a three-dimensional grid with
the Lee algorithm: a breadth-first cost wave spreads out from the source,
then a traceback from the destination walks back to it, preferring
straight runs over bends. Several worker threads route paths at once;
each one claims the cells of its path on the shared grid and, if another
thread has taken one of them first, routes that pair again. Every
solution is verified before it is reported.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Input format

A plain-text file, one directive per line:

    # a comment
    d 8 8 3
    w 3 3 0
    p 0 0 0 7 7 2

- `d width height depth` sets the grid size; every dimension must be at
  least 1. A `d` line is required; if there are several, the last counts.
- `w x y z` places a wall (a blocked cell).
- `p x1 y1 z1 x2 y2 z2` asks for a path between two cells; the two ends
  must differ.
- Lines starting with `#` and blank lines are ignored.

Numbers may be written in decimal, octal (leading `0`) or hexadecimal
(leading `0x`). Any other directive, a directive with the wrong number of
values, or a wall, source or destination outside the grid is an error.
Longer paths (by straight-line distance between their ends) are routed
first.

## Command line

    circuitroute [-b BEND] [-x XCOST] [-y YCOST] [-z ZCOST] [-t THREADS] input_file

| option | meaning              | default |
|--------|----------------------|---------|
| `-b`   | bend cost            | 1       |
| `-x`   | x movement cost      | 1       |
| `-y`   | y movement cost      | 1       |
| `-z`   | z movement cost      | 2       |
| `-t`   | number of threads    | 1       |
| `-h`   | show usage and exit  |         |

`-h`, an unknown option or a missing input file prints the usage text and
exits with status 1. An unreadable or invalid maze, or a routed result
that fails verification, prints an error and exits with status 1.

Results go to `input_file.res`; an existing result file is first renamed
to `input_file.res.old`. The report holds the maze dimensions, the number
of paths to route and routed, the elapsed time, the routed maze and
`Verification passed.` In the routed maze each `z` layer is a block with
one row per `x` and one column per `y`; walls show as `-2`, free cells as
`-1`, path ends as `0` and the cells of a path as its number.

## Library use

    import sys
    from circuitroute.maze import read_maze
    from circuitroute.router import Router, solve_parallel

    maze = read_maze("board.txt", sys.stdout)
    router = Router(x_cost=1, y_cost=1, z_cost=2, bend_cost=1)
    path_lists = solve_parallel(maze, router, 4)
    assert maze.check_paths(path_lists, sys.stdout, True)

`solve_parallel` returns one list of paths per thread; each path is a list
of flat grid indices from the destination back to the source
(`Grid.indices` turns an index into a `Coordinate`).

`circuitroute.cli.run(input_file, router, n_threads, print_paths)` does
the whole job the command does: it reads the maze, routes it, checks the
result, writes the report file and returns the number of paths routed.

The building blocks are available on their own as well:

- `circuitroute.coordinate`: `Coordinate`, `pair_distance`, `compare_pairs`
- `circuitroute.grid`: `Grid`, with `POINT_EMPTY` and `POINT_FULL`
- `circuitroute.maze`: `Maze`, `MazeError`, `parse_maze`, `read_maze`
- `circuitroute.router`: `Router` (`expand`, `traceback`, `solve`) and
  `solve_parallel`