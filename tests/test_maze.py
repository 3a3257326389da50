import io

import pytest

from circuitroute.coordinate import Coordinate
from circuitroute.grid import POINT_FULL
from circuitroute.maze import MazeError, parse_maze, read_maze


def _parse(text):
    out = io.StringIO()
    maze = parse_maze(text.splitlines(keepends=True), out)
    return maze, out.getvalue()


def test_parse_reports_dimensions_and_paths():
    maze, report = _parse("# comment\nd 3 1 1\np 0 0 0 2 0 0\n")
    assert report == "Maze dimensions = 3 x 1 x 1\nPaths to route  = 1\n"
    assert maze.sources == [Coordinate(0, 0, 0)]
    assert maze.destinations == [Coordinate(2, 0, 0)]


def test_walls_and_endpoints_marked_full():
    maze, _ = _parse("d 3 2 1\nw 1 1 0\np 0 0 0 2 0 0\n")
    grid = maze.grid
    assert grid.is_full(1, 1, 0)
    assert grid.is_full(0, 0, 0)
    assert grid.is_full(2, 0, 0)
    assert grid.is_empty(1, 0, 0)
    assert maze.walls == [Coordinate(1, 1, 0)]


def test_hex_and_octal_numbers():
    maze, _ = _parse("d 0x3 02 1\n")
    assert (maze.grid.width, maze.grid.height, maze.grid.depth) == (3, 2, 1)


def test_blank_lines_skipped():
    maze, _ = _parse("\n   \nd 2 2 2\n")
    assert len(maze.grid) == 8


def test_work_ordered_longest_first():
    maze, _ = _parse("d 5 5 1\np 0 0 0 1 0 0\np 0 1 0 4 4 0\n")
    first = maze.pop_work()
    second = maze.pop_work()
    assert first == (Coordinate(0, 1, 0), Coordinate(4, 4, 0))
    assert second == (Coordinate(0, 0, 0), Coordinate(1, 0, 0))
    assert maze.pop_work() is None


def test_ties_keep_later_first():
    maze, _ = _parse("d 4 2 1\np 0 0 0 1 0 0\np 2 1 0 3 1 0\n")
    assert maze.pop_work()[0] == Coordinate(2, 1, 0)
    assert maze.pop_work()[0] == Coordinate(0, 0, 0)


@pytest.mark.parametrize(
    "text, line",
    [
        ("d 3 3\n", 1),
        ("d 3 3 3\nx 1 2 3\n", 2),
        ("d 3 3 3\np 1 1 1 1 1 1\n", 2),
        ("d 3 3 3\n# ok\nw 1 1\n", 3),
        ("d 0 3 3\n", 1),
        ("d 3 3 3 3\n", 1),
    ],
)
def test_invalid_line(text, line):
    with pytest.raises(MazeError) as info:
        _parse(text)
    assert str(info.value) == f"Error: line {line} invalid"


def test_missing_dimensions():
    with pytest.raises(MazeError) as info:
        _parse("w 0 0 0\n")
    assert str(info.value) == "Error: Invalid dimensions (-1, -1, -1)"


def test_out_of_grid_source():
    with pytest.raises(MazeError) as info:
        _parse("d 2 2 1\np 0 0 0 5 0 0\n")
    assert str(info.value) == "Error: destination (5, 0, 0) invalid"


def test_out_of_grid_wall():
    with pytest.raises(MazeError, match="wall"):
        _parse("d 2 2 1\nw 2 0 0\n")


def test_check_valid_path_and_print():
    maze, _ = _parse("d 3 1 1\np 0 0 0 2 0 0\n")
    out = io.StringIO()
    assert maze.check_paths([[[2, 1, 0]]], out, True) is True
    text = out.getvalue()
    assert text.startswith("\nRouted Maze:\n[z = 0]\n")
    assert text.count("\n") > 3


def test_check_without_print_writes_nothing():
    maze, _ = _parse("d 3 1 1\np 0 0 0 2 0 0\n")
    out = io.StringIO()
    assert maze.check_paths([[[2, 1, 0]]], out, False) is True
    assert out.getvalue() == ""


def test_check_overlap_fails():
    maze, _ = _parse("d 3 1 1\np 0 0 0 2 0 0\n")
    out = io.StringIO()
    assert maze.check_paths([[[2, 1, 0]], [[2, 1, 0]]], out, True) is False
    assert out.getvalue() == ""


def test_check_non_adjacent_fails():
    maze, _ = _parse("d 3 2 1\np 0 0 0 2 0 0\n")
    assert maze.check_paths([[[2, 4, 0]]], io.StringIO(), False) is False


def test_check_bad_endpoint_fails():
    maze, _ = _parse("d 3 2 1\np 0 0 0 2 0 0\n")
    assert maze.check_paths([[[1, 4, 3]]], io.StringIO(), False) is False


def test_check_through_wall_fails():
    maze, _ = _parse("d 3 1 1\nw 1 0 0\np 0 0 0 2 0 0\n")
    assert maze.grid.get(1, 0, 0) == POINT_FULL
    assert maze.check_paths([[[2, 1, 0]]], io.StringIO(), False) is False


def test_check_empty_path_list_passes():
    maze, _ = _parse("d 2 2 1\n")
    assert maze.check_paths([[]], io.StringIO(), False) is True


def test_read_maze_from_file(tmp_path):
    path = tmp_path / "maze.txt"
    path.write_text("d 4 4 2\np 0 0 0 3 3 1\n")
    out = io.StringIO()
    maze = read_maze(str(path), out)
    assert len(maze.sources) == 1
    assert "Maze dimensions = 4 x 4 x 2" in out.getvalue()


def test_read_maze_missing_file(tmp_path):
    missing = tmp_path / "absent.txt"
    with pytest.raises(MazeError) as info:
        read_maze(str(missing), io.StringIO())
    assert str(info.value) == f"Error: Could not read {missing}"