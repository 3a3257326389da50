"""Grid coordinates and ordering of source/destination pairs."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A point in the three-dimensional routing grid."""

    x: int
    y: int
    z: int

    def _squared_distance(self, other: Coordinate) -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def is_adjacent(self, other: Coordinate) -> bool:
        """Return True if ``other`` is one unit step away along a single axis."""
        return self._squared_distance(other) == 1


def pair_distance(src: Coordinate, dst: Coordinate) -> float:
    """Return the Euclidean distance between two coordinates."""
    return math.sqrt(src._squared_distance(dst))


def compare_pairs(
    a: tuple[Coordinate, Coordinate], b: tuple[Coordinate, Coordinate]
) -> int:
    """Order source/destination pairs so that longer ones come first.

    Returns 1 if ``a`` is shorter than ``b``, -1 if it is longer and 0 if
    both span the same distance; suitable for ``functools.cmp_to_key``.
    """
    a_distance = pair_distance(*a)
    b_distance = pair_distance(*b)
    if a_distance < b_distance:
        return 1
    if a_distance > b_distance:
        return -1
    return 0