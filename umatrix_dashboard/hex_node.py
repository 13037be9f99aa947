# hex_node.py

"""
A single codebook vector on the hexagonal lattice, plus the six directions
in which it can have neighbours.
"""

import math
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from umatrix_dashboard.errors import DimensionMismatchError, NoNeighboursError

Coordinates = Tuple[int, int]


class Direction(Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    LEFT = "left"
    RIGHT = "right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.TOP_LEFT: Direction.BOTTOM_RIGHT,
    Direction.TOP_RIGHT: Direction.BOTTOM_LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.BOTTOM_LEFT: Direction.TOP_RIGHT,
    Direction.BOTTOM_RIGHT: Direction.TOP_LEFT,
}


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """
    Euclidean distance between two reference vectors of equal length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(f"cannot compare vectors of length {len(a)} and {len(b)}")
    diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return math.sqrt(float(np.dot(diff, diff)))


class HexagonNode:
    """
    One lattice node: its (col, row) position, its reference vector and the
    coordinates of its neighbours.

    Neighbour links are stored as coordinates into the owning grid's vector
    array, so nodes never hold references to one another. The links are
    filled in by HexagonGrid; a freshly constructed node has none.
    """

    def __init__(self, col: int, row: int, vector: np.ndarray):
        self.col = col
        self.row = row
        self.vector = vector
        self._codebook: Optional[np.ndarray] = None
        self._neighbours: Dict[Direction, Optional[Coordinates]] = {}

    def __repr__(self) -> str:
        return f"HexagonNode(col={self.col}, row={self.row}, neighbours={len(self.directions())})"

    @property
    def coordinates(self) -> Coordinates:
        return self.col, self.row

    def _link(self, direction: Direction, coordinates: Optional[Coordinates], codebook: np.ndarray) -> None:
        # only called by HexagonGrid during its adjacency pass
        if coordinates == self.coordinates:
            raise ValueError(f"node {self.coordinates} cannot neighbour itself")
        self._neighbours[direction] = coordinates
        self._codebook = codebook

    def has_neighbour(self, direction: Direction) -> bool:
        return self._neighbours.get(direction) is not None

    def neighbour_coordinates(self, direction: Direction) -> Optional[Coordinates]:
        return self._neighbours.get(direction)

    def directions(self) -> List[Direction]:
        """Directions that hold a neighbour, in enum order."""
        return [d for d in Direction if self.has_neighbour(d)]

    def distance_to(self, direction: Direction) -> Optional[float]:
        """
        Euclidean distance to the neighbour in `direction`, or None when that
        side of the node is the grid boundary.
        """
        coordinates = self._neighbours.get(direction)
        if coordinates is None:
            return None
        col, row = coordinates
        return euclidean_distance(self.vector, self._codebook[row, col])

    def _distances(self, statistic: str, strict: bool) -> List[float]:
        distances = [self.distance_to(d) for d in self.directions()]
        if not distances and strict:
            raise NoNeighboursError(f"node {self.coordinates} has no neighbours to take the {statistic} of")
        return distances

    def average_distance(self, strict: bool = False) -> Optional[float]:
        """
        Mean distance to the neighbours that exist. Boundary directions are
        left out rather than counted as zero.

        Returns None for a node without neighbours, or raises
        NoNeighboursError if `strict` is set.
        """
        distances = self._distances("average", strict)
        if not distances:
            return None
        return sum(distances) / len(distances)

    def max_distance(self, strict: bool = False) -> Optional[float]:
        """Largest distance to an existing neighbour; same no-neighbour rules as average_distance."""
        distances = self._distances("maximum", strict)
        if not distances:
            return None
        return max(distances)
