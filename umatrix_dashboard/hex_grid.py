# hex_grid.py

"""
The hexagonal lattice of codebook nodes: adjacency under the odd-row-shifted
(doubled coordinate) rule, distance statistics, and the expanded U-Matrix.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from umatrix_dashboard.errors import DimensionMismatchError
from umatrix_dashboard.hex_node import Coordinates, Direction, HexagonNode

logger = logging.getLogger(__name__)

# each unordered pair of neighbours is reached exactly once through these
FORWARD_DIRECTIONS = (Direction.RIGHT, Direction.BOTTOM_LEFT, Direction.BOTTOM_RIGHT)

Edge = Tuple[Coordinates, Coordinates, float]


def neighbour_coordinates(col: int, row: int) -> Dict[Direction, Coordinates]:
    """
    Candidate (col, row) of the six neighbours of the node at (col, row),
    before bounds checking.
    """
    # hexagons on odd rows are shifted half a step right of those on even rows
    row_shift = 1 if row % 2 else 0
    return {
        Direction.TOP_LEFT:     (col - 1 + row_shift, row - 1),
        Direction.TOP_RIGHT:    (col + row_shift,     row - 1),
        Direction.LEFT:         (col - 1,             row),
        Direction.RIGHT:        (col + 1,             row),
        Direction.BOTTOM_LEFT:  (col - 1 + row_shift, row + 1),
        Direction.BOTTOM_RIGHT: (col + row_shift,     row + 1),
    }


def offset_to_axial(col: int, row: int) -> Tuple[int, int]:
    """Axial (q, r) of an odd-row-shifted offset coordinate."""
    return col - (row - (row & 1)) // 2, row


class HexagonGrid:
    """
    All nodes of one loaded codebook, stored row-major.

    The grid is complete once the constructor returns: every node is linked
    to its neighbours and the largest neighbour distance is cached. Nothing
    mutates it afterwards.
    """

    def __init__(self, vector_grid: np.ndarray, vector_dim: int, x_dim: int, y_dim: int):
        codebook = np.array(vector_grid, dtype=float)
        if codebook.shape != (y_dim, x_dim, vector_dim):
            raise DimensionMismatchError(
                f"vector grid has shape {codebook.shape}, expected {(y_dim, x_dim, vector_dim)}"
            )
        codebook.setflags(write=False)

        self.vector_dim = vector_dim
        self.x_dim = x_dim
        self.y_dim = y_dim
        self._codebook = codebook
        self._nodes: List[HexagonNode] = [
            HexagonNode(col, row, codebook[row, col])
            for row in range(y_dim)
            for col in range(x_dim)
        ]

        self.calculate_all_neighbours()
        self._max_distance = self._compute_max_distance()
        logger.debug(
            f"Built {x_dim}x{y_dim} hexagon grid (vector_dim={vector_dim}, "
            f"max_distance={self._max_distance})"
        )

    def __repr__(self) -> str:
        return f"HexagonGrid(x_dim={self.x_dim}, y_dim={self.y_dim}, vector_dim={self.vector_dim})"

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[HexagonNode]:
        return iter(self._nodes)

    def __getitem__(self, index: Tuple[int, int]) -> HexagonNode:
        row, col = index
        return self.node(row, col)

    @property
    def codebook(self) -> np.ndarray:
        """Read-only (y_dim, x_dim, vector_dim) array of reference vectors."""
        return self._codebook

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.x_dim and 0 <= row < self.y_dim

    def node(self, row: int, col: int) -> HexagonNode:
        if not self.in_bounds(col, row):
            raise IndexError(f"(row={row}, col={col}) is outside a {self.x_dim}x{self.y_dim} grid")
        return self._nodes[row * self.x_dim + col]

    def neighbour(self, node: HexagonNode, direction: Direction) -> Optional[HexagonNode]:
        coordinates = node.neighbour_coordinates(direction)
        if coordinates is None:
            return None
        col, row = coordinates
        return self.node(row, col)

    def calculate_all_neighbours(self) -> None:
        """Link every node to its in-bounds neighbours, row by row."""
        for node in self._nodes:
            self.calculate_neighbours(node)

    def calculate_neighbours(self, node: HexagonNode) -> None:
        for direction, (col, row) in neighbour_coordinates(node.col, node.row).items():
            target = (col, row) if self.in_bounds(col, row) else None
            node._link(direction, target, self._codebook)

    def _compute_max_distance(self) -> Optional[float]:
        per_node = [d for d in (node.max_distance() for node in self._nodes) if d is not None]
        if not per_node:
            return None
        return max(per_node)

    def max_distance(self) -> Optional[float]:
        """
        Largest distance between any two adjacent nodes in the grid, or None
        for a grid with a single node.
        """
        return self._max_distance

    def normalised_distance(self, node: HexagonNode, direction: Direction) -> Optional[float]:
        """Distance to the neighbour in `direction` as a ratio of max_distance()."""
        return self.distance_ratio(node.distance_to(direction))

    def edges(self) -> List[Edge]:
        """Every pair of adjacent nodes once, with the distance between them."""
        edges: List[Edge] = []
        for node in self._nodes:
            for direction in FORWARD_DIRECTIONS:
                other = node.neighbour_coordinates(direction)
                if other is not None:
                    edges.append((node.coordinates, other, node.distance_to(direction)))
        return edges

    def average_distance_map(self) -> np.ndarray:
        """
        Per-node mean neighbour distance as a (y_dim, x_dim) array. A node with
        no neighbours has no value and is left as NaN.
        """
        um = np.full((self.y_dim, self.x_dim), np.nan)
        for node in self._nodes:
            avg = node.average_distance()
            if avg is not None:
                um[node.row, node.col] = avg
        return um

    def distance_ratio(self, value: Optional[float]) -> Optional[float]:
        """
        A distance as a fraction of max_distance(). None stays None, and a grid
        whose edges all have length 0 gives 0.0.
        """
        if value is None or self._max_distance is None:
            return None
        return value / self._max_distance if self._max_distance else 0.0

    def umatrix_cells(self) -> pd.DataFrame:
        """
        The expanded U-Matrix: one hexagon per node plus one between every pair
        of neighbours, in doubled axial coordinates (q, r).

        Node hexagons sit at twice their own axial coordinates; an edge hexagon
        sits halfway between the two node hexagons it separates.
        """
        records = []
        for node in self._nodes:
            q, r = offset_to_axial(node.col, node.row)
            avg = node.average_distance()
            records.append({
                'kind':  'node',
                'q':     2 * q,
                'r':     2 * r,
                'col':   node.col,
                'row':   node.row,
                'value': avg,
                'ratio': self.distance_ratio(avg),
            })

        for (col_a, row_a), (col_b, row_b), distance in self.edges():
            qa, ra = offset_to_axial(col_a, row_a)
            qb, rb = offset_to_axial(col_b, row_b)
            records.append({
                'kind':  'edge',
                'q':     qa + qb,
                'r':     ra + rb,
                'col':   col_a,
                'row':   row_a,
                'value': distance,
                'ratio': self.distance_ratio(distance),
            })

        return pd.DataFrame.from_records(
            records, columns=['kind', 'q', 'r', 'col', 'row', 'value', 'ratio']
        )

    def to_frame(self) -> pd.DataFrame:
        """One row per node with its coordinates and neighbour statistics."""
        records = [
            {
                'col':              node.col,
                'row':              node.row,
                'average_distance': node.average_distance(),
                'max_distance':     node.max_distance(),
                'neighbours':       len(node.directions()),
            }
            for node in self._nodes
        ]
        return pd.DataFrame.from_records(
            records, columns=['col', 'row', 'average_distance', 'max_distance', 'neighbours']
        )
