import numpy as np
import pytest

from umatrix_dashboard.errors import DimensionMismatchError, NoNeighboursError
from umatrix_dashboard.hex_node import Direction, HexagonNode, euclidean_distance


def test_direction_values():
    assert [d.value for d in Direction] == [
        "top-left", "top-right", "left", "right", "bottom-left", "bottom-right"
    ]


def test_opposites_are_involutions():
    for d in Direction:
        assert d.opposite is not d
        assert d.opposite.opposite is d
    assert Direction.TOP_LEFT.opposite is Direction.BOTTOM_RIGHT
    assert Direction.TOP_RIGHT.opposite is Direction.BOTTOM_LEFT


def test_euclidean_distance():
    assert euclidean_distance(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == 5.0


def test_euclidean_distance_rejects_unequal_lengths():
    with pytest.raises(DimensionMismatchError):
        euclidean_distance(np.array([1.0, 2.0]), np.array([1.0, 2.0, 3.0]))


def test_new_node_has_no_links():
    node = HexagonNode(2, 1, np.array([1.0, 2.0]))
    assert node.coordinates == (2, 1)
    assert node.directions() == []
    for d in Direction:
        assert not node.has_neighbour(d)
        assert node.distance_to(d) is None
    assert node.average_distance() is None
    assert node.max_distance() is None


def test_unlinked_node_strict_statistics_raise():
    node = HexagonNode(0, 0, np.array([1.0]))
    with pytest.raises(NoNeighboursError):
        node.average_distance(strict=True)
    with pytest.raises(NoNeighboursError):
        node.max_distance(strict=True)


def test_node_cannot_link_to_itself():
    codebook = np.zeros((1, 2, 1))
    node = HexagonNode(0, 0, codebook[0, 0])
    with pytest.raises(ValueError):
        node._link(Direction.RIGHT, (0, 0), codebook)


def test_statistics_skip_boundary_directions():
    codebook = np.array([[[0.0, 0.0], [3.0, 4.0], [0.0, 1.0]]])
    node = HexagonNode(0, 0, codebook[0, 0])
    node._link(Direction.RIGHT, (1, 0), codebook)
    node._link(Direction.BOTTOM_RIGHT, (2, 0), codebook)
    node._link(Direction.LEFT, None, codebook)

    assert node.directions() == [Direction.RIGHT, Direction.BOTTOM_RIGHT]
    assert node.distance_to(Direction.RIGHT) == 5.0
    assert node.distance_to(Direction.LEFT) is None
    assert node.average_distance() == pytest.approx(3.0)
    assert node.max_distance() == 5.0


def test_mismatched_neighbour_vector():
    codebook = np.zeros((1, 2, 3))
    node = HexagonNode(0, 0, np.array([0.0, 0.0]))
    node._link(Direction.RIGHT, (1, 0), codebook)
    with pytest.raises(DimensionMismatchError):
        node.distance_to(Direction.RIGHT)
