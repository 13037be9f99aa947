import numpy as np
import pytest

from umatrix_dashboard.codebook import format_codebook
from umatrix_dashboard.grid_loader import load

SQUARE_2X2 = "2 0 2 2\r\n0.0 0.0\r\n1.0 0.0\r\n0.0 1.0\r\n1.0 1.0\r\n"


@pytest.fixture
def square_text():
    return SQUARE_2X2


@pytest.fixture
def square_grid():
    return load(SQUARE_2X2)


@pytest.fixture
def single_grid():
    return load("2 hexa 1 1\r\n1.0 2.0\r\n")


@pytest.fixture
def random_grid():
    rng = np.random.default_rng(7)
    return load(format_codebook(rng.random((5, 5, 4))))
