"""
Hexagonal SOM U-Matrix: codebook loading, lattice distances, Bokeh dashboard.
"""

from umatrix_dashboard.errors import (
    UMatrixError, MalformedHeaderError, MalformedInputError,
    DimensionMismatchError, NoNeighboursError
)
from umatrix_dashboard.hex_node import Direction, HexagonNode
from umatrix_dashboard.hex_grid import HexagonGrid
from umatrix_dashboard.grid_loader import load, load_file, load_file_async
