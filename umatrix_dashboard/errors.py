# errors.py

"""
Exceptions raised while loading a codebook and querying the hexagon grid.
"""


class UMatrixError(Exception):
    """Base class for every error raised by this package."""


class MalformedHeaderError(UMatrixError, ValueError):
    """The codebook header is missing, too short, or has non-numeric dimensions."""


class MalformedInputError(UMatrixError, ValueError):
    """The data section is truncated or holds a token that is not a number."""


class DimensionMismatchError(UMatrixError, ValueError):
    """Two vectors (or a vector grid and its declared dimensions) disagree in size."""


class NoNeighboursError(UMatrixError, LookupError):
    """A node with no neighbours was asked for a neighbour statistic."""
