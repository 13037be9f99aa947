# codebook.py

"""
Read and write SOM codebook text: a header line with the map dimensions,
followed by one reference vector per line in row-major order.
"""

from typing import List, NamedTuple, Sequence

import numpy as np
from minisom import MiniSom

from umatrix_dashboard.errors import MalformedHeaderError, MalformedInputError

LINE_SEPARATOR = "\r\n"


class CodebookHeader(NamedTuple):
    vector_dim: int
    topology: str
    x_dim: int
    y_dim: int


def _header_int(token: str, name: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise MalformedHeaderError(f"header field {name!r} is not an integer: {token!r}") from None
    if value <= 0:
        raise MalformedHeaderError(f"header field {name!r} must be positive, got {value}")
    return value


def parse_header(line: str) -> CodebookHeader:
    """
    Parse the first line of a codebook.

    Parameters:
        line: text of the form '<vector_dim> <topology> <x_dim> <y_dim> [...]'.

    Returns:
        A CodebookHeader. The topology token is kept as text and not interpreted.
    """
    tokens = line.split()
    if len(tokens) < 4:
        raise MalformedHeaderError(
            f"expected at least 4 header fields, got {len(tokens)}: {line!r}"
        )
    return CodebookHeader(
        vector_dim=_header_int(tokens[0], "vector_dim"),
        topology=tokens[1],
        x_dim=_header_int(tokens[2], "x_dim"),
        y_dim=_header_int(tokens[3], "y_dim"),
    )


def parse_vector_grid(
    lines: Sequence[str],
    vector_dim: int,
    x_dim: int,
    y_dim: int
) -> np.ndarray:
    """
    Turn the data section of a codebook into a 3-D array of reference vectors.

    Parameters:
        lines: data lines (header already removed), one vector per line.
        vector_dim: number of leading tokens per line that belong to the vector.
        x_dim, y_dim: map width and height.

    Returns:
        A float array of shape (y_dim, x_dim, vector_dim), where
        [row, col] holds the vector from line row * x_dim + col.
    """
    n_nodes = x_dim * y_dim
    if len(lines) < n_nodes:
        raise MalformedInputError(
            f"expected {n_nodes} data lines for a {x_dim}x{y_dim} map, got {len(lines)}"
        )

    vector_grid = np.empty((y_dim, x_dim, vector_dim), dtype=float)
    for idx in range(n_nodes):
        # data line idx sits on line idx + 2 of the file
        tokens = lines[idx].split()[:vector_dim]
        if len(tokens) < vector_dim:
            raise MalformedInputError(
                f"line {idx + 2}: expected {vector_dim} values, got {len(tokens)}"
            )
        # float() also takes digit groups such as '1_000'
        if any('_' in tok for tok in tokens):
            raise MalformedInputError(f"line {idx + 2}: malformed number in {tokens!r}")
        try:
            values = np.array([float(tok) for tok in tokens])
        except ValueError as exc:
            raise MalformedInputError(f"line {idx + 2}: {exc}") from None
        if not np.isfinite(values).all():
            raise MalformedInputError(f"line {idx + 2}: non-finite value")
        row, col = divmod(idx, x_dim)
        vector_grid[row, col] = values

    return vector_grid


def format_codebook(vector_grid: np.ndarray, topology: str = "hexa") -> str:
    """
    Serialize a (y_dim, x_dim, vector_dim) array in the codebook text format.
    """
    vector_grid = np.asarray(vector_grid, dtype=float)
    if vector_grid.ndim != 3:
        raise ValueError(f"vector grid must be 3-D, got shape {vector_grid.shape}")
    y_dim, x_dim, vector_dim = vector_grid.shape

    lines: List[str] = [f"{vector_dim} {topology} {x_dim} {y_dim}"]
    for row in range(y_dim):
        for col in range(x_dim):
            lines.append(" ".join(repr(float(v)) for v in vector_grid[row, col]))
    return LINE_SEPARATOR.join(lines) + LINE_SEPARATOR


def codebook_from_minisom(som: MiniSom, topology: str = "hexa") -> str:
    """
    Export the weights of a trained MiniSom as codebook text.

    MiniSom stores weights as (x, y, features); unit (i, j) becomes the node
    at col=i, row=j.
    """
    weights = som.get_weights()
    return format_codebook(np.transpose(weights, (1, 0, 2)), topology=topology)
