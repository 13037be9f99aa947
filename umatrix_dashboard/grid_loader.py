# grid_loader.py

"""
Load a codebook into a ready-to-query HexagonGrid.
"""

import asyncio
import logging
import os
import re
from typing import Union

from umatrix_dashboard.codebook import parse_header, parse_vector_grid
from umatrix_dashboard.errors import MalformedHeaderError, MalformedInputError, UMatrixError
from umatrix_dashboard.hex_grid import HexagonGrid

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

RECORD_SEPARATOR = re.compile(r"\r?\n")


def construct_hexagon_grid(vector_grid, vector_dim: int, x_dim: int, y_dim: int) -> HexagonGrid:
    """Wrap a parsed vector grid in nodes and link them."""
    return HexagonGrid(vector_grid, vector_dim, x_dim, y_dim)


def load(raw: Union[str, bytes]) -> HexagonGrid:
    """
    Parse codebook text (or UTF-8 bytes) and build its hexagon grid.

    Parameters:
        raw: the whole codebook, header line first.

    Returns:
        A fully linked HexagonGrid. Any parse error aborts the load.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"codebook is not valid UTF-8: {exc}") from None

    if not raw:
        raise MalformedHeaderError("codebook is empty")
    # records are CRLF separated, bare LF is also accepted
    lines = RECORD_SEPARATOR.split(raw)

    header = parse_header(lines[0])
    logger.debug(
        f"Codebook header: vector_dim={header.vector_dim}, topology={header.topology!r}, "
        f"x_dim={header.x_dim}, y_dim={header.y_dim}"
    )

    vector_grid = parse_vector_grid(lines[1:], header.vector_dim, header.x_dim, header.y_dim)
    return construct_hexagon_grid(vector_grid, header.vector_dim, header.x_dim, header.y_dim)


def _read_bytes(path: PathLike) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def _build(raw: bytes, path: PathLike) -> HexagonGrid:
    try:
        grid = load(raw)
    except UMatrixError as e:
        logger.error(f"Failed to load codebook '{path}': {e}")
        raise
    logger.info(f"Loaded {grid.x_dim}x{grid.y_dim} codebook from: {path}")
    return grid


def load_file(path: PathLike) -> HexagonGrid:
    logger.info(f"Loading codebook from: {path}")
    return _build(_read_bytes(path), path)


async def load_file_async(path: PathLike) -> HexagonGrid:
    """
    Read the codebook in a worker thread, then build the grid.

    Only the read suspends; construction runs to completion once the bytes
    are in, so a cancelled load never leaves a partial grid behind.
    """
    logger.info(f"Loading codebook from: {path}")
    raw = await asyncio.to_thread(_read_bytes, path)
    return _build(raw, path)
