# cluster_analysis.py

"""
Perform hierarchical clustering on the codebook vectors, constrained to the
hexagonal lattice so that every cluster is a connected region of the map.
"""

import numpy as np
import pandas as pd
from sklearn.cluster import AgglomerativeClustering

from umatrix_dashboard.hex_grid import HexagonGrid


def adjacency_matrix(grid: HexagonGrid) -> np.ndarray:
    """
    Node-to-node adjacency of the lattice.

    Parameters:
        grid: a loaded HexagonGrid.

    Returns:
        A symmetric (n, n) array of 0/1, n = x_dim * y_dim, where node
        (col, row) has index row * x_dim + col.
    """
    n = len(grid)
    adjacency = np.zeros((n, n), dtype=int)
    for (col_a, row_a), (col_b, row_b), _ in grid.edges():
        i = row_a * grid.x_dim + col_a
        j = row_b * grid.x_dim + col_b
        adjacency[i, j] = adjacency[j, i] = 1
    return adjacency


def assign_clusters(
    grid: HexagonGrid,
    n_clusters: int = 5
) -> pd.DataFrame:
    """
    Cluster the grid's reference vectors with Ward linkage, allowing merges
    only between neighbouring nodes.

    Parameters:
        grid: a loaded HexagonGrid.
        n_clusters: number of clusters; capped at the number of nodes.

    Returns:
        DataFrame: grid.to_frame() with a new 'hc_cluster' column.
    """
    frame = grid.to_frame()
    n_clusters = max(1, min(n_clusters, len(grid)))

    if len(grid) == 1:
        frame['hc_cluster'] = 0
        return frame

    flat_weights = grid.codebook.reshape(len(grid), -1)
    hc = AgglomerativeClustering(
        n_clusters=n_clusters,
        connectivity=adjacency_matrix(grid)
    )
    frame['hc_cluster'] = hc.fit_predict(flat_weights).astype(int)
    return frame


def compute_cluster_means(
    frame: pd.DataFrame
) -> pd.DataFrame:
    """
    Mean neighbour distances and node count for each cluster.

    Parameters:
        frame: output of assign_clusters.

    Returns:
        A DataFrame with 'hc_cluster', 'nodes', 'average_distance' and 'max_distance'.
    """
    grouped = frame.groupby('hc_cluster')
    cluster_means = grouped[['average_distance', 'max_distance']].mean()
    cluster_means.insert(0, 'nodes', grouped.size())
    return cluster_means.reset_index()
