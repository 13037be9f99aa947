# main.py

"""
Entry point for Bokeh Server: loads a codebook, builds the U-Matrix plot,
tables, and widgets.

Run with:
    bokeh serve --show umatrix_dashboard
"""

import os

from bokeh.io import curdoc
from bokeh.layouts import column, row

from umatrix_dashboard.cluster_analysis import assign_clusters, compute_cluster_means
from umatrix_dashboard.grid_loader import load_file
from umatrix_dashboard.logging_config import setup_logging
from umatrix_dashboard.plots import build_umatrix_plot, build_node_table, build_data_table
from umatrix_dashboard.widgets import create_statistic_toggle


# 0) Settings, overridable from the environment
HERE          = os.path.dirname(__file__)
CODEBOOK_PATH = os.environ.get("UMATRIX_CODEBOOK", os.path.join(HERE, 'data', 'example.cod'))
N_CLUSTERS    = int(os.environ.get("UMATRIX_CLUSTERS", "4"))

setup_logging()

# 1) Load the codebook; a failed load propagates so the server reports it
grid = load_file(CODEBOOK_PATH)

# 2) Cluster the codebook & compute summary
node_df          = assign_clusters(grid, n_clusters=N_CLUSTERS)
cluster_means_df = compute_cluster_means(node_df)

# 3) Widgets
toggle = create_statistic_toggle()

# 4) Plots & tables
p_hex, source_hex = build_umatrix_plot(grid, toggle)
node_table        = build_node_table(node_df)
cluster_table     = build_data_table(cluster_means_df)

# 5) Assemble layout
layout = column(
    row(toggle, sizing_mode="stretch_width"),
    row(p_hex, column(cluster_table, node_table)),
    sizing_mode="stretch_width"
)

curdoc().add_root(layout)
curdoc().title = "SOM U-Matrix"
