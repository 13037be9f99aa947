# plots.py

"""
Build Bokeh figures: the U-Matrix hex plot and the node / cluster tables.
"""

from typing import Tuple

import numpy as np
import pandas as pd
from bokeh.models import (
    ColumnDataSource, HoverTool, LinearColorMapper, ColorBar,
    CustomJS, NumberFormatter, TableColumn, DataTable, Toggle
)
from bokeh.models.glyphs import HexTile
from bokeh.palettes import Greys256
from bokeh.plotting import figure
from bokeh.util.hex import axial_to_cartesian

from umatrix_dashboard.hex_grid import HexagonGrid

# light for close neighbours, dark for cluster boundaries
UMATRIX_PALETTE = tuple(reversed(Greys256))


def _max_ratios(grid: HexagonGrid, cells: pd.DataFrame) -> np.ndarray:
    # edge hexes keep their own ratio; node hexes take their largest neighbour distance
    ratios = cells['ratio'].to_numpy(dtype=float).copy()
    for i, (kind, col, row) in enumerate(zip(cells['kind'], cells['col'], cells['row'])):
        if kind == 'node':
            ratio = grid.distance_ratio(grid.node(row, col).max_distance())
            ratios[i] = np.nan if ratio is None else ratio
    return ratios


def build_umatrix_plot(
    grid: HexagonGrid,
    toggle: Toggle
) -> Tuple[figure, ColumnDataSource]:
    """
    Draw the expanded U-Matrix: a hexagon per codebook vector, marked with a
    dot, and a hexagon between each pair of neighbours shaded by their distance.

    Parameters:
        grid: a loaded HexagonGrid.
        toggle: switches vector hexagons between average and max distance shading.

    Returns:
        The figure and the ColumnDataSource holding one row per hexagon.
    """
    # 1) one row per hexagon, both node statistics kept for the toggle
    cells = grid.umatrix_cells()
    cells['avg_ratio'] = cells['ratio'].astype(float)
    cells['max_ratio'] = _max_ratios(grid, cells)
    cells['ratio'] = cells['avg_ratio']
    source = ColumnDataSource(cells)

    # 2) build the figure
    p_hex = figure(
        title=f"U-Matrix ({grid.x_dim} x {grid.y_dim}, dim {grid.vector_dim})",
        tools="pan,wheel_zoom,reset",
        match_aspect=True, width=600, height=500,
        background_fill_color="#ffffff", outline_line_color="#cccccc"
    )
    p_hex.grid.visible = False
    p_hex.axis.visible = False

    # 3) hexagons shaded by distance ratio
    cmap = LinearColorMapper(palette=UMATRIX_PALETTE, low=0, high=1, nan_color="#f0e0e0")
    hex_renderer = p_hex.hex_tile(
        q="q", r="r", size=1, orientation="pointytop",
        source=source,
        fill_color={"field": "ratio", "transform": cmap},
        line_color="#ffffff",
        line_width=0.5,
    )
    hex_renderer.hover_glyph = HexTile(
        q="q", r="r", size=1, orientation="pointytop",
        fill_color={"field": "ratio", "transform": cmap}, line_color="#cc0000"
    )

    # 4) dots on the vector hexagons
    nodes = cells[cells['kind'] == 'node']
    x, y = axial_to_cartesian(nodes['q'].to_numpy(), nodes['r'].to_numpy(), 1, "pointytop")
    p_hex.scatter(x=x, y=y, marker="circle", size=4, color="#000000")

    # 5) exactly one HoverTool
    hover = HoverTool(
        renderers=[hex_renderer],
        tooltips=[
            ("Hexagon",  "@kind"),
            ("Node",     "(@col, @row)"),
            ("Distance", "@value{0.000}"),
            ("Ratio",    "@ratio{0.00}"),
        ],
        point_policy="follow_mouse"
    )
    p_hex.add_tools(hover)

    cb = ColorBar(color_mapper=cmap, label_standoff=12, border_line_color=None,
                  location=(0, 0), title="Distance / max")
    p_hex.add_layout(cb, 'right')

    # 6) wire up the statistic toggle
    toggle.js_on_change('active', CustomJS(
        args=dict(src=source),
        code="""
            const showMax = cb_obj.active;
            const ratios = showMax ? src.data['max_ratio'] : src.data['avg_ratio'];
            // assign a fresh array to ensure change detection
            src.data['ratio'] = ratios.slice();
            src.change.emit();
        """
    ))

    return p_hex, source


def build_node_table(frame: pd.DataFrame) -> DataTable:
    source = ColumnDataSource(frame)
    cols = [
        TableColumn(field='col', title='Col', width=50),
        TableColumn(field='row', title='Row', width=50),
    ]
    for c in frame.columns.drop(['col', 'row']):
        cols.append(TableColumn(field=c, title=c, width=120))
    return DataTable(source=source, columns=cols, width=600, height=280,
                     fit_columns=False, index_position=None)


def build_data_table(cluster_means_df: pd.DataFrame) -> DataTable:
    """
    Cluster summary: size and mean neighbour distances of each cluster.

    Parameters:
        cluster_means_df: output of compute_cluster_means.

    Returns:
        A DataTable with distances shown to three decimals.
    """
    distance_format = NumberFormatter(format="0.000")
    titles = {
        'hc_cluster':       ('Cluster', None),
        'nodes':            ('Nodes', None),
        'average_distance': ('Mean avg distance', distance_format),
        'max_distance':     ('Mean max distance', distance_format),
    }
    cols = []
    for field in cluster_means_df.columns:
        title, formatter = titles.get(field, (field, None))
        kwargs = {'formatter': formatter} if formatter is not None else {}
        cols.append(TableColumn(field=field, title=title, width=120, **kwargs))
    return DataTable(source=ColumnDataSource(cluster_means_df), columns=cols,
                     width=600, height=200, index_position=None)
