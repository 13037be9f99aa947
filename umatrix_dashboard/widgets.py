# widgets.py

"""
Define interactive widgets for the U-Matrix dashboard.
"""

from bokeh.models import Toggle


def create_statistic_toggle() -> Toggle:
    """
    Toggle vector hexagons between average and maximum neighbour distance.
    """
    return Toggle(label="Shade nodes by max distance", button_type="primary", active=False)
