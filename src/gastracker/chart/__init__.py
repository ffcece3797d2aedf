"""Chart core -- synthetic series generation and bar geometry scaling."""

from gastracker.chart.scaler import (
    axis_labels,
    bar_geometry,
    chart_geometry,
    compute_range,
    height_percent,
    visible_window,
)
from gastracker.chart.series import SeriesGenerator, generate_series

__all__ = [
    "SeriesGenerator",
    "axis_labels",
    "bar_geometry",
    "chart_geometry",
    "compute_range",
    "generate_series",
    "height_percent",
    "visible_window",
]
