"""Analysis package.

Design principle:
  - Ingest produces immutable records; analysis only reads them.
  - The only state change is the thermoelement deactivation latch, and it is
    performed explicitly through :func:`~.temporal.apply_outcome`.

Modules:
  - spatial: performance grid traversal, settings indices, pyrometer cells, placement
  - temporal: offset -> record -> reading, aggregates
  - stats: per-canvas statistics, auto color scale, timeline arithmetic
  - colors: gradient mapping for heatmaps
"""

from .spatial import GridCell, cell_at, iter_cells, linear_index, performance_text, split_performance_settings
from .temporal import (
    apply_outcome,
    average_of,
    display_text,
    find_record,
    min_max_of,
    read_channel,
    resolve,
    target_timestamp,
    value_at,
)
from .stats import CanvasStats, all_canvas_stats, auto_color_scale, canvas_stats, refresh_stats
from .colors import GRAY, gradient_color, performance_color, temperature_color

__all__ = [
    "GridCell",
    "cell_at",
    "iter_cells",
    "linear_index",
    "performance_text",
    "split_performance_settings",
    "apply_outcome",
    "average_of",
    "display_text",
    "find_record",
    "min_max_of",
    "read_channel",
    "resolve",
    "target_timestamp",
    "value_at",
    "CanvasStats",
    "all_canvas_stats",
    "auto_color_scale",
    "canvas_stats",
    "refresh_stats",
    "GRAY",
    "gradient_color",
    "performance_color",
    "temperature_color",
]
