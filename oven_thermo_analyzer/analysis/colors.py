"""Value-to-color mapping for the temperature and performance heatmaps.

Colors are plain ``(r, g, b)`` byte tuples; ``None`` means "gray" (no scale,
or a display string that carries no number).
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

RGB = Tuple[int, int, int]

# blue -> cyan -> green -> yellow -> red
GRADIENT_OFFSETS = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
GRADIENT_COLORS = np.array(
    [
        [0, 0, 255],
        [0, 255, 255],
        [0, 255, 0],
        [255, 255, 0],
        [255, 0, 0],
    ],
    dtype=np.float64,
)

GRAY: RGB = (128, 128, 128)


def interpolate_gradient(fraction: float) -> RGB:
    """Color at ``fraction`` in [0, 1]; channels are truncated to bytes."""
    f = float(np.clip(fraction, 0.0, 1.0))
    rgb = [np.interp(f, GRADIENT_OFFSETS, GRADIENT_COLORS[:, k]) for k in range(3)]
    return tuple(int(c) for c in rgb)  # type: ignore[return-value]


def gradient_color(value: float, lo: Optional[float], hi: Optional[float]) -> Optional[RGB]:
    if lo is None or hi is None or hi <= lo:
        return None
    v = min(max(value, lo), hi)
    return interpolate_gradient((v - lo) / (hi - lo))


def _number_before(text: str, suffix: str) -> Optional[float]:
    if not text.endswith(suffix):
        return None
    try:
        return float(text[: -len(suffix)].strip())
    except ValueError:
        return None


def temperature_color(text: str, lo: Optional[float], hi: Optional[float]) -> Optional[RGB]:
    """Color for a ``"23.5°C"`` display string against the current scale."""
    value = _number_before(text, "°C")
    if value is None:
        return None
    return gradient_color(value, lo, hi)


def performance_color(text: str) -> Optional[RGB]:
    """Color for a ``"85%"`` display string on a fixed 0-100 scale."""
    value = _number_before(text, "%")
    if value is None:
        return None
    return gradient_color(value, 0.0, 100.0)
