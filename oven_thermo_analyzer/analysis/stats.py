from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from oven_thermo_analyzer.analysis.temporal import average_of, min_max_of
from oven_thermo_analyzer.models.catalog import CANVAS_TYPES
from oven_thermo_analyzer.models.profile import ViewerSession
from oven_thermo_analyzer.models.results import UNAVAILABLE_TEXT


def format_temperature(value: Optional[float]) -> str:
    return UNAVAILABLE_TEXT if value is None else f"{value:.1f}°C"


@dataclass(frozen=True)
class CanvasStats:
    """Aggregate temperatures of one canvas at one offset (None = no contributing channel)."""

    average: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def difference(self) -> Optional[float]:
        if self.minimum is None or self.maximum is None:
            return None
        return self.maximum - self.minimum

    def display(self) -> Dict[str, str]:
        return {
            "average": format_temperature(self.average),
            "minimum": format_temperature(self.minimum),
            "maximum": format_temperature(self.maximum),
            "difference": format_temperature(self.difference),
        }


def canvas_stats(session: ViewerSession, canvas_type: str, offset_s: Optional[float] = None) -> CanvasStats:
    tes = session.thermoelements_for(canvas_type)
    lo, hi = min_max_of(session, tes, offset_s)
    return CanvasStats(average=average_of(session, tes, offset_s), minimum=lo, maximum=hi)


def all_canvas_stats(session: ViewerSession, offset_s: Optional[float] = None) -> Dict[str, CanvasStats]:
    return {ct: canvas_stats(session, ct, offset_s) for ct in CANVAS_TYPES}


def auto_color_scale(stats: Mapping[str, CanvasStats]) -> Optional[Tuple[float, float]]:
    """Overall (min, max) across canvases; None if no canvas has data."""
    mins = [s.minimum for s in stats.values() if s.minimum is not None]
    maxs = [s.maximum for s in stats.values() if s.maximum is not None]
    if not mins or not maxs:
        return None
    return min(mins), max(maxs)


def refresh_stats(session: ViewerSession) -> Dict[str, CanvasStats]:
    """Compute stats for every canvas and, in auto mode, update the session color scale."""
    stats = all_canvas_stats(session)
    session.update_color_scale(auto_color_scale(stats))
    return stats


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

_OFFSET_RE = re.compile(r"^\s*(\d+):([0-5]\d)\s*$")


def record_count(session: ViewerSession) -> int:
    """Records of the 1-10 measurement, or of the 11-20 one if the former is empty/absent."""
    for group in ("1-10", "11-20"):
        m = session.measurements.get(group)
        if m is not None and m.records:
            return len(m.records)
    return 0


def max_offset_s(session: ViewerSession) -> float:
    n = record_count(session)
    return (n - 1) * session.sampling_interval_s if n > 0 else 0.0


def clamp_offset(session: ViewerSession, offset_s: float) -> float:
    return min(max(0.0, float(offset_s)), max_offset_s(session))


def parse_offset_text(text: str) -> Optional[float]:
    """``"mm:ss"`` -> seconds; None if the text does not match."""
    m = _OFFSET_RE.match(text)
    if not m:
        return None
    return int(m.group(1)) * 60.0 + int(m.group(2))


def format_offset(offset_s: float) -> str:
    total = int(offset_s)
    return f"{total // 60:02d}:{total % 60:02d}"


def set_offset_from_text(session: ViewerSession, text: str) -> bool:
    """Apply a typed ``mm:ss`` offset (clamped to the timeline). Returns False if unparsable."""
    seconds = parse_offset_text(text)
    if seconds is None:
        return False
    session.time_offset_s = clamp_offset(session, seconds)
    return True


def next_offset(session: ViewerSession) -> Optional[float]:
    """Playback step: current offset + one sampling interval, or None past the end."""
    nxt = session.time_offset_s + session.sampling_interval_s
    if nxt > max_offset_s(session):
        return None
    return nxt
