"""Viewer session -- the explicit selection/context object.

A ViewerSession groups everything the resolver, the statistics and the
renderer read about "what is currently shown":

- the loaded measurement per channel group
- thermoelements and canvas assignments per canvas
- playback offset and sampling interval
- color scale and layer toggles

It replaces process-wide state: every entry point takes the session as an
argument, so tests build one per case.  View settings can be serialized
to/from a dict for JSON provenance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from oven_thermo_analyzer.models.catalog import (
    CANVAS_TYPES,
    CanvasAssignment,
    ChannelGroup,
    Measurement,
    Thermoelement,
    channel_group,
)
from oven_thermo_analyzer.models.results import DeactivationEvent, ReadingKind

logger = logging.getLogger(__name__)


DEFAULT_LAYERS: Dict[str, bool] = {
    "show_pyrometer": True,
    "show_pyrometer_positions": True,
    "show_thermoelement_heatmap": True,
    "show_thermoelement_values": True,
    "show_performance_grid": True,
    "show_performance_heatmap": True,
    "show_performance_values": True,
}

DeactivationListener = Callable[[DeactivationEvent], None]


@dataclass
class ViewerSession:
    """Mutable selection state shared by the core entry points.

    Attributes
    ----------
    time_offset_s : float
        Playback offset relative to the first record of each measurement.
    sampling_interval_s : float
        Interval of the most recently imported file; drives playback steps.
    measurements : dict
        Loaded measurement per channel group (``"1-10"`` / ``"11-20"``).
    thermoelements : dict
        Placed thermoelements per canvas type.
    assignments : dict
        Canvas assignment per canvas type.
    color_scale_min, color_scale_max : float or None
        Temperature color range; None means "not set" (gray display).
    color_scale_auto : bool
        If True the range follows the data (see ``update_color_scale``).
    layers : dict
        Visibility toggles consumed by the renderer.
    """

    time_offset_s: float = 0.0
    sampling_interval_s: float = 1.0
    measurements: Dict[ChannelGroup, Optional[Measurement]] = field(
        default_factory=lambda: {"1-10": None, "11-20": None}
    )
    thermoelements: Dict[str, List[Thermoelement]] = field(default_factory=dict)
    assignments: Dict[str, CanvasAssignment] = field(default_factory=dict)
    color_scale_min: Optional[float] = None
    color_scale_max: Optional[float] = None
    color_scale_auto: bool = True
    layers: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_LAYERS))

    _listeners: List[DeactivationListener] = field(default_factory=list, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def measurement_for_channel(self, channel: int) -> Optional[Measurement]:
        group = channel_group(channel)
        if group is None:
            return None
        return self.measurements.get(group)

    def set_measurement(self, group: ChannelGroup, measurement: Optional[Measurement]) -> None:
        self.measurements[group] = measurement

    def attach_assignment(
        self,
        assignment: CanvasAssignment,
        thermoelements: List[Thermoelement],
        store: Any = None,
    ) -> None:
        """Register a canvas assignment and its thermoelements.

        If a store (anything with ``get_by_id``) is given, the assignment's
        measurements are fetched and become the session's group measurements.
        """
        self.assignments[assignment.canvas_type] = assignment
        self.thermoelements[assignment.canvas_type] = list(thermoelements)
        if store is not None:
            for group in ("1-10", "11-20"):
                mid = assignment.measurement_id_for_group(group)
                self.measurements[group] = store.get_by_id(mid) if mid is not None else None

    def thermoelements_for(self, canvas_type: str) -> List[Thermoelement]:
        return self.thermoelements.get(canvas_type, [])

    def reset(self) -> None:
        """Drop all selections and restore default view settings."""
        self.time_offset_s = 0.0
        self.sampling_interval_s = 1.0
        self.measurements = {"1-10": None, "11-20": None}
        self.thermoelements.clear()
        self.assignments.clear()
        self.color_scale_min = None
        self.color_scale_max = None
        self.color_scale_auto = True
        self.layers = dict(DEFAULT_LAYERS)

    # ------------------------------------------------------------------
    # Deactivation latch
    # ------------------------------------------------------------------

    def add_deactivation_listener(self, listener: DeactivationListener) -> None:
        """Listeners receive every DeactivationEvent (e.g. to persist the flag)."""
        self._listeners.append(listener)

    def deactivate(self, canvas_type: str, te: Thermoelement, reason: ReadingKind) -> Optional[DeactivationEvent]:
        """Latch ``te`` inactive. Returns the event, or None if it was already inactive."""
        if not te.is_active:
            return None
        te.is_active = False
        # Keep the session's copy in sync when the caller holds a different instance.
        for other in self.thermoelements.get(canvas_type, []):
            if other.id == te.id:
                other.is_active = False
        event = DeactivationEvent(canvas_type=canvas_type, thermoelement_id=te.id, channel=te.channel, reason=reason)
        logger.info("Deactivated thermoelement %s (channel %s, %s): %s", te.id, te.channel, canvas_type, reason)
        for listener in self._listeners:
            listener(event)
        return event

    # ------------------------------------------------------------------
    # Color scale
    # ------------------------------------------------------------------

    def set_color_scale(self, lo: float, hi: float) -> None:
        """Manual range; switches auto mode off. Rejects ``lo >= hi``."""
        if not lo < hi:
            raise ValueError(f"color scale min must be below max (got {lo} >= {hi})")
        self.color_scale_min = float(lo)
        self.color_scale_max = float(hi)
        self.color_scale_auto = False

    def update_color_scale(self, scale: Optional[Tuple[float, float]]) -> None:
        """Apply a data-driven range; ignored unless auto mode is on."""
        if not self.color_scale_auto:
            return
        if scale is None:
            self.color_scale_min = None
            self.color_scale_max = None
        else:
            self.color_scale_min, self.color_scale_max = scale

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict of the view settings (no measurements)."""
        return {
            "time_offset_s": self.time_offset_s,
            "sampling_interval_s": self.sampling_interval_s,
            "color_scale_min": self.color_scale_min,
            "color_scale_max": self.color_scale_max,
            "color_scale_auto": self.color_scale_auto,
            "layers": dict(self.layers),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ViewerSession:
        """Reconstruct view settings from a dict; unknown layer keys are kept."""
        d = dict(d)  # shallow copy
        layers = dict(DEFAULT_LAYERS)
        layers.update(d.pop("layers", {}) or {})
        return cls(layers=layers, **d)


__all__ = ["ViewerSession", "DEFAULT_LAYERS", "CANVAS_TYPES"]
