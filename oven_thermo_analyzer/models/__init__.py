from .results import ChannelReading, DeactivationEvent, ResolutionOutcome
from .frames import GbdHeader, MeasurementFrame, Record, format_timestamp, parse_timestamp
from .catalog import (
    CANVAS_TYPES,
    CHANNEL_GROUPS,
    CanvasAssignment,
    Measurement,
    Thermoelement,
    channel_group,
    channel_index,
)
from .profile import ViewerSession

__all__ = [
    "ChannelReading",
    "DeactivationEvent",
    "ResolutionOutcome",
    "GbdHeader",
    "MeasurementFrame",
    "Record",
    "format_timestamp",
    "parse_timestamp",
    "CANVAS_TYPES",
    "CHANNEL_GROUPS",
    "CanvasAssignment",
    "Measurement",
    "Thermoelement",
    "channel_group",
    "channel_index",
    "ViewerSession",
]
