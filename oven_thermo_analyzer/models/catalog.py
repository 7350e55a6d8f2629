from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from oven_thermo_analyzer.models.frames import Record


ChannelGroup = Literal["1-10", "11-20"]
CanvasType = Literal["MainTop", "MainBottom", "ReinfTop", "ReinfBottom"]

CHANNEL_GROUPS: Tuple[ChannelGroup, ...] = ("1-10", "11-20")
CANVAS_TYPES: Tuple[CanvasType, ...] = ("MainTop", "MainBottom", "ReinfTop", "ReinfBottom")

MIN_CHANNEL = 1
MAX_CHANNEL = 20


def channel_group(channel: int) -> Optional[ChannelGroup]:
    """Group that records ``channel`` (1-10 or 11-20), or None for out-of-range channels."""
    if 1 <= channel <= 10:
        return "1-10"
    if 11 <= channel <= 20:
        return "11-20"
    return None


def channel_index(channel: int) -> int:
    """Position of ``channel`` inside its group's temperature sequence."""
    return channel - 1 if channel <= 10 else channel - 11


@dataclass
class Measurement:
    """
    Persistence entity for one imported GBD file (one channel group).

    data holds the serialized record list (JSON). It is parsed on first access and the
    parsed records are retained; the fill happens at most once per instance.
    """
    filename: str
    channel_group: ChannelGroup
    data: str
    id: Optional[int] = None

    _records: Optional[List[Record]] = field(default=None, init=False, repr=False, compare=False)
    _index: Optional[Dict[str, Record]] = field(default=None, init=False, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @property
    def records(self) -> List[Record]:
        if self._records is None:
            self._fill_cache()
        return self._records  # type: ignore[return-value]

    def record_for_timestamp(self, timestamp_text: str) -> Optional[Record]:
        """Exact text lookup; the first record carrying that timestamp wins."""
        if self._index is None:
            self._fill_cache()
        return self._index.get(timestamp_text)  # type: ignore[union-attr]

    @property
    def is_parsed(self) -> bool:
        return self._records is not None

    def _fill_cache(self) -> None:
        # Avoid circular import at module level
        from oven_thermo_analyzer.ingest.records_json import records_from_json

        with self._lock:
            if self._records is not None:
                return
            records = records_from_json(self.data)
            index: Dict[str, Record] = {}
            for r in records:
                index.setdefault(r.timestamp_text, r)
            self._index = index
            self._records = records


@dataclass
class Thermoelement:
    """
    A placed sensor. relative_x / relative_y are in [0, 1] inside the canvas frame.

    is_active is latched to False once a reading for this sensor turned out to be
    unavailable or BURNOUT; nothing in the core sets it back to True.
    """
    id: int
    channel: int
    relative_x: float
    relative_y: float
    is_active: bool = True
    note: str = ""


@dataclass(frozen=True)
class CanvasAssignment:
    """
    Links measurements, thermoelements and performance settings to one canvas.

    measurement ids are None when no file was chosen for that channel group.
    pyrometer_position is a row*20+col index, or None.
    """
    canvas_type: CanvasType
    dxf_model_id: Optional[int] = None
    measurement_1_to_10_id: Optional[int] = None
    measurement_11_to_20_id: Optional[int] = None
    pyrometer_position: Optional[int] = None
    pyrometer_number: Optional[int] = None
    performance_settings: Tuple[int, ...] = ()
    thermoelement_ids: Tuple[int, ...] = ()
    id: Optional[int] = None

    def measurement_id_for_group(self, group: ChannelGroup) -> Optional[int]:
        return self.measurement_1_to_10_id if group == "1-10" else self.measurement_11_to_20_id
