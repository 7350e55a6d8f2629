from __future__ import annotations

"""Temporal-value resolution: offset -> record -> channel reading.

Lookups are exact: the target timestamp is the first record's timestamp plus the
playback offset, rendered with one sub-second digit, and compared textually with
record timestamps.  There is no interpolation and no nearest-record fallback; a
miss yields an *unavailable* reading, never an exception.

Resolution is split in two steps:

1. :func:`resolve` is pure and returns a :class:`ResolutionOutcome` whose
   ``should_deactivate`` flag asks the caller to latch the thermoelement off.
2. :func:`apply_outcome` performs that state change on the session.

Aggregates (:func:`average_of`, :func:`min_max_of`) only read state.
"""

import logging
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from oven_thermo_analyzer.models.catalog import Measurement, Thermoelement, channel_index
from oven_thermo_analyzer.models.frames import Record, format_timestamp
from oven_thermo_analyzer.models.profile import ViewerSession
from oven_thermo_analyzer.models.results import ChannelReading, DeactivationEvent, ResolutionOutcome

logger = logging.getLogger(__name__)


def target_timestamp(measurement: Measurement, offset_s: float) -> Optional[str]:
    """First record's timestamp shifted by ``offset_s``; None when there are no records."""
    records = measurement.records
    if not records:
        return None
    return format_timestamp(records[0].timestamp + timedelta(seconds=float(offset_s)))


def find_record(measurement: Measurement, offset_s: float) -> Optional[Record]:
    target = target_timestamp(measurement, offset_s)
    if target is None:
        return None
    record = measurement.record_for_timestamp(target)
    if record is None:
        logger.debug("No record at %s in %s (offset %s s)", target, measurement.filename, offset_s)
    return record


def value_at(record: Optional[Record], index: int) -> ChannelReading:
    """Reading at ``index`` of ``record``; unavailable if either is missing."""
    if record is None or index < 0 or index >= len(record.temperatures):
        return ChannelReading.unavailable()
    return record.temperatures[index]


def read_channel(session: ViewerSession, channel: int, offset_s: Optional[float] = None) -> ChannelReading:
    """Reading of a physical channel (1-20) at ``offset_s`` (default: the session offset)."""
    measurement = session.measurement_for_channel(channel)
    if measurement is None:
        return ChannelReading.unavailable()
    offset = session.time_offset_s if offset_s is None else offset_s
    return value_at(find_record(measurement, offset), channel_index(channel))


def resolve(session: ViewerSession, te: Thermoelement, offset_s: Optional[float] = None) -> ResolutionOutcome:
    reading = read_channel(session, te.channel, offset_s)
    return ResolutionOutcome(reading=reading, should_deactivate=te.is_active and not reading.is_numeric)


def apply_outcome(
    session: ViewerSession,
    canvas_type: str,
    te: Thermoelement,
    outcome: ResolutionOutcome,
) -> Optional[DeactivationEvent]:
    if not outcome.should_deactivate:
        return None
    return session.deactivate(canvas_type, te, outcome.reading.kind)


def display_text(session: ViewerSession, canvas_type: str, te: Thermoelement) -> str:
    """Resolve, latch if needed, and return ``"xx.x°C"``, ``"BURNOUT"`` or ``"N/A"``."""
    outcome = resolve(session, te)
    apply_outcome(session, canvas_type, te, outcome)
    return outcome.reading.display()


def _contributing_values(
    session: ViewerSession,
    thermoelements: Optional[Iterable[Thermoelement]],
    offset_s: Optional[float],
) -> List[float]:
    values: List[float] = []
    for te in thermoelements or ():
        if not te.is_active:
            continue
        reading = read_channel(session, te.channel, offset_s)
        if reading.is_numeric:
            values.append(reading.value)  # type: ignore[arg-type]
    return values


def average_of(
    session: ViewerSession,
    thermoelements: Optional[Sequence[Thermoelement]],
    offset_s: Optional[float] = None,
) -> Optional[float]:
    """Mean over active thermoelements with numeric readings; None if none contribute."""
    values = _contributing_values(session, thermoelements, offset_s)
    if not values:
        return None
    return sum(values) / len(values)


def min_max_of(
    session: ViewerSession,
    thermoelements: Optional[Sequence[Thermoelement]],
    offset_s: Optional[float] = None,
) -> Tuple[Optional[float], Optional[float]]:
    values = _contributing_values(session, thermoelements, offset_s)
    if not values:
        return None, None
    return min(values), max(values)
