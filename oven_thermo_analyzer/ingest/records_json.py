"""Persisted record format.

Measurements are stored as a JSON array of objects::

    {"timestamp": "2024-01-01 08:00:00.0",
     "temperatures": [25.0, "BURNOUT", "N/A"],
     "alarm1": 0, "alarmOut": 0}

Numbers are numeric readings.  The string ``"BURNOUT"`` marks a failed sensor;
strings that parse as a float are numeric; anything else is unavailable.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, Iterable, List

from oven_thermo_analyzer.ingest.errors import FormatError
from oven_thermo_analyzer.models.frames import Record, format_timestamp, parse_timestamp
from oven_thermo_analyzer.models.results import BURNOUT_TEXT, UNAVAILABLE_TEXT, ChannelReading


def reading_from_json(value: Any) -> ChannelReading:
    if isinstance(value, bool) or value is None:
        return ChannelReading.unavailable()
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return ChannelReading.unavailable()
        return ChannelReading.numeric(value)
    if isinstance(value, str):
        if value == BURNOUT_TEXT:
            return ChannelReading.burnout()
        try:
            v = float(value)
        except ValueError:
            return ChannelReading.unavailable()
        if math.isfinite(v):
            return ChannelReading.numeric(v)
    return ChannelReading.unavailable()


def reading_to_json(reading: ChannelReading) -> Any:
    if reading.kind == "numeric":
        return reading.value
    if reading.kind == "burnout":
        return BURNOUT_TEXT
    return UNAVAILABLE_TEXT


def record_to_dict(record: Record) -> Dict[str, Any]:
    return {
        "timestamp": format_timestamp(record.timestamp),
        "temperatures": [reading_to_json(r) for r in record.temperatures],
        "alarm1": int(record.alarm1),
        "alarmOut": int(record.alarm_out),
    }


def records_to_json(records: Iterable[Record]) -> str:
    return json.dumps([record_to_dict(r) for r in records])


def records_from_json(text: str) -> List[Record]:
    try:
        raw = json.loads(text) if text else []
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid measurement data: {e}", field="data") from e
    if not isinstance(raw, list):
        raise FormatError("Invalid measurement data: expected a JSON array of records.", field="data")

    out: List[Record] = []
    for k, entry in enumerate(raw):
        if not isinstance(entry, dict) or "timestamp" not in entry:
            raise FormatError(f"Invalid measurement data: entry {k} has no timestamp.", field="timestamp")
        try:
            ts = parse_timestamp(str(entry["timestamp"]))
        except ValueError as e:
            raise FormatError(f"Invalid measurement data: entry {k}: {e}", field="timestamp") from e
        temps = entry.get("temperatures") or []
        out.append(
            Record(
                timestamp=ts,
                temperatures=tuple(reading_from_json(v) for v in temps),
                alarm1=int(entry.get("alarm1", 0) or 0),
                alarm_out=int(entry.get("alarmOut", 0) or 0),
            )
        )
    return out
