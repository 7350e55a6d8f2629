from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from oven_thermo_analyzer.models.results import ChannelReading


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` as ``YYYY-MM-DD HH:MM:SS.f`` (tenths truncated, not rounded)."""
    return f"{ts:%Y-%m-%d %H:%M:%S}.{ts.microsecond // 100_000}"


def parse_timestamp(text: str) -> datetime:
    """Inverse of :func:`format_timestamp`; fractional digits are optional."""
    txt = text.strip()
    if "." in txt:
        return datetime.strptime(txt, "%Y-%m-%d %H:%M:%S.%f")
    return datetime.strptime(txt, "%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True)
class GbdHeader:
    """
    Metadata recovered from the text header of a GBD file.

    Notes
    - header_size is the byte offset where the binary records start.
    - record timestamps are derived from trigger_time and sample_interval_s only.
    """
    trigger_time: datetime
    sample_interval_s: float
    channel_count: int
    header_size: int

    @property
    def record_size(self) -> int:
        return 2 * self.channel_count + 4


@dataclass(frozen=True)
class Record:
    """One sampling tick: timestamp, per-channel readings and the two alarm words."""
    timestamp: datetime
    temperatures: Tuple[ChannelReading, ...]
    alarm1: int = 0
    alarm_out: int = 0

    @property
    def timestamp_text(self) -> str:
        return format_timestamp(self.timestamp)


@dataclass(frozen=True)
class MeasurementFrame:
    """
    In-memory representation of one decoded GBD file (one channel group).

    Notes
    - records are in file order, which is also time order.
    - warnings collects non-fatal reader diagnostics (e.g. dropped trailing bytes).
    """
    source_path: Optional[Path]
    header: GbdHeader
    records: Tuple[Record, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def n_records(self) -> int:
        return len(self.records)

    @property
    def duration_s(self) -> float:
        if not self.records:
            return 0.0
        return (self.n_records - 1) * self.header.sample_interval_s

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular view: ``timestamp``, ``ch1..chN`` (NaN for non-numeric), ``alarm1``, ``alarm_out``."""
        n = self.header.channel_count
        cols = {"timestamp": [r.timestamp for r in self.records]}
        for k in range(n):
            cols[f"ch{k + 1}"] = [
                r.temperatures[k].value if k < len(r.temperatures) and r.temperatures[k].is_numeric else float("nan")
                for r in self.records
            ]
        cols["alarm1"] = [r.alarm1 for r in self.records]
        cols["alarm_out"] = [r.alarm_out for r in self.records]
        return pd.DataFrame(cols)
