from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from oven_thermo_analyzer.ingest.errors import FormatError, GbdError, GbdReadError, TruncatedDataError
from oven_thermo_analyzer.models.frames import GbdHeader, MeasurementFrame, Record
from oven_thermo_analyzer.models.results import ChannelReading

logger = logging.getLogger(__name__)


_DEFAULT_KEY_PREFIXES: Dict[str, str] = {
    "trigger": "Trigger",
    "sample": "Sample",
    "max_ch": "MaxCH",
    "header_size": "HeaderSiz",
}

_FIELD_LABELS: Dict[str, str] = {
    "trigger": "Start timestamp",
    "sample": "Sampling interval",
    "max_ch": "Thermoelement count",
    "header_size": "Header size",
}

_INTERVAL_RE = re.compile(r"^\s*([-+]?\d+(?:[.,]\d+)?)\s*(ms|min|s)?\s*$", flags=re.IGNORECASE)
_INTERVAL_UNITS = {"ms": 1e-3, "s": 1.0, "min": 60.0}

# Body scaling: raw int16 temperatures are tenths of degC.
TEMPERATURE_SCALE = 10.0


@dataclass(frozen=True)
class GbdReaderConfig:
    """
    Reader configuration for GBD measurement files.

    encoding:
      Codec used to turn header bytes into text. latin-1 maps every byte to one
      character, so text offsets equal byte offsets.
    key_prefixes:
      Header key prefixes (matched case-insensitively after stripping leading blanks).
    max_channels:
      Upper bound for MaxCH; the logger records at most 20 analog channels.
    extension:
      Expected file suffix (case-insensitive).
    """
    encoding: str = "latin-1"
    key_prefixes: Mapping[str, str] = field(default_factory=lambda: dict(_DEFAULT_KEY_PREFIXES))
    max_channels: int = 20
    extension: str = ".gbd"


def _parse_trigger(value: str) -> Optional[datetime]:
    txt = value.strip().replace(",", " ")
    if not txt:
        return None
    ts = pd.to_datetime(txt, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _parse_interval(value: str) -> Optional[float]:
    m = _INTERVAL_RE.match(value)
    if not m:
        return None
    number = float(m.group(1).replace(",", "."))
    unit = (m.group(2) or "s").lower()
    return number * _INTERVAL_UNITS[unit]


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_header(data: bytes, config: Optional[GbdReaderConfig] = None) -> GbdHeader:
    """
    Extract trigger time, sample interval, channel count and header size.

    Unrecognized lines are ignored; a later valid line for a key overrides an earlier one.
    Scanning stops once the declared header size has been passed, so binary record bytes
    are never interpreted as header text.
    """
    cfg = config or GbdReaderConfig()
    prefixes = {k: p.lower() for k, p in cfg.key_prefixes.items()}
    text = data.decode(cfg.encoding, errors="replace")

    found: Dict[str, object] = {}
    offset = 0
    for line in text.splitlines(keepends=True):
        offset += len(line)
        stripped = line.strip()
        low = stripped.lower()
        for key, prefix in prefixes.items():
            if not low.startswith(prefix):
                continue
            if "=" not in stripped:
                logger.debug("Header line for %s has no '=': %r", key, stripped)
                break
            raw = stripped.split("=", 1)[1]
            if key == "trigger":
                parsed: object = _parse_trigger(raw)
            elif key == "sample":
                parsed = _parse_interval(raw)
            else:
                parsed = _parse_int(raw)
            if parsed is None:
                logger.debug("Ignoring unparsable header value for %s: %r", key, raw)
            else:
                found[key] = parsed
            break
        hs = found.get("header_size")
        if isinstance(hs, int) and hs > 0 and offset >= hs:
            break

    trigger = found.get("trigger")
    if trigger is None:
        raise FormatError(
            "Invalid metadata: Start timestamp is missing or incorrectly formatted.", field="trigger"
        )
    for key in ("sample", "max_ch", "header_size"):
        v = found.get(key)
        if v is None:
            raise FormatError(f"Invalid metadata: {_FIELD_LABELS[key]} is missing or incorrectly formatted.", field=key)
        if v <= 0:  # type: ignore[operator]
            raise FormatError(f"Invalid metadata: {_FIELD_LABELS[key]} must be greater than 0.", field=key)

    n_ch = int(found["max_ch"])  # type: ignore[arg-type]
    if n_ch > cfg.max_channels:
        raise FormatError(
            f"Invalid metadata: Thermoelement count {n_ch} exceeds the supported maximum of {cfg.max_channels}.",
            field="max_ch",
        )

    return GbdHeader(
        trigger_time=trigger,  # type: ignore[arg-type]
        sample_interval_s=float(found["sample"]),  # type: ignore[arg-type]
        channel_count=n_ch,
        header_size=int(found["header_size"]),  # type: ignore[arg-type]
    )


def decode_body(data: bytes, header: GbdHeader) -> Tuple[Tuple[Record, ...], int]:
    """
    Decode the fixed-width big-endian record stream following the header.

    Returns (records, n_dropped_bytes). Only complete records are emitted.
    """
    n_ch = header.channel_count
    rec_size = header.record_size
    body_len = len(data) - header.header_size
    n_rec = body_len // rec_size if body_len > 0 else 0
    if n_rec < 1:
        raise TruncatedDataError(
            f"Invalid data: No rows found (body has {max(body_len, 0)} bytes, record size is {rec_size}).",
            field="body",
        )
    dropped = body_len - n_rec * rec_size

    # Explicit '>i2': byte order is fixed by the format, not by the host.
    mat = np.frombuffer(data, dtype=">i2", count=n_rec * (n_ch + 2), offset=header.header_size)
    mat = mat.reshape((n_rec, n_ch + 2))
    temps = mat[:, :n_ch].astype(np.float64) / TEMPERATURE_SCALE
    alarms = mat[:, n_ch:].astype(np.int64)

    t0 = header.trigger_time
    dt = header.sample_interval_s
    records: List[Record] = []
    for i in range(n_rec):
        records.append(
            Record(
                timestamp=t0 + timedelta(seconds=i * dt),
                temperatures=tuple(ChannelReading.numeric(v) for v in temps[i].tolist()),
                alarm1=int(alarms[i, 0]),
                alarm_out=int(alarms[i, 1]),
            )
        )
    return tuple(records), int(dropped)


def decode(data: bytes, config: Optional[GbdReaderConfig] = None) -> Tuple[GbdHeader, Tuple[Record, ...]]:
    """Decode a whole GBD buffer into its header and ordered records."""
    header = parse_header(data, config)
    records, _ = decode_body(data, header)
    return header, records


class GbdReader:
    """
    Reader for GBD measurement files (text header + big-endian int16 record stream).

    Contract:
      - Record timestamps are trigger + index * interval; nothing on disk overrides them.
      - Trailing bytes shorter than one record are dropped with a warning, never an error.
      - Decode errors are re-raised with the source path attached.
    """

    def __init__(self, config: Optional[GbdReaderConfig] = None):
        self.config = config or GbdReaderConfig()

    def decode(self, data: bytes, source_path: Optional[Path] = None) -> MeasurementFrame:
        warnings: List[str] = []
        try:
            header = parse_header(data, self.config)
            records, dropped = decode_body(data, header)
        except GbdError as e:
            if source_path is not None:
                raise e.with_path(source_path) from e
            raise

        if dropped:
            msg = f"dropped {dropped} trailing bytes (incomplete record of {header.record_size} bytes)"
            warnings.append(msg)
            logger.warning("%s: %s", source_path or "<buffer>", msg)

        logger.info(
            "Decoded %d records (%d channels, interval %.6g s) from %s",
            len(records),
            header.channel_count,
            header.sample_interval_s,
            source_path or "<buffer>",
        )
        return MeasurementFrame(
            source_path=source_path,
            header=header,
            records=records,
            warnings=tuple(warnings),
        )

    def read(self, file_path: str | Path) -> MeasurementFrame:
        fp = Path(file_path).expanduser().resolve()
        if not fp.is_file():
            raise GbdReadError(fp, "file does not exist")
        try:
            data = fp.read_bytes()
        except OSError as e:
            raise GbdReadError(fp, str(e)) from e
        return self.decode(data, source_path=fp)
