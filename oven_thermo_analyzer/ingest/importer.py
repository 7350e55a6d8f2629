from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from oven_thermo_analyzer.ingest.errors import FormatError, GbdReadError
from oven_thermo_analyzer.ingest.readers_gbd import GbdReader, GbdReaderConfig
from oven_thermo_analyzer.ingest.records_json import records_to_json
from oven_thermo_analyzer.models.catalog import CHANNEL_GROUPS, ChannelGroup, Measurement
from oven_thermo_analyzer.models.frames import MeasurementFrame
from oven_thermo_analyzer.storage.memory import MeasurementStore

logger = logging.getLogger(__name__)


def is_gbd_file(path: str | Path, config: Optional[GbdReaderConfig] = None) -> bool:
    cfg = config or GbdReaderConfig()
    return Path(path).suffix.lower() == cfg.extension.lower()


def measurement_from_frame(frame: MeasurementFrame, channel_group: ChannelGroup) -> Measurement:
    """Unsaved Measurement holding the serialized records of ``frame``."""
    name = frame.source_path.name if frame.source_path is not None else ""
    return Measurement(filename=name, channel_group=channel_group, data=records_to_json(frame.records))


def import_gbd_file(
    file_path: str | Path,
    channel_group: ChannelGroup,
    store: MeasurementStore,
    config: Optional[GbdReaderConfig] = None,
) -> Measurement:
    """
    Decode one GBD file and hand it to the store.

    The file is fully decoded and serialized before ``store.insert`` is called, so a
    failing import never leaves a partial measurement behind.

    Raises
    ------
    GbdReadError
        The file is missing or unreadable.
    FormatError
        Wrong extension, or a header field is missing/invalid.
    TruncatedDataError
        The body holds no complete record.
    """
    cfg = config or GbdReaderConfig()
    fp = Path(file_path).expanduser().resolve()
    if channel_group not in CHANNEL_GROUPS:
        raise ValueError(f"Unknown channel group {channel_group!r}; expected one of {CHANNEL_GROUPS}.")
    if not fp.exists():
        raise GbdReadError(fp, "file does not exist")
    if not is_gbd_file(fp, cfg):
        raise FormatError(
            f"Invalid file format. Expected a {cfg.extension.upper()} file, but got '{fp.suffix}'.",
            path=fp,
            field="extension",
        )

    frame = GbdReader(cfg).read(fp)
    measurement = measurement_from_frame(frame, channel_group)
    measurement.id = store.insert(measurement)
    logger.info(
        "Imported %s as measurement %s (channels %s, %d records)",
        fp.name,
        measurement.id,
        channel_group,
        frame.n_records,
    )
    return measurement
