"""
Command-line inspection of a GBD measurement file.

Decodes the file, prints the header and record summary, resolves the requested
channels at a playback offset and optionally exports all records to CSV.

Examples
--------
    python -m oven_thermo_analyzer.scripts.inspect_gbd OVEN_A.GBD --offset 120 --channels 1,2,3
    python -m oven_thermo_analyzer.scripts.inspect_gbd OVEN_B.GBD --group 11-20 --csv out.csv
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from oven_thermo_analyzer.analysis.stats import format_offset
from oven_thermo_analyzer.analysis.temporal import read_channel, target_timestamp
from oven_thermo_analyzer.ingest.errors import GbdError, GbdReadError
from oven_thermo_analyzer.ingest.importer import measurement_from_frame
from oven_thermo_analyzer.ingest.readers_gbd import GbdReader
from oven_thermo_analyzer.models.catalog import CHANNEL_GROUPS, channel_group
from oven_thermo_analyzer.models.profile import ViewerSession
from oven_thermo_analyzer.storage.memory import InMemoryMeasurementStore


def _parse_channels(s: Optional[str], group: str) -> List[int]:
    if not s:
        return list(range(1, 11)) if group == "1-10" else list(range(11, 21))
    return [int(x) for x in s.split(",") if x.strip()]


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m oven_thermo_analyzer.scripts.inspect_gbd",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Decode a GBD measurement file and print channel temperatures.

            The file is treated as one channel group (1-10 or 11-20); channels of the
            other group resolve to N/A.
            """
        ),
    )
    p.add_argument("file", help="GBD file to decode")
    p.add_argument("--group", default="1-10", choices=list(CHANNEL_GROUPS), help="Channel group the file records")
    p.add_argument("--offset", type=float, default=0.0, help="Playback offset in seconds (default 0)")
    p.add_argument("--channels", default=None, help="Comma-separated channel numbers (default: the whole group)")
    p.add_argument("--csv", default=None, help="Write all records to this CSV file")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    ns = p.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        frame = GbdReader().read(ns.file)
    except (GbdError, GbdReadError) as e:
        print(f"[error] {e}")
        return 1

    h = frame.header
    print(f"file:      {Path(ns.file).name}")
    print(f"trigger:   {h.trigger_time}")
    print(f"interval:  {h.sample_interval_s:g} s")
    print(f"channels:  {h.channel_count}")
    print(f"records:   {frame.n_records} (duration {format_offset(frame.duration_s)})")
    for w in frame.warnings:
        print(f"[warn] {w}")

    store = InMemoryMeasurementStore()
    measurement = measurement_from_frame(frame, ns.group)
    store.insert(measurement)

    session = ViewerSession(time_offset_s=ns.offset, sampling_interval_s=h.sample_interval_s)
    session.set_measurement(ns.group, measurement)
    print(f"target:    {target_timestamp(measurement, ns.offset) or 'N/A'}")
    for ch in _parse_channels(ns.channels, ns.group):
        reading = read_channel(session, ch)
        grp = channel_group(ch) or "-"
        print(f"  ch{ch:>2} [{grp:>5}]: {reading.display()}")

    if ns.csv:
        out = Path(ns.csv).expanduser()
        frame.to_dataframe().to_csv(out, index=False)
        print(f"wrote: {out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
