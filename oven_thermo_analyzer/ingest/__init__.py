"""Ingest package - GBD decoding and measurement import.

This package handles:
- Parsing the GBD text header (trigger time, sample interval, channel count, header size)
- Decoding the big-endian int16 record stream into ordered Records
- Serializing records to the persisted JSON form and back
- Importing a file into a measurement store

Key classes:
- GbdReader: reads a file (or buffer) into a MeasurementFrame
- GbdReaderConfig: header key prefixes, encoding, channel bound

Design principle:
- Record time is derived from the header only (trigger + index * interval)
- Decode errors are fatal and carry the file path and offending field
"""

from .errors import FormatError, GbdError, GbdReadError, TruncatedDataError
from .readers_gbd import GbdReader, GbdReaderConfig, decode, parse_header
from .records_json import records_from_json, records_to_json
from .importer import import_gbd_file, is_gbd_file, measurement_from_frame

__all__ = [
    "FormatError",
    "GbdError",
    "GbdReadError",
    "TruncatedDataError",
    "GbdReader",
    "GbdReaderConfig",
    "decode",
    "parse_header",
    "records_from_json",
    "records_to_json",
    "import_gbd_file",
    "is_gbd_file",
    "measurement_from_frame",
]
