"""Oven Thermo Analyzer -- Python tooling for oven thermoelement measurements.

Designed for multi-channel data-logger recordings (GBD files, up to 20 analog
channels split into two groups of 10) taken on oven bodies and reinforcements.

This package provides tools for:
- Decoding GBD files (text header + big-endian int16 record stream)
- Storing measurements in a serialized record form with lazy parsing
- Resolving per-channel temperatures at a playback offset
- Computing per-canvas statistics (average, min, max, spread)
- Mapping performance-grid boxes to their settings array index

Key principles:
- Record time is derived from the header, never read per record
- Exact timestamp matching: no interpolation, no nearest-record fallback
- Unavailable and BURNOUT readings stay distinguishable from numbers

Main subpackages:
- analysis: Spatial index mapping, temporal resolution, statistics, colors
- ingest: GBD reader, persisted record codec, import workflow
- models: Data models (Record, MeasurementFrame, Measurement, ViewerSession)
- storage: Persistence contract and in-memory store
"""

__all__ = []
