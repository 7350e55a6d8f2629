from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from oven_thermo_analyzer.models.catalog import Measurement

logger = logging.getLogger(__name__)


class MeasurementStore(Protocol):
    def insert(self, measurement: Measurement) -> int: ...

    def get_by_id(self, measurement_id: int) -> Optional[Measurement]: ...

    def delete(self, measurement_id: int) -> None: ...


class InMemoryMeasurementStore:
    """Dictionary-backed store; ids start at 1 and are never reused."""

    def __init__(self) -> None:
        self._items: Dict[int, Measurement] = {}
        self._next_id = 1

    def insert(self, measurement: Measurement) -> int:
        if not measurement.filename.strip():
            raise ValueError("Invalid measurement: Filename is missing.")
        if not measurement.data.strip():
            raise ValueError("Invalid measurement: Data is missing.")
        mid = self._next_id
        self._next_id += 1
        measurement.id = mid
        self._items[mid] = measurement
        logger.debug("Stored measurement %d (%s, channels %s)", mid, measurement.filename, measurement.channel_group)
        return mid

    def get_by_id(self, measurement_id: int) -> Optional[Measurement]:
        return self._items.get(measurement_id)

    def delete(self, measurement_id: int) -> None:
        self._items.pop(measurement_id, None)

    def __len__(self) -> int:
        return len(self._items)
