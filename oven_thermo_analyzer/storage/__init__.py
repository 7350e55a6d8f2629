"""Storage package - the persistence contract consumed by the import workflow.

The core never talks to a database directly.  It needs three operations:

- insert(measurement) -> id
- get_by_id(id) -> measurement or None
- delete(id)

:class:`InMemoryMeasurementStore` implements them for tests and the CLI; a
database-backed store only has to satisfy :class:`MeasurementStore`.
"""

from .memory import InMemoryMeasurementStore, MeasurementStore

__all__ = ["InMemoryMeasurementStore", "MeasurementStore"]
