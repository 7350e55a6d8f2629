from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


ReadingKind = Literal["numeric", "burnout", "unavailable"]

BURNOUT_TEXT = "BURNOUT"
UNAVAILABLE_TEXT = "N/A"


@dataclass(frozen=True)
class ChannelReading:
    """One channel value as a tagged variant.

    Attributes
    ----------
    kind:
        ``"numeric"`` for a temperature in degC, ``"burnout"`` for a failed sensor,
        ``"unavailable"`` when no value could be obtained.
    value:
        Temperature in degC; only set when ``kind == "numeric"``.
    """

    kind: ReadingKind
    value: Optional[float] = None

    @classmethod
    def numeric(cls, value: float) -> ChannelReading:
        return cls("numeric", float(value))

    @classmethod
    def burnout(cls) -> ChannelReading:
        return cls("burnout")

    @classmethod
    def unavailable(cls) -> ChannelReading:
        return cls("unavailable")

    @property
    def is_numeric(self) -> bool:
        return self.kind == "numeric"

    def display(self) -> str:
        if self.kind == "numeric":
            return f"{self.value:.1f}°C"
        if self.kind == "burnout":
            return BURNOUT_TEXT
        return UNAVAILABLE_TEXT


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of resolving one thermoelement at the current offset.

    ``should_deactivate`` is a request to the caller; resolution itself never
    mutates the thermoelement.
    """

    reading: ChannelReading
    should_deactivate: bool = False


@dataclass(frozen=True)
class DeactivationEvent:
    """Emitted once when a thermoelement is latched inactive."""

    canvas_type: str
    thermoelement_id: int
    channel: int
    reason: ReadingKind
