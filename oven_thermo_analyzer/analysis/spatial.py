"""Performance grid geometry and channel placement.

Each canvas carries an 8 x 20 cell lattice.  Boxes either span two columns
(horizontal, anchored on an even column) or two rows (vertical, anchored on an
odd row).  Performance settings are stored as a flat array with no embedded
coordinates, so the position of a value in that array is fixed by the order in
which the grid was built:

- main body (MainTop, MainBottom): row-major; rows 1-6 of columns 0, 1, 18, 19
  hold vertical boxes, everything else horizontal boxes.  80 boxes.
- reinforcement (ReinfTop): only rows 2-5 x cols 2-17; columns 2, 3, 16, 17 of
  rows 3-4 hold vertical boxes.  32 boxes.
- ReinfBottom has no grid.

:func:`linear_index` maps a box anchor to its array position with closed-form
formulas that must agree with :func:`iter_cells`.  Stored settings depend on
this agreement, so the +1/+2 offsets are kept exactly as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from oven_thermo_analyzer.models.catalog import CanvasAssignment, Thermoelement

GRID_ROWS = 8
GRID_COLS = 20

MAIN_CANVASES = ("MainTop", "MainBottom")
REINFORCEMENT_GRID_CANVASES = ("ReinfTop",)

# Box counts per canvas, in the order the flat import array is laid out.
SETTINGS_LAYOUT: Tuple[Tuple[str, int], ...] = (
    ("MainTop", 80),
    ("MainBottom", 80),
    ("ReinfTop", 32),
)

_MAIN_VERTICAL_ROWS = (1, 2, 3, 4, 5, 6)
_MAIN_VERTICAL_COLS = (0, 1, 18, 19)
_REINF_ROWS = (2, 5)
_REINF_COLS = (2, 17)
_REINF_VERTICAL_ROWS = (3, 4)
_REINF_VERTICAL_COLS = (2, 3, 16, 17)


@dataclass(frozen=True)
class GridCell:
    """Anchor of one performance box. Vertical boxes span 2 rows, others 2 columns."""

    row: int
    col: int
    vertical: bool = False

    @property
    def row_span(self) -> int:
        return 2 if self.vertical else 1

    @property
    def col_span(self) -> int:
        return 1 if self.vertical else 2


def _topology(canvas_type: str) -> Optional[str]:
    if canvas_type in MAIN_CANVASES:
        return "main"
    if canvas_type in REINFORCEMENT_GRID_CANVASES:
        return "reinforcement"
    return None


def _in_reinforcement_region(row: int, col: int) -> bool:
    return _REINF_ROWS[0] <= row <= _REINF_ROWS[1] and _REINF_COLS[0] <= col <= _REINF_COLS[1]


def iter_cells(canvas_type: str) -> Iterator[GridCell]:
    """Yield box anchors in grid-construction order (the settings array order)."""
    topo = _topology(canvas_type)
    if topo is None:
        return
    for row in range(GRID_ROWS):
        for col in range(GRID_COLS):
            if topo == "reinforcement" and not _in_reinforcement_region(row, col):
                continue
            if row in _MAIN_VERTICAL_ROWS and col in _MAIN_VERTICAL_COLS:
                if row % 2 == 1:
                    yield GridCell(row, col, vertical=True)
            elif topo == "reinforcement" and row in _REINF_VERTICAL_ROWS and col in _REINF_VERTICAL_COLS:
                if row % 2 == 1:
                    yield GridCell(row, col, vertical=True)
            elif col % 2 == 0:
                yield GridCell(row, col, vertical=False)


def _cell_map(canvas_type: str) -> Dict[Tuple[int, int], GridCell]:
    return {(c.row, c.col): c for c in iter_cells(canvas_type)}


_CELLS: Dict[str, Dict[Tuple[int, int], GridCell]] = {
    ct: _cell_map(ct) for ct in MAIN_CANVASES + REINFORCEMENT_GRID_CANVASES
}


def cell_at(canvas_type: str, row: int, col: int) -> Optional[GridCell]:
    """Box anchored at (row, col), or None if no box starts there."""
    return _CELLS.get(canvas_type, {}).get((row, col))


def cell_count(canvas_type: str) -> int:
    return len(_CELLS.get(canvas_type, {}))


def linear_index(canvas_type: str, row: int, col: int) -> Optional[int]:
    """
    Position of the box anchored at (row, col) in the canvas's settings array.

    Returns None ("not applicable") when no box is anchored there or the canvas
    has no grid.
    """
    if cell_at(canvas_type, row, col) is None:
        return None
    if _topology(canvas_type) == "main":
        # Vertical boxes in columns 0, 1, 18, 19 take slots out of natural column order.
        if row == 0 or col == 0:
            return (row * 20 + col) // 2
        if col == 19:
            return (row * 20 + col) // 2 + 2
        if row == 7:
            return (row * 20 + col) // 2
        return (row * 20 + col) // 2 + 1
    if row == 2 or row == 5:
        return (row - 2) * 8 + (col - 2) // 2
    if col == 2 or col == 3:
        return col + 6
    if col == 16 or col == 17:
        return col
    return (row - 2) * 8 + col // 2


def performance_text(assignment: Optional[CanvasAssignment], row: int, col: int) -> str:
    """
    Display string for one grid box: ``"{value}%"``, ``"N/A"`` or ``""``.

    "N/A" when there is no assignment or no stored value for the box; "" for canvases
    without a grid and cells where no box is anchored.
    """
    if assignment is None:
        return "N/A"
    if _topology(assignment.canvas_type) is None:
        return ""
    idx = linear_index(assignment.canvas_type, row, col)
    if idx is None:
        return ""
    settings = assignment.performance_settings
    if 0 <= idx < len(settings):
        return f"{settings[idx]}%"
    return "N/A"


def sanitize_performance_value(text: object) -> int:
    """Parse one user-entered percentage; anything that is not an int in 0..100 becomes 0."""
    try:
        value = int(str(text).strip())
    except ValueError:
        return 0
    if value < 0 or value > 100:
        return 0
    return value


def split_performance_settings(values: Sequence[object]) -> Dict[str, Tuple[int, ...]]:
    """Split the flat import array into per-canvas arrays (80 / 80 / 32, ReinfBottom empty)."""
    clean = [sanitize_performance_value(v) for v in values]
    out: Dict[str, Tuple[int, ...]] = {}
    start = 0
    for canvas_type, n in SETTINGS_LAYOUT:
        out[canvas_type] = tuple(clean[start:start + n])
        start += n
    out["ReinfBottom"] = ()
    return out


# ---------------------------------------------------------------------------
# Pyrometer positions
# ---------------------------------------------------------------------------


def pyrometer_index(row: int, col: int) -> int:
    return row * GRID_COLS + col


def pyrometer_cell(index: int) -> Tuple[int, int]:
    if not 0 <= index < GRID_ROWS * GRID_COLS:
        raise ValueError(f"pyrometer index {index} outside the {GRID_ROWS}x{GRID_COLS} grid")
    return divmod(index, GRID_COLS)


def is_pyrometer_cell(canvas_type: str, row: int, col: int) -> bool:
    """Cells where a pyrometer may be placed (the side columns carry no pyrometer)."""
    topo = _topology(canvas_type)
    if topo == "main":
        return 0 <= row < GRID_ROWS and 1 < col < 18
    if topo == "reinforcement":
        return 1 < row < 6 and 3 < col < 16
    return False


# ---------------------------------------------------------------------------
# Channel placement
# ---------------------------------------------------------------------------


def canvas_position(
    te: Thermoelement,
    left: float,
    top: float,
    width: float,
    height: float,
) -> Tuple[float, float]:
    """Absolute (x, y) of a thermoelement inside a frame given by its top-left corner and size."""
    return left + te.relative_x * width, top + te.relative_y * height


def relative_position(x: float, y: float, left: float, top: float, width: float, height: float) -> Tuple[float, float]:
    """Inverse of :func:`canvas_position`, clamped to [0, 1]."""
    if width <= 0 or height <= 0:
        raise ValueError("frame width and height must be positive")
    rx = min(1.0, max(0.0, (x - left) / width))
    ry = min(1.0, max(0.0, (y - top) / height))
    return rx, ry


def thermoelements_by_channel(thermoelements: Sequence[Thermoelement]) -> Dict[int, List[Thermoelement]]:
    out: Dict[int, List[Thermoelement]] = {}
    for te in thermoelements:
        out.setdefault(te.channel, []).append(te)
    return out
