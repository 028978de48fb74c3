"""
Nonogram grid model with shared row/column views.
Cells live once in a flat Grid arena; rows and columns index into it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from picross_types import CellState, Hint, Move, Orientation

logger = logging.getLogger(__name__)


class BoundsError(ValueError):
    """A move addressed a cell outside the grid."""

    def __init__(self, x: int, y: int, dimensions: tuple[int, int]) -> None:
        rows, cols = dimensions
        super().__init__(
            f"Cell ({x}, {y}) is outside the grid\n"
            f"  Columns: 1..{cols}\n"
            f"  Rows: 1..{rows}"
        )
        self.x = x
        self.y = y
        self.dimensions = dimensions


# =============================================================================
# Cells and Grid
# =============================================================================


class Cell:
    """A single mutable grid cell."""

    __slots__ = ("_state",)

    def __init__(self, state: CellState = CellState.EMPTY) -> None:
        self._state = state

    @property
    def state(self) -> CellState:
        return self._state

    def mark(self) -> None:
        self._state = CellState.FILLED

    def block(self) -> None:
        self._state = CellState.BLOCKED

    def wipe(self) -> None:
        self._state = CellState.EMPTY

    def __repr__(self) -> str:
        return f"Cell({self._state.name})"


class Grid:
    """
    Rectangular backing store of Cells.

    Cells are kept in one flat list, slot = row * cols + col. Lines hold slot
    numbers and resolve them here, so a row and a column touching the same
    coordinate always get the same Cell object.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells = [Cell() for _ in range(rows * cols)]

    def slot(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Grid position ({row}, {col}) out of range for {self.rows}x{self.cols}")
        return row * self.cols + col

    def row_slots(self, row: int) -> tuple[int, ...]:
        return tuple(self.slot(row, c) for c in range(self.cols))

    def column_slots(self, col: int) -> tuple[int, ...]:
        return tuple(self.slot(r, col) for r in range(self.rows))

    def cell_at(self, slot: int) -> Cell:
        return self._cells[slot]


# =============================================================================
# Run-length satisfaction
# =============================================================================


def run_lengths(states: Iterable[CellState]) -> tuple[int, ...]:
    """
    Decompose a line into the lengths of its maximal FILLED runs.

    EMPTY and BLOCKED both end a run. A run touching the end of the line is
    counted. A line with no FILLED cell decomposes to ().
    """
    runs: list[int] = []
    run = 0
    for state in states:
        if state is CellState.FILLED:
            run += 1
        elif run:
            runs.append(run)
            run = 0
    if run:
        runs.append(run)
    return tuple(runs)


def line_satisfies(states: Iterable[CellState], hint: Hint) -> bool:
    """True iff the run decomposition of states equals the hint exactly."""
    return run_lengths(states) == hint.values


# =============================================================================
# Lines
# =============================================================================


@dataclass(frozen=True)
class LineView:
    """Read-only snapshot of a line for presentation."""

    orientation: Orientation
    index: int
    hint: tuple[int, ...]
    states: tuple[CellState, ...]
    satisfied: bool


class Line:
    """A row or column: ordered grid slots plus the hint they must satisfy."""

    def __init__(
        self,
        grid: Grid,
        slots: Sequence[int],
        hint: Hint,
        orientation: Orientation,
    ) -> None:
        self._grid = grid
        self._slots = tuple(slots)
        self._hint = hint
        self._orientation = orientation

    @property
    def hint(self) -> Hint:
        return self._hint

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    def __len__(self) -> int:
        return len(self._slots)

    def cell(self, index: int) -> Cell:
        """Shared reference to the cell at a 0-based index along the line."""
        if not 0 <= index < len(self._slots):
            raise IndexError(
                f"{self.orientation.value} index {index} out of range (length {len(self._slots)})"
            )
        return self._grid.cell_at(self._slots[index])

    def states(self) -> tuple[CellState, ...]:
        return tuple(self._grid.cell_at(s).state for s in self._slots)

    def check(self) -> bool:
        return line_satisfies(self.states(), self.hint)

    def view(self, index: int) -> LineView:
        states = self.states()
        return LineView(
            orientation=self.orientation,
            index=index,
            hint=self.hint.values,
            states=states,
            satisfied=line_satisfies(states, self.hint),
        )


# =============================================================================
# Puzzle
# =============================================================================


class Puzzle:
    """
    A nonogram: a Grid seen through its row-Lines and column-Lines.

    Moves use 1-based (x, y) = (column, row) coordinates.
    """

    def __init__(self, grid: Grid, rows: Sequence[Line], columns: Sequence[Line]) -> None:
        if len(rows) != grid.rows:
            raise ValueError(f"Expected {grid.rows} row lines, got {len(rows)}")
        if len(columns) != grid.cols:
            raise ValueError(f"Expected {grid.cols} column lines, got {len(columns)}")
        for line in rows:
            if len(line) != grid.cols:
                raise ValueError(f"Row line has {len(line)} cells, grid has {grid.cols} columns")
        for line in columns:
            if len(line) != grid.rows:
                raise ValueError(f"Column line has {len(line)} cells, grid has {grid.rows} rows")
        self._grid = grid
        self._rows = tuple(rows)
        self._columns = tuple(columns)

    @classmethod
    def from_hints(
        cls,
        row_hints: Sequence[Sequence[int] | Hint],
        column_hints: Sequence[Sequence[int] | Hint],
    ) -> Puzzle:
        """Build the grid and wire each row and column to its shared cells."""
        if not row_hints or not column_hints:
            raise ValueError(
                f"A puzzle needs at least one row and one column "
                f"(got {len(row_hints)} rows, {len(column_hints)} columns)"
            )
        grid = Grid(len(row_hints), len(column_hints))
        rows = [
            Line(grid, grid.row_slots(r), _as_hint(hint), Orientation.ROW)
            for r, hint in enumerate(row_hints)
        ]
        columns = [
            Line(grid, grid.column_slots(c), _as_hint(hint), Orientation.COLUMN)
            for c, hint in enumerate(column_hints)
        ]
        return cls(grid, rows, columns)

    @property
    def dimensions(self) -> tuple[int, int]:
        """(rows, cols)"""
        return (self._grid.rows, self._grid.cols)

    @property
    def rows(self) -> tuple[Line, ...]:
        return self._rows

    @property
    def columns(self) -> tuple[Line, ...]:
        return self._columns

    def _cell(self, x: int, y: int) -> Cell:
        rows, cols = self.dimensions
        if not (1 <= x <= cols and 1 <= y <= rows):
            raise BoundsError(x, y, self.dimensions)
        return self._rows[y - 1].cell(x - 1)

    def cell_state(self, x: int, y: int) -> CellState:
        return self._cell(x, y).state

    def apply_move(self, move: Move, x: int, y: int) -> None:
        """Apply a move to the cell at column x, row y (both 1-based)."""
        cell = self._cell(x, y)
        match move:
            case Move.MARK:
                cell.mark()
            case Move.BLOCK:
                cell.block()
            case Move.WIPE:
                cell.wipe()
            case _:
                raise ValueError(f"Unknown move: {move}")
        logger.debug("%s (%d, %d) -> %s", move.value, x, y, cell.state.value)

    def check(self) -> bool:
        """True iff every row and every column satisfies its hint."""
        return all(line.check() for line in self._rows) and all(
            line.check() for line in self._columns
        )

    def row_views(self) -> tuple[LineView, ...]:
        return tuple(line.view(i) for i, line in enumerate(self._rows))

    def column_views(self) -> tuple[LineView, ...]:
        return tuple(line.view(i) for i, line in enumerate(self._columns))


def _as_hint(hint: Sequence[int] | Hint) -> Hint:
    if isinstance(hint, Hint):
        return hint
    return Hint.from_values(hint)
