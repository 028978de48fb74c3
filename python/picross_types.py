"""
Shared type definitions for the picross engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator


class CellState(Enum):
    """Marking state of a single grid cell."""

    EMPTY = "empty"
    FILLED = "filled"
    BLOCKED = "blocked"  # Player's "must stay empty" annotation


class Orientation(Enum):
    """Whether a line runs across (row) or down (column). Rendering only."""

    ROW = "row"
    COLUMN = "column"


class Move(Enum):
    """Player move applied to one cell."""

    MARK = "mark"
    BLOCK = "block"
    WIPE = "wipe"

    @classmethod
    def from_token(cls, token: str) -> Move | None:
        """Map a command verb (m/b/w or the full word, any case) to a Move."""
        token = token.strip().lower()
        for move in cls:
            if token in (move.value, move.value[0]):
                return move
        return None


# =============================================================================
# Hints
# =============================================================================


@dataclass(frozen=True)
class Hint:
    """Required run lengths for one line, in reading order."""

    values: tuple[int, ...] = ()

    @classmethod
    def from_values(cls, values: Iterable[int]) -> Hint:
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __str__(self) -> str:
        return " ".join(str(n) for n in self.values)

    @property
    def min_span(self) -> int:
        """Shortest line that can hold every run with one-cell gaps."""
        if not self.values:
            return 0
        return sum(self.values) + len(self.values) - 1
