"""
ASCII rendering for picross puzzles.

Column hints are stacked above each column and share a bottom baseline; row
hints are right-aligned in front of each row. Only read-only LineViews are
consulted, never the live cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import simple_chalk as chalk  # type: ignore[import-untyped]

from picross import LineView, Puzzle
from picross_types import CellState

__all__ = ["RenderStyle", "render_column_hints", "render_puzzle", "render_rows"]


@dataclass(frozen=True)
class RenderStyle:
    """Glyphs and colouring used by the renderer."""

    filled: str = "■"
    blocked: str = "⊠"
    empty: str = "□"
    color: bool = True
    min_cell_width: int = 2  # Glyph plus one space

    def glyph(self, state: CellState) -> str:
        match state:
            case CellState.FILLED:
                return self.filled
            case CellState.BLOCKED:
                return self.blocked
            case _:
                return self.empty


def _plain(s: str) -> str:
    return s


def _hint_tokens(view: LineView) -> list[str]:
    # An empty hint is shown as 0 so the line still has a label
    return [str(n) for n in view.hint] or ["0"]


def _hint_color(view: LineView, style: RenderStyle) -> Callable[[str], str]:
    if style.color and view.satisfied:
        return chalk.green
    return _plain


def _glyph_color(state: CellState, style: RenderStyle) -> Callable[[str], str]:
    if not style.color:
        return _plain
    match state:
        case CellState.FILLED:
            return chalk.whiteBright
        case CellState.BLOCKED:
            return chalk.red
        case _:
            return _plain


def render_column_hints(
    columns: Sequence[LineView], hint_width: int, cell_width: int, style: RenderStyle
) -> list[str]:
    """Render column hints as stacked lines, bottom-aligned above the grid."""
    stacks = [_hint_tokens(view) for view in columns]
    height = max((len(stack) for stack in stacks), default=0)

    lines: list[str] = []
    for level in range(height):
        parts = [" " * (hint_width + 1)]
        for view, stack in zip(columns, stacks):
            pos = level - (height - len(stack))
            if pos < 0:
                parts.append(" " * cell_width)
                continue
            token = stack[pos]
            colorize = _hint_color(view, style)
            parts.append(colorize(token) + " " * (cell_width - len(token)))
        lines.append("".join(parts).rstrip())
    return lines


def render_rows(
    rows: Sequence[LineView], hint_width: int, cell_width: int, style: RenderStyle
) -> list[str]:
    """Render each row as its right-aligned hint followed by cell glyphs."""
    lines: list[str] = []
    for view in rows:
        text = " ".join(_hint_tokens(view))
        parts = [" " * (hint_width - len(text)), _hint_color(view, style)(text), " "]
        for state in view.states:
            glyph = style.glyph(state)
            parts.append(_glyph_color(state, style)(glyph) + " " * (cell_width - len(glyph)))
        lines.append("".join(parts).rstrip())
    return lines


def render_puzzle(puzzle: Puzzle, style: RenderStyle | None = None) -> str:
    """
    Render the puzzle board as text.

    Args:
        puzzle: The puzzle to render
        style: Glyphs and colouring (default RenderStyle())

    Returns:
        Board text, with ANSI colour codes when style.color is set
    """
    if style is None:
        style = RenderStyle()

    rows = puzzle.row_views()
    columns = puzzle.column_views()

    widest_token = max(len(token) for view in columns for token in _hint_tokens(view))
    cell_width = max(style.min_cell_width, widest_token + 1)
    hint_width = max(len(" ".join(_hint_tokens(view))) for view in rows)

    lines = render_column_hints(columns, hint_width, cell_width, style)
    lines.extend(render_rows(rows, hint_width, cell_width, style))
    return "\n".join(lines)
