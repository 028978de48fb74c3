"""
Interactive picross game.
Display the board and apply typed moves until every hint is satisfied.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum

import readchar
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import RenderStyle, render_puzzle
from picross import BoundsError, Puzzle
from picross_types import Move
from puzzle_parser import DefinitionError, load_puzzle

logger = logging.getLogger(__name__)

USAGE = "usage: interactive_game.py PUZZLE.yaml [--no-color] [--verbose] [--show]"


class InputFormatError(ValueError):
    """A typed command could not be understood."""


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"


def parse_command(text: str) -> tuple[Move, int, int]:
    """
    Parse '<verb> <x> <y>' into a move and 1-based column/row.

    Verbs: m/mark, b/block, w/wipe (any case).

    Raises:
        InputFormatError: On wrong token count, unknown verb or non-integer coordinates
    """
    tokens = text.split()
    if len(tokens) != 3:
        raise InputFormatError(
            f"Expected 3 tokens '<verb> <x> <y>', got {len(tokens)}: '{text.strip()}'"
        )

    verb, x_str, y_str = tokens
    move = Move.from_token(verb)
    if move is None:
        raise InputFormatError(f"Unknown move '{verb}' (use m, b or w)")

    try:
        x = int(x_str)
        y = int(y_str)
    except ValueError as e:
        raise InputFormatError(f"Coordinates must be integers, got '{x_str}' '{y_str}'") from e

    return move, x, y


@dataclass(frozen=True)
class GameSettings:
    """Options taken from the command line."""

    puzzle_path: str
    style: RenderStyle = field(default_factory=RenderStyle)
    show_only: bool = False
    verbose: bool = False

    @classmethod
    def from_argv(cls, argv: list[str]) -> GameSettings:
        paths = [arg for arg in argv if not arg.startswith("--")]
        flags = {arg for arg in argv if arg.startswith("--")}
        unknown = flags - {"--no-color", "--verbose", "--show"}
        if len(paths) != 1 or unknown:
            raise InputFormatError(USAGE)
        return cls(
            puzzle_path=paths[0],
            style=RenderStyle(color="--no-color" not in flags),
            show_only="--show" in flags,
            verbose="--verbose" in flags,
        )


class InteractiveGame:
    """Command loop around a single puzzle."""

    def __init__(
        self,
        puzzle: Puzzle,
        style: RenderStyle | None = None,
        console: Console | None = None,
    ) -> None:
        self.puzzle = puzzle
        self.style = style or RenderStyle()
        self.console = console or Console()
        self.moves = 0
        self.status = GameStatus.WON if puzzle.check() else GameStatus.PLAYING
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with board and status."""
        body = Text()
        body.append(Text.from_ansi(render_puzzle(self.puzzle, self.style)))
        body.append("\n\n")

        rows, cols = self.puzzle.dimensions
        rows_ok = sum(view.satisfied for view in self.puzzle.row_views())
        cols_ok = sum(view.satisfied for view in self.puzzle.column_views())
        body.append("Size: ", style="bold")
        body.append(f"{cols} x {rows}   ")
        body.append("Satisfied: ", style="bold")
        body.append(f"{rows_ok}/{rows} rows, {cols_ok}/{cols} columns   ")
        body.append("Moves: ", style="bold")
        body.append(f"{self.moves}\n\n")

        body.append("Commands:\n", style="bold cyan")
        body.append("  m X Y - Mark cell (column X, row Y)\n")
        body.append("  b X Y - Block cell\n")
        body.append("  w X Y - Wipe cell\n")
        body.append("  q     - Quit\n\n")

        body.append("─" * 40 + "\n", style="dim")
        body.append("Status: ", style="bold")
        body.append(self.status_message)

        if self.status is GameStatus.WON:
            return Panel(body, title="Picross - Solved!", border_style="green")
        return Panel(body, title="Picross", border_style="blue")

    def handle_command(self, text: str) -> bool:
        """
        Apply one line of input.

        Returns:
            False when the player asked to quit, True otherwise
        """
        command = text.strip().lower()
        if command in ("q", "quit"):
            self.status_message = "Quitting..."
            return False
        if command in ("h", "help", ""):
            self.status_message = "Enter '<m|b|w> <column> <row>', e.g. 'm 2 3'"
            return True

        try:
            move, x, y = parse_command(text)
            self.puzzle.apply_move(move, x, y)
        except (InputFormatError, BoundsError) as e:
            self.status_message = f"✗ {e}".replace("\n", " ")
            return True

        self.moves += 1
        if self.puzzle.check():
            self.status = GameStatus.WON
            self.status_message = f"✓ Solved in {self.moves} moves!"
        else:
            self.status = GameStatus.PLAYING
            self.status_message = f"✓ {move.value} ({x}, {y})"
        return True

    def run(self) -> None:
        """Run the game until it is solved or the player quits."""
        try:
            while True:
                self.console.clear()
                self.console.print(self.generate_display())

                if self.status is GameStatus.WON:
                    self.console.print("Press any key to exit.")
                    readchar.readkey()
                    break

                if not self.handle_command(self.console.input("> ")):
                    break
        except (KeyboardInterrupt, EOFError):
            self.status_message = "Interrupted by user"
            self.console.print()


def main(argv: list[str]) -> int:
    console = Console()
    try:
        settings = GameSettings.from_argv(argv)
    except InputFormatError as e:
        console.print(Text(str(e)))
        return 2

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        puzzle = load_puzzle(settings.puzzle_path)
    except DefinitionError as e:
        console.print(Text(f"Error: {e}", style="bold red"))
        return 1

    if settings.show_only:
        print(render_puzzle(puzzle, settings.style))
        return 0

    InteractiveGame(puzzle, settings.style, console).run()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
