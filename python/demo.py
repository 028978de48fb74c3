"""
Demonstration script for the picross engine.
Replays a fixed sequence of moves and prints the board and win check after each.
"""

from ascii_render import RenderStyle, render_puzzle
from picross_types import Move
from puzzle_parser import parse_puzzle

CORNERS = """
puzzle:
  rows:
    r1: [1, 1]
    r2: [1]
    r3: [1, 1]
  columns:
    c1: [1, 1]
    c2: [1]
    c3: [1, 1]
"""

MOVES = [
    (Move.MARK, 1, 1),
    (Move.MARK, 3, 1),
    (Move.BLOCK, 2, 1),
    (Move.MARK, 2, 2),
    (Move.MARK, 1, 3),
    (Move.MARK, 3, 3),
]


def demo() -> None:
    """Play the corners puzzle to completion."""
    puzzle = parse_puzzle(CORNERS)
    style = RenderStyle()

    print("Initial board:")
    print(render_puzzle(puzzle, style))
    print(f"Solved: {puzzle.check()}")
    print()

    for move, x, y in MOVES:
        puzzle.apply_move(move, x, y)
        print(f"{move.value} ({x}, {y})")
        print("-" * 20)
        print(render_puzzle(puzzle, style))
        print(f"Solved: {puzzle.check()}")
        print()


if __name__ == "__main__":
    demo()
