"""Tests for puzzle_parser module."""

from pathlib import Path

import pytest

from picross_types import CellState, Hint
from puzzle_parser import DefinitionError, load_puzzle, parse_puzzle

PUZZLES_DIR = Path(__file__).resolve().parent.parent / "puzzles"


class TestParsePuzzle:
    """Tests for parsing valid definitions."""

    def test_simple_puzzle(self) -> None:
        """Parse a 2x3 puzzle and check dimensions and hints."""
        definition = """
        puzzle:
          rows:
            r1: [1, 1]
            r2: [2]
          columns:
            c1: [1]
            c2: [1]
            c3: [2]
        """
        puzzle = parse_puzzle(definition)

        assert puzzle.dimensions == (2, 3)
        assert [row.hint for row in puzzle.rows] == [Hint((1, 1)), Hint((2,))]
        assert [col.hint for col in puzzle.columns] == [Hint((1,)), Hint((1,)), Hint((2,))]

    def test_all_cells_start_empty(self) -> None:
        puzzle = parse_puzzle("puzzle: {rows: {a: [1]}, columns: {b: [1]}}")
        assert puzzle.cell_state(1, 1) is CellState.EMPTY

    def test_hints_keep_document_order(self) -> None:
        """Line names do not affect ordering."""
        definition = """
        puzzle:
          rows:
            zeta: [3]
            alpha: [1]
          columns:
            c: [2]
            b: [1]
            a: [1]
        """
        puzzle = parse_puzzle(definition)
        assert puzzle.rows[0].hint == Hint((3,))
        assert puzzle.rows[1].hint == Hint((1,))
        assert puzzle.columns[0].hint == Hint((2,))

    def test_empty_and_null_hints(self) -> None:
        definition = """
        puzzle:
          rows:
            r1: []
            r2:
          columns:
            c1: []
        """
        puzzle = parse_puzzle(definition)
        assert puzzle.dimensions == (2, 1)
        assert puzzle.rows[0].hint == Hint()
        assert puzzle.rows[1].hint == Hint()
        assert puzzle.check()

    def test_zero_hint_accepted(self) -> None:
        """Zero parses as a hint value but can never be satisfied."""
        puzzle = parse_puzzle("puzzle: {rows: {r: [0]}, columns: {c: [0]}}")
        assert puzzle.rows[0].hint == Hint((0,))
        assert not puzzle.check()

    def test_boolean_and_numeric_looking_names(self) -> None:
        """Names like yes/on/true and 1/01 are kept as distinct lines."""
        definition = "puzzle: {rows: {yes: [1], on: [], true: [1]}, columns: {1: [1, 1], 01: []}}"
        puzzle = parse_puzzle(definition)
        assert puzzle.dimensions == (3, 2)
        assert [row.hint for row in puzzle.rows] == [Hint((1,)), Hint(), Hint((1,))]
        assert [col.hint for col in puzzle.columns] == [Hint((1, 1)), Hint()]

    def test_bundled_puzzles(self) -> None:
        heart = load_puzzle(PUZZLES_DIR / "heart.yaml")
        assert heart.dimensions == (5, 5)
        corners = load_puzzle(PUZZLES_DIR / "corners.yaml")
        assert corners.dimensions == (3, 3)

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "p.yaml"
        path.write_text("puzzle:\n  rows:\n    r1: [1]\n  columns:\n    c1: [1]\n", encoding="utf-8")
        puzzle = load_puzzle(path)
        assert puzzle.dimensions == (1, 1)
        assert puzzle.rows[0].hint == Hint((1,))


class TestParseErrors:
    """Tests for rejected definitions."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DefinitionError, match="Cannot read puzzle file"):
            load_puzzle(tmp_path / "missing.yaml")

    def test_yaml_syntax_error_reports_position(self) -> None:
        definition = "puzzle:\n  rows: [1, 2\n  columns: {}\n"
        with pytest.raises(DefinitionError, match=r"Failed to parse yaml: line \d+, col \d+"):
            parse_puzzle(definition)

    def test_empty_document(self) -> None:
        with pytest.raises(DefinitionError, match="Expected a mapping"):
            parse_puzzle("")

    def test_missing_puzzle_section(self) -> None:
        with pytest.raises(DefinitionError, match="Missing 'puzzle'"):
            parse_puzzle("rows: {r: [1]}\ncolumns: {c: [1]}\n")

    def test_missing_rows(self) -> None:
        with pytest.raises(DefinitionError, match="Missing 'rows'"):
            parse_puzzle("puzzle: {columns: {c: [1]}}")

    def test_missing_columns(self) -> None:
        with pytest.raises(DefinitionError, match="Missing 'columns'"):
            parse_puzzle("puzzle: {rows: {r: [1]}}")

    def test_rows_not_a_mapping(self) -> None:
        with pytest.raises(DefinitionError, match="Failed to parse 'rows'"):
            parse_puzzle("puzzle: {rows: [[1]], columns: {c: [1]}}")

    def test_no_rows(self) -> None:
        with pytest.raises(DefinitionError, match="Failed to parse dimensions"):
            parse_puzzle("puzzle: {rows: {}, columns: {c: []}}")

    def test_hint_not_a_list(self) -> None:
        with pytest.raises(DefinitionError, match="Poorly formatted hints"):
            parse_puzzle("puzzle: {rows: {r: 1}, columns: {c: [1]}}")

    @pytest.mark.parametrize("value", ["x", "1.5", "true", "[1]"])
    def test_non_numeric_hint(self, value: str) -> None:
        with pytest.raises(DefinitionError, match="Hint is not a number"):
            parse_puzzle(f"puzzle: {{rows: {{r: [{value}]}}, columns: {{c: [1]}}}}")

    def test_negative_hint(self) -> None:
        with pytest.raises(DefinitionError, match="must not be negative"):
            parse_puzzle("puzzle: {rows: {r: [-1]}, columns: {c: [1]}}")

    def test_row_hint_too_long(self) -> None:
        definition = "puzzle: {rows: {r: [1, 1]}, columns: {a: [1], b: [1]}}"
        with pytest.raises(DefinitionError, match="needs 3 cells"):
            parse_puzzle(definition)

    def test_column_hint_too_long(self) -> None:
        definition = "puzzle: {rows: {a: [1], b: [1]}, columns: {c: [3]}}"
        with pytest.raises(DefinitionError, match="Column 1 hint"):
            parse_puzzle(definition)

    def test_inconsistent_totals(self) -> None:
        definition = "puzzle: {rows: {a: [2], b: []}, columns: {c: [1], d: [2]}}"
        with pytest.raises(DefinitionError, match="Inconsistent hints"):
            parse_puzzle(definition)

    def test_duplicate_row_name(self) -> None:
        """A repeated line name is an error, not a silently dropped row."""
        definition = """
        puzzle:
          rows:
            r1: [1]
            r3: [1]
            r3: []
          columns:
            c1: [2]
        """
        with pytest.raises(DefinitionError, match="Duplicate key 'r3' on line 6"):
            parse_puzzle(definition)

    def test_duplicate_section(self) -> None:
        definition = "puzzle:\n  rows: {r: [1]}\n  rows: {r: [1]}\n  columns: {c: [1]}\n"
        with pytest.raises(DefinitionError, match="Duplicate key 'rows'"):
            parse_puzzle(definition)

    def test_non_scalar_key(self) -> None:
        with pytest.raises(DefinitionError, match="plain names"):
            parse_puzzle("puzzle: {rows: {[a]: [1]}, columns: {c: [1]}}")

    def test_definition_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_puzzle("puzzle: 3")
