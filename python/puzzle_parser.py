"""
Puzzle definition parsing for picross.

Definitions are YAML documents of the form:

    puzzle:
      rows:
        r1: [1, 1]
        r2: []
      columns:
        c1: [1]
        c2: [1]

Line identifiers are free-form; hints are read in document order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from picross import Puzzle
from picross_types import Hint

__all__ = ["DefinitionError", "load_puzzle", "parse_puzzle"]

logger = logging.getLogger(__name__)


class DefinitionError(ValueError):
    """The puzzle definition could not be read or is malformed."""


class _PuzzleLoader(yaml.SafeLoader):
    """SafeLoader with string-only, unique mapping keys."""


def _construct_mapping(loader: _PuzzleLoader, node: yaml.MappingNode) -> dict[str, Any]:
    # Keys stay as written: 'yes', 'on', '1' and '01' are distinct line names
    loader.flatten_mapping(node)
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        line = key_node.start_mark.line + 1
        if not isinstance(key_node, yaml.ScalarNode):
            raise DefinitionError(f"Mapping keys must be plain names (line {line})")
        key = key_node.value
        if key in mapping:
            raise DefinitionError(
                f"Duplicate key '{key}' on line {line}\n"
                f"  Every row, column and section name must be unique"
            )
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


_PuzzleLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping)


def load_puzzle(path: str | Path) -> Puzzle:
    """
    Read and parse a puzzle definition file.

    Raises:
        DefinitionError: If the file cannot be read or its contents are invalid
    """
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise DefinitionError(f"Cannot read puzzle file '{path}': {e}") from e
    return parse_puzzle(contents)


def parse_puzzle(contents: str) -> Puzzle:
    """
    Parse a YAML puzzle definition into a wired Puzzle.

    Validation:
    - The document must hold a 'puzzle' mapping with 'rows' and 'columns' mappings
    - Each hint is a list of non-negative integers (null means no runs)
    - Every hint must fit in its line with one-cell gaps between runs
    - Row hints and column hints must add up to the same number of filled cells

    Args:
        contents: Raw YAML text

    Returns:
        Puzzle with all cells empty

    Raises:
        DefinitionError: On YAML syntax errors or any validation failure
    """
    try:
        document = yaml.load(contents, Loader=_PuzzleLoader)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark
        where = f"line {mark.line + 1}, col {mark.column + 1}" if mark is not None else "unknown position"
        raise DefinitionError(f"Failed to parse yaml: {where}\n  Reason: {e.problem}") from e
    except yaml.YAMLError as e:
        raise DefinitionError(f"Failed to parse yaml: {e}") from e

    section = _get_mapping(document, "puzzle", "document")
    rows_def = _get_mapping(section, "rows", "puzzle")
    columns_def = _get_mapping(section, "columns", "puzzle")

    if not rows_def or not columns_def:
        raise DefinitionError(
            f"Failed to parse dimensions\n"
            f"  Rows: {len(rows_def)}\n"
            f"  Columns: {len(columns_def)}\n"
            f"  A puzzle needs at least one row and one column"
        )

    row_hints = _parse_hints(rows_def, "rows")
    column_hints = _parse_hints(columns_def, "columns")
    _check_consistency(row_hints, column_hints)

    logger.info("Parsed puzzle: %d rows x %d columns", len(row_hints), len(column_hints))
    return Puzzle.from_hints(row_hints, column_hints)


def _get_mapping(container: Any, key: str, where: str) -> dict[Any, Any]:
    if not isinstance(container, dict):
        raise DefinitionError(f"Expected a mapping for '{where}', got {type(container).__name__}")
    if key not in container:
        raise DefinitionError(f"Missing '{key}' section in '{where}'")
    value = container[key]
    if not isinstance(value, dict):
        raise DefinitionError(
            f"Failed to parse '{key}'\n"
            f"  Expected a mapping of line name to hint list, got {type(value).__name__}"
        )
    return value


def _parse_hints(lines: dict[Any, Any], section: str) -> list[Hint]:
    hints: list[Hint] = []
    for name, raw in lines.items():
        if raw is None:
            hints.append(Hint())
            continue
        if not isinstance(raw, list):
            raise DefinitionError(
                f"Poorly formatted hints for {section} '{name}': {raw!r}\n"
                f"  Expected a list of integers, e.g. [3, 1]"
            )
        values: list[int] = []
        for pos, value in enumerate(raw):
            # bool is an int subclass; YAML 'yes'/'true' must not pass as 1
            if isinstance(value, bool) or not isinstance(value, int):
                raise DefinitionError(
                    f"Hint is not a number: {value!r}\n"
                    f"  In {section} '{name}', position {pos}"
                )
            if value < 0:
                raise DefinitionError(
                    f"Hint must not be negative: {value}\n"
                    f"  In {section} '{name}', position {pos}"
                )
            values.append(value)
        hints.append(Hint.from_values(values))
    return hints


def _check_consistency(row_hints: list[Hint], column_hints: list[Hint]) -> None:
    width = len(column_hints)
    height = len(row_hints)

    for r, hint in enumerate(row_hints):
        if hint.min_span > width:
            raise DefinitionError(
                f"Row {r + 1} hint '{hint}' needs {hint.min_span} cells, "
                f"but rows are {width} cells wide"
            )
    for c, hint in enumerate(column_hints):
        if hint.min_span > height:
            raise DefinitionError(
                f"Column {c + 1} hint '{hint}' needs {hint.min_span} cells, "
                f"but columns are {height} cells tall"
            )

    row_total = sum(sum(h.values) for h in row_hints)
    column_total = sum(sum(h.values) for h in column_hints)
    if row_total != column_total:
        raise DefinitionError(
            f"Inconsistent hints\n"
            f"  Row hints fill {row_total} cells\n"
            f"  Column hints fill {column_total} cells"
        )
