"""Common utilities for dvops."""

import re
from typing import Any


def split_listing(text: str) -> tuple[str, list[str]]:
    """Split the tabular text printed by a CLI ``list`` command.

    The first non-blank line is the header; every following non-blank line
    is a data row.

    Args:
        text: Raw command output

    Returns:
        Tuple of (header line, data lines)
    """
    lines = [line.rstrip() for line in text.splitlines() if line.strip()]
    if not lines:
        return "", []
    return lines[0], lines[1:]


def split_columns(header_line: str, line: str) -> dict[str, str]:
    """Slice one row of a tab-aligned listing into named cells.

    Cells are cut at the offsets where the header columns start, so empty
    cells stay empty instead of shifting later values left. Header names
    are lower-cased for use as keys.

    Args:
        header_line: The header line of the listing
        line: A data line from the same listing

    Returns:
        Mapping of column name to cell text
    """
    starts = [m.start() for m in re.finditer(r"\S+", header_line)]
    names = header_line.split()
    ends = starts[1:] + [len(line)]
    return {name.lower(): line[start:end].strip() for name, start, end in zip(names, starts, ends)}


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
