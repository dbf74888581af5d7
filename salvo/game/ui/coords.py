"""Conversion between ``B7``-style labels and board coordinates."""

from __future__ import annotations

import re

from salvo.game.core.models import Coord

COORD_RE = re.compile(r"^([A-Z])(\d{1,2})$")


def parse_coord(text: str, size: int) -> Coord:
    """Translate a label like 'B7' into a zero-based Coord on a ``size`` board."""
    match = COORD_RE.match(text.strip().upper())
    if match is None:
        raise ValueError(f"Invalid coordinate '{text}'.")
    row = ord(match.group(1)) - ord("A")
    col = int(match.group(2)) - 1
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Coordinate '{text}' is off the {size}x{size} board.")
    return Coord(row, col)


def format_coord(coord: Coord) -> str:
    """Convert a zero-based Coord back to a label like 'B7'."""
    return f"{chr(ord('A') + coord.row)}{coord.col + 1}"


def row_label(row: int) -> str:
    return chr(ord("A") + row)
