"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    def toggled(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class CellState(IntEnum):
    """Internal state of one board cell, stored in the numpy grid."""

    EMPTY = 0
    SHIP = 1
    HIT = 2
    MISS = 3


class DisplayState(StrEnum):
    """Display-safe projection of a cell."""

    EMPTY = "EMPTY"
    SHIP = "SHIP"
    HIT = "HIT"
    MISS = "MISS"


class ShotOutcome(StrEnum):
    """Result of a single accepted shot."""

    HIT = "HIT"
    MISS = "MISS"


class Player(StrEnum):
    """Seat at the shared device."""

    ONE = "ONE"
    TWO = "TWO"

    @property
    def other(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE

    @property
    def label(self) -> str:
        return "Player 1" if self is Player.ONE else "Player 2"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ShipSpec:
    """One entry of the fleet definition."""

    name: str
    length: int


DEFAULT_FLEET: tuple[ShipSpec, ...] = (
    ShipSpec("Carrier", 5),
    ShipSpec("Battleship", 4),
    ShipSpec("Cruiser", 3),
    ShipSpec("Submarine", 3),
    ShipSpec("Destroyer", 2),
)


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    ship: ShipSpec
    bow: Coord
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Settings fixed for the lifetime of a game engine."""

    board_size: int = BOARD_SIZE
    fleet: tuple[ShipSpec, ...] = field(default=DEFAULT_FLEET)

    @property
    def fleet_cells(self) -> int:
        return sum(ship.length for ship in self.fleet)


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.ship.length):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.bow.row, placement.bow.col + i))
        else:
            result.append(Coord(placement.bow.row + i, placement.bow.col))
    return result
