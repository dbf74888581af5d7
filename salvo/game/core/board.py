"""Board state representation and mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from salvo.game.core.errors import (
    FireError,
    FireErrorKind,
    OffBoardError,
    PlacementError,
    PlacementErrorKind,
)
from salvo.game.core.models import (
    BOARD_SIZE,
    CellState,
    Coord,
    DisplayState,
    ShipPlacement,
    ShipSpec,
    ShotOutcome,
    cells_for_placement,
)

_DISPLAY_BY_CELL: dict[int, DisplayState] = {
    CellState.EMPTY: DisplayState.EMPTY,
    CellState.SHIP: DisplayState.SHIP,
    CellState.HIT: DisplayState.HIT,
    CellState.MISS: DisplayState.MISS,
}


@dataclass(frozen=True, slots=True)
class BoardView:
    """Immutable display projection of a whole board."""

    size: int
    cells: tuple[tuple[DisplayState, ...], ...]

    def at(self, coord: Coord) -> DisplayState:
        return self.cells[coord.row][coord.col]

    def count(self, state: DisplayState) -> int:
        return sum(row.count(state) for row in self.cells)


@dataclass(slots=True)
class BoardState:
    """Numpy-backed board state.

    ``cells`` holds one ``CellState`` per square. ``ships`` maps each square to
    the id of the ship occupying it (0 for open water) so hits can be
    attributed to a ship and sinkings reported.
    """

    size: int = BOARD_SIZE
    cells: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    )
    ships: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int16)
    )
    ship_specs: dict[int, ShipSpec] = field(default_factory=dict)
    ship_cells: dict[int, list[Coord]] = field(default_factory=dict)
    ship_remaining: dict[int, int] = field(default_factory=dict)
    live_cells: int = 0

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Board size must be positive, got {self.size}.")
        if self.cells.shape != (self.size, self.size):
            self.cells = np.zeros((self.size, self.size), dtype=np.int8)
        if self.ships.shape != (self.size, self.size):
            self.ships = np.zeros((self.size, self.size), dtype=np.int16)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def cell_state(self, coord: Coord) -> CellState:
        if not self.in_bounds(coord):
            raise OffBoardError(coord.row, coord.col, self.size)
        return CellState(int(self.cells[coord.row, coord.col]))

    def placement_error(self, placement: ShipPlacement) -> PlacementErrorKind | None:
        """Return why a placement is invalid, or None when it fits."""
        footprint = cells_for_placement(placement)
        if not all(self.in_bounds(cell) for cell in footprint):
            return PlacementErrorKind.OUT_OF_BOUNDS
        if any(self.cells[cell.row, cell.col] != CellState.EMPTY for cell in footprint):
            return PlacementErrorKind.OVERLAP
        return None

    def can_place(self, placement: ShipPlacement) -> bool:
        """Return whether a placement is valid and non-overlapping."""
        return self.placement_error(placement) is None

    def place_ship(self, placement: ShipPlacement) -> int:
        """Place a ship on the board and return its id.

        Either every cell of the ship becomes SHIP or, on ``PlacementError``,
        nothing changes.
        """
        kind = self.placement_error(placement)
        if kind is PlacementErrorKind.OUT_OF_BOUNDS:
            raise PlacementError(kind, f"{placement.ship.name} does not fit inside the board.")
        if kind is PlacementErrorKind.OVERLAP:
            raise PlacementError(kind, f"{placement.ship.name} overlaps another ship.")

        ship_id = len(self.ship_specs) + 1
        footprint = cells_for_placement(placement)
        for cell in footprint:
            self.cells[cell.row, cell.col] = CellState.SHIP
            self.ships[cell.row, cell.col] = ship_id
        self.ship_specs[ship_id] = placement.ship
        self.ship_cells[ship_id] = footprint
        self.ship_remaining[ship_id] = len(footprint)
        self.live_cells += len(footprint)
        return ship_id

    def was_targeted(self, coord: Coord) -> bool:
        """Return whether this cell was previously fired upon."""
        return self.cell_state(coord) in (CellState.HIT, CellState.MISS)

    def fire_at(self, coord: Coord) -> ShotOutcome:
        """Resolve a shot, mutating exactly one cell."""
        if not self.in_bounds(coord):
            raise FireError(FireErrorKind.OUT_OF_BOUNDS, f"({coord.row}, {coord.col}) is off the board.")
        if self.was_targeted(coord):
            raise FireError(
                FireErrorKind.ALREADY_TARGETED, f"({coord.row}, {coord.col}) was already targeted."
            )

        if self.cells[coord.row, coord.col] == CellState.EMPTY:
            self.cells[coord.row, coord.col] = CellState.MISS
            return ShotOutcome.MISS

        self.cells[coord.row, coord.col] = CellState.HIT
        ship_id = int(self.ships[coord.row, coord.col])
        self.ship_remaining[ship_id] -= 1
        self.live_cells -= 1
        return ShotOutcome.HIT

    def ship_sunk_at(self, coord: Coord) -> ShipSpec | None:
        """Return the ship at ``coord`` if every one of its cells has been hit."""
        if not self.in_bounds(coord):
            return None
        ship_id = int(self.ships[coord.row, coord.col])
        if ship_id == 0 or self.ship_remaining[ship_id] != 0:
            return None
        return self.ship_specs[ship_id]

    def has_ships_remaining(self) -> bool:
        """Return whether any SHIP cell is still afloat."""
        return self.live_cells > 0

    def cell_view(self, coord: Coord, reveal_ships: bool) -> DisplayState:
        """Project one cell; hidden ships read as open water."""
        state = self.cell_state(coord)
        if state == CellState.SHIP and not reveal_ships:
            return DisplayState.EMPTY
        return _DISPLAY_BY_CELL[state]

    def snapshot(self, reveal_ships: bool) -> BoardView:
        """Project the whole board into an immutable view."""
        rows = tuple(
            tuple(self.cell_view(Coord(row, col), reveal_ships) for col in range(self.size))
            for row in range(self.size)
        )
        return BoardView(size=self.size, cells=rows)
