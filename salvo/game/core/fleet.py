"""Fleet definition validation and random placement."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from salvo.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    GameConfig,
    Orientation,
    ShipPlacement,
    ShipSpec,
    cells_for_placement,
)


def validate_fleet(fleet: Sequence[ShipSpec], size: int = BOARD_SIZE) -> tuple[bool, str]:
    """Validate whether a fleet definition is playable on a ``size`` board."""
    if size <= 0:
        return False, f"Board size must be positive, got {size}."
    if not fleet:
        return False, "Fleet must contain at least one ship."
    for ship in fleet:
        if not ship.name.strip():
            return False, "Ship names must not be blank."
        if ship.length <= 0:
            return False, f"{ship.name} must have a positive length."
        if ship.length > size:
            return False, f"{ship.name} (length {ship.length}) does not fit a {size}x{size} board."
    total = sum(ship.length for ship in fleet)
    if total > size * size:
        return False, f"Fleet needs {total} cells but the board only has {size * size}."
    return True, ""


def ensure_valid_config(config: GameConfig) -> GameConfig:
    """Return ``config`` unchanged or raise ``ValueError`` describing the problem."""
    valid, reason = validate_fleet(config.fleet, size=config.board_size)
    if not valid:
        raise ValueError(reason)
    return config


def random_fleet(
    rng: random.Random,
    fleet: Sequence[ShipSpec] = DEFAULT_FLEET,
    size: int = BOARD_SIZE,
    occupied: Iterable[Coord] = (),
) -> list[ShipPlacement]:
    """Generate random non-overlapping placements for ``fleet``, in fleet order.

    Cells in ``occupied`` are treated as already taken.
    """
    taken = {(cell.row, cell.col) for cell in occupied}
    for _ in range(400):
        generated = _generate_fleet(rng, fleet, size, set(taken))
        if generated is not None:
            return generated
    raise RuntimeError("Failed to generate random fleet placement.")


def _generate_fleet(
    rng: random.Random,
    fleet: Sequence[ShipSpec],
    size: int,
    occupied: set[tuple[int, int]],
) -> list[ShipPlacement] | None:
    placements: list[ShipPlacement] = []
    for ship in fleet:
        candidates = _candidate_placements(ship, size, occupied)
        if not candidates:
            return None
        placement = rng.choice(candidates)
        placements.append(placement)
        for cell in cells_for_placement(placement):
            occupied.add((cell.row, cell.col))
    return placements


def _candidate_placements(
    ship: ShipSpec,
    size: int,
    occupied: set[tuple[int, int]],
) -> list[ShipPlacement]:
    candidates: list[ShipPlacement] = []
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        max_row = size if orientation is Orientation.HORIZONTAL else size - ship.length + 1
        max_col = size - ship.length + 1 if orientation is Orientation.HORIZONTAL else size
        for row in range(max_row):
            for col in range(max_col):
                placement = ShipPlacement(ship=ship, bow=Coord(row=row, col=col), orientation=orientation)
                cells = cells_for_placement(placement)
                if any((cell.row, cell.col) in occupied for cell in cells):
                    continue
                candidates.append(placement)
    return candidates
