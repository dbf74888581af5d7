from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from salvo.game.app.engine import GameEngine
from salvo.game.core.models import Coord, GameConfig, Orientation, ShipSpec

# Bows for the default fleet stacked down the left edge, one ship every other row.
STACKED_BOWS: tuple[Coord, ...] = (Coord(0, 0), Coord(2, 0), Coord(4, 0), Coord(6, 0), Coord(8, 0))


def place_stacked_fleet(engine: GameEngine) -> None:
    for bow in STACKED_BOWS:
        result = engine.handle_placement_intent(bow, Orientation.HORIZONTAL)
        assert result.accepted, result.message


@pytest.fixture
def stacked_bows() -> tuple[Coord, ...]:
    return STACKED_BOWS


@pytest.fixture
def place_fleet() -> Callable[[GameEngine], None]:
    return place_stacked_fleet


@pytest.fixture
def engine() -> GameEngine:
    return GameEngine()


@pytest.fixture
def battle_engine() -> GameEngine:
    engine = GameEngine()
    place_stacked_fleet(engine)
    place_stacked_fleet(engine)
    return engine


@pytest.fixture
def small_config() -> GameConfig:
    return GameConfig(board_size=4, fleet=(ShipSpec("Scout", 2), ShipSpec("Raft", 1)))


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)
