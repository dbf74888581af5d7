"""User-intent model consumed by the game engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from salvo.game.core.models import Coord, Orientation


class IntentKind(str, Enum):
    PLACE_SHIP = "place_ship"
    FIRE = "fire"
    END_TURN = "end_turn"
    TOGGLE_ORIENTATION = "toggle_orientation"
    NEW_GAME = "new_game"


@dataclass(frozen=True, slots=True)
class PlacementIntent:
    """Place the cursor's ship with its bow at ``coord``."""

    coord: Coord
    orientation: Orientation | None = None

    kind = IntentKind.PLACE_SHIP


@dataclass(frozen=True, slots=True)
class FireIntent:
    """Fire at ``coord`` on the opponent's board."""

    coord: Coord

    kind = IntentKind.FIRE


@dataclass(frozen=True, slots=True)
class EndTurnIntent:
    kind = IntentKind.END_TURN


@dataclass(frozen=True, slots=True)
class ToggleOrientationIntent:
    kind = IntentKind.TOGGLE_ORIENTATION


@dataclass(frozen=True, slots=True)
class NewGameIntent:
    kind = IntentKind.NEW_GAME


Intent = PlacementIntent | FireIntent | EndTurnIntent | ToggleOrientationIntent | NewGameIntent
