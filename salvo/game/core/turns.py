"""Phase and turn sequencing for a hot-seat game."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from salvo.game.core.errors import IntentRejected, IntentRejectedKind
from salvo.game.core.models import Orientation, Player

DEFAULT_ORIENTATION = Orientation.HORIZONTAL


class PhaseKind(StrEnum):
    SETUP = "SETUP"
    BATTLE = "BATTLE"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True, slots=True)
class GamePhase:
    """Top-level game state.

    ``player`` is the player placing ships during SETUP, the shooter during
    BATTLE and the winner once GAME_OVER.
    """

    kind: PhaseKind
    player: Player

    @classmethod
    def setup(cls, player: Player) -> GamePhase:
        return cls(PhaseKind.SETUP, player)

    @classmethod
    def battle(cls, player: Player) -> GamePhase:
        return cls(PhaseKind.BATTLE, player)

    @classmethod
    def game_over(cls, winner: Player) -> GamePhase:
        return cls(PhaseKind.GAME_OVER, winner)

    @property
    def is_setup(self) -> bool:
        return self.kind is PhaseKind.SETUP

    @property
    def is_battle(self) -> bool:
        return self.kind is PhaseKind.BATTLE

    @property
    def is_over(self) -> bool:
        return self.kind is PhaseKind.GAME_OVER

    @property
    def winner(self) -> Player | None:
        return self.player if self.kind is PhaseKind.GAME_OVER else None

    def describe(self) -> str:
        if self.kind is PhaseKind.SETUP:
            return f"{self.player.label} Setup"
        if self.kind is PhaseKind.BATTLE:
            return f"{self.player.label} Battle Turn"
        return f"Game Over ({self.player.label} wins)"


@dataclass(frozen=True, slots=True)
class PlacementCursor:
    """Next fleet ship to place and the orientation it will be placed in."""

    ship_index: int = 0
    orientation: Orientation = DEFAULT_ORIENTATION

    def advanced(self) -> PlacementCursor:
        return replace(self, ship_index=self.ship_index + 1)

    def toggled(self) -> PlacementCursor:
        return replace(self, orientation=self.orientation.toggled())


@dataclass(slots=True)
class TurnController:
    """Owns the phase, the placement cursor and the shot-fired flag.

    The cursor only exists during setup and the shot flag is only ever set
    during battle; every transition goes through the methods below.
    """

    fleet_size: int
    phase: GamePhase = GamePhase.setup(Player.ONE)
    cursor: PlacementCursor | None = PlacementCursor()
    shot_fired: bool = False

    def reset(self) -> None:
        self.phase = GamePhase.setup(Player.ONE)
        self.cursor = PlacementCursor()
        self.shot_fired = False

    def require_setup(self) -> PlacementCursor:
        if not self.phase.is_setup or self.cursor is None:
            raise IntentRejected(
                IntentRejectedKind.WRONG_PHASE,
                f"Ships can only be placed during setup ({self.phase.describe()}).",
            )
        return self.cursor

    def toggle_orientation(self) -> Orientation:
        cursor = self.require_setup()
        self.cursor = cursor.toggled()
        return self.cursor.orientation

    def advance_cursor(self) -> GamePhase | None:
        """Move to the next ship; return the new phase if setup for this player ended."""
        cursor = self.require_setup().advanced()
        if cursor.ship_index < self.fleet_size:
            self.cursor = cursor
            return None
        if self.phase.player is Player.ONE:
            self.phase = GamePhase.setup(Player.TWO)
            self.cursor = PlacementCursor()
        else:
            self.phase = GamePhase.battle(Player.ONE)
            self.cursor = None
        self.shot_fired = False
        return self.phase

    def require_can_fire(self) -> Player:
        if not self.phase.is_battle:
            raise IntentRejected(
                IntentRejectedKind.WRONG_PHASE,
                f"Shots can only be fired during battle ({self.phase.describe()}).",
            )
        if self.shot_fired:
            raise IntentRejected(
                IntentRejectedKind.TURN_ALREADY_FIRED,
                f"{self.phase.player.label} already fired this turn. End the turn first.",
            )
        return self.phase.player

    def record_shot(self, target_has_ships: bool) -> GamePhase | None:
        """Mark the turn as spent; return GAME_OVER phase when the target fleet is gone."""
        shooter = self.require_can_fire()
        self.shot_fired = True
        if target_has_ships:
            return None
        self.phase = GamePhase.game_over(shooter)
        self.shot_fired = False
        return self.phase

    def end_turn(self) -> GamePhase:
        if not self.phase.is_battle:
            raise IntentRejected(
                IntentRejectedKind.WRONG_PHASE,
                f"Turns can only be ended during battle ({self.phase.describe()}).",
            )
        if not self.shot_fired:
            raise IntentRejected(
                IntentRejectedKind.TURN_NOT_YET_FIRED,
                f"{self.phase.player.label} must fire before ending the turn.",
            )
        self.phase = GamePhase.battle(self.phase.player.other)
        self.shot_fired = False
        return self.phase
