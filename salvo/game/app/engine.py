"""Game engine: owns both boards and sequences a hot-seat game."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from salvo.game.app.events import (
    EventBus,
    GameWon,
    IntentRejectedEvent,
    PhaseChanged,
    ShipPlaced,
    ShotResolved,
    Subscription,
    TurnEnded,
)
from salvo.game.app.intents import (
    EndTurnIntent,
    FireIntent,
    Intent,
    IntentKind,
    NewGameIntent,
    PlacementIntent,
    ToggleOrientationIntent,
)
from salvo.game.app.services.intent_policy import valid_intents
from salvo.game.app.services.status_text import (
    game_over_text,
    pass_device_notice,
    phase_status,
    setup_complete_notice,
    shot_text,
)
from salvo.game.core.board import BoardState, BoardView
from salvo.game.core.errors import FireError, IntentRejected, PlacementError, RejectionKind
from salvo.game.core.fleet import ensure_valid_config
from salvo.game.core.models import (
    Coord,
    GameConfig,
    Orientation,
    Player,
    ShipPlacement,
    ShipSpec,
    ShotOutcome,
)
from salvo.game.core.turns import GamePhase, PlacementCursor, TurnController

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class IntentResult:
    """Outcome of one intent.

    Rejected intents carry ``reason`` and leave the engine untouched. Accepted
    intents that hand the device to the other player carry a ``notice`` meant
    for a blocking dialog.
    """

    accepted: bool
    phase: GamePhase
    message: str
    reason: RejectionKind | None = None
    outcome: ShotOutcome | None = None
    sunk: ShipSpec | None = None
    notice: str | None = None


@dataclass(frozen=True, slots=True)
class DisplayBoard:
    """Board the presentation layer should draw right now."""

    owner: Player
    reveal_ships: bool
    view: BoardView


class GameEngine:
    """Two-player same-device game: setup for each player, then alternating shots."""

    def __init__(self, config: GameConfig | None = None, *, event_bus: EventBus | None = None) -> None:
        self._config = ensure_valid_config(config if config is not None else GameConfig())
        self._events = event_bus if event_bus is not None else EventBus()
        self._boards = self._fresh_boards()
        self._turns = TurnController(fleet_size=len(self._config.fleet))
        self._status = self._phase_status()

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def placement_cursor(self) -> PlacementCursor | None:
        return self._turns.cursor

    @property
    def shot_fired(self) -> bool:
        return self._turns.shot_fired

    def current_phase(self) -> GamePhase:
        return self._turns.phase

    def status_message(self) -> str:
        return self._status

    def valid_intents(self) -> frozenset[IntentKind]:
        return valid_intents(self._turns.phase, self._turns.shot_fired)

    def current_ship(self) -> ShipSpec | None:
        """Ship the placement cursor points at, or None outside setup."""
        cursor = self._turns.cursor
        if cursor is None:
            return None
        return self._config.fleet[cursor.ship_index]

    def remaining_ship_cells(self, player: Player) -> int:
        return self._boards[player].live_cells

    def subscribe(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        return self._events.subscribe(event_type, handler)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._events.unsubscribe(subscription)

    def handle(self, intent: Intent) -> IntentResult:
        """Dispatch an intent object to its handler."""
        if isinstance(intent, PlacementIntent):
            return self.handle_placement_intent(intent.coord, intent.orientation)
        if isinstance(intent, FireIntent):
            return self.handle_fire_intent(intent.coord)
        if isinstance(intent, EndTurnIntent):
            return self.handle_end_turn_intent()
        if isinstance(intent, ToggleOrientationIntent):
            return self.toggle_orientation()
        if isinstance(intent, NewGameIntent):
            return self.new_game()
        raise TypeError(f"Unsupported intent: {intent!r}")

    def handle_placement_intent(self, coord: Coord, orientation: Orientation | None = None) -> IntentResult:
        """Place the cursor's ship with its bow at ``coord``."""
        try:
            cursor = self._turns.require_setup()
        except IntentRejected as exc:
            return self._reject(exc.kind, str(exc))

        player = self._turns.phase.player
        ship = self._config.fleet[cursor.ship_index]
        placement = ShipPlacement(ship=ship, bow=coord, orientation=orientation or cursor.orientation)
        try:
            self._boards[player].place_ship(placement)
        except PlacementError as exc:
            return self._reject(exc.kind, str(exc))

        previous = self._turns.phase
        transitioned = self._turns.advance_cursor()
        self._status = self._phase_status()
        logger.debug(
            "ship_placed player=%s ship=%s row=%d col=%d orientation=%s",
            player.value,
            ship.name,
            coord.row,
            coord.col,
            placement.orientation.value,
        )

        events: list[object] = [ShipPlaced(player=player, placement=placement)]
        notice = None
        if transitioned is not None:
            notice = setup_complete_notice(player)
            events.append(self._phase_changed(previous, transitioned))
        self._publish(events)
        return self._accept(notice=notice)

    def handle_fire_intent(self, coord: Coord) -> IntentResult:
        """Fire at ``coord`` on the board of the player who is not shooting."""
        try:
            shooter = self._turns.require_can_fire()
        except IntentRejected as exc:
            return self._reject(exc.kind, str(exc))

        target = shooter.other
        board = self._boards[target]
        try:
            outcome = board.fire_at(coord)
        except FireError as exc:
            return self._reject(exc.kind, str(exc))

        sunk = board.ship_sunk_at(coord) if outcome is ShotOutcome.HIT else None
        previous = self._turns.phase
        finished = self._turns.record_shot(board.has_ships_remaining())
        logger.info(
            "shot_resolved shooter=%s row=%d col=%d outcome=%s sunk=%s",
            shooter.value,
            coord.row,
            coord.col,
            outcome.value,
            sunk.name if sunk is not None else None,
        )

        events: list[object] = [ShotResolved(shooter=shooter, coord=coord, outcome=outcome, sunk=sunk)]
        notice = None
        if finished is None:
            self._status = shot_text(outcome, target, sunk)
        else:
            self._status = game_over_text(shooter)
            notice = self._status
            events.append(self._phase_changed(previous, finished))
            events.append(GameWon(winner=shooter))
        self._publish(events)
        return self._accept(outcome=outcome, sunk=sunk, notice=notice)

    def handle_end_turn_intent(self) -> IntentResult:
        """Hand the device to the other player after a shot."""
        previous = self._turns.phase
        try:
            current = self._turns.end_turn()
        except IntentRejected as exc:
            return self._reject(exc.kind, str(exc))

        self._status = self._phase_status()
        self._publish([TurnEnded(player=previous.player), self._phase_changed(previous, current)])
        return self._accept(notice=pass_device_notice(current.player))

    def toggle_orientation(self) -> IntentResult:
        """Flip the placement cursor between horizontal and vertical."""
        try:
            orientation = self._turns.toggle_orientation()
        except IntentRejected as exc:
            return self._reject(exc.kind, str(exc))
        logger.debug("orientation_toggled orientation=%s", orientation.value)
        return self._accept()

    def new_game(self) -> IntentResult:
        """Discard both boards and start over at Player 1 setup."""
        previous = self._turns.phase
        self._boards = self._fresh_boards()
        self._turns.reset()
        self._status = self._phase_status()
        self._publish([self._phase_changed(previous, self._turns.phase)])
        return self._accept()

    def current_display_board(self, viewer: Player | None = None) -> DisplayBoard:
        """Resolve which board ``viewer`` may see and whether ships are revealed.

        During setup a player sees their own fleet. During battle a player only
        ever sees the opponent's board, fogged. Once the game is over the
        defeated board is shown in full.
        """
        phase = self._turns.phase
        seat = viewer if viewer is not None else phase.player
        if phase.is_setup:
            owner, reveal = seat, True
        elif phase.is_battle:
            owner, reveal = seat.other, False
        else:
            owner, reveal = phase.player.other, True
        return DisplayBoard(owner=owner, reveal_ships=reveal, view=self._boards[owner].snapshot(reveal))

    def _fresh_boards(self) -> dict[Player, BoardState]:
        return {player: BoardState(size=self._config.board_size) for player in Player}

    def _phase_status(self) -> str:
        return phase_status(self._turns.phase, self._turns.cursor, self._config.fleet)

    def _phase_changed(self, previous: GamePhase, current: GamePhase) -> PhaseChanged:
        logger.info("phase_changed previous=%s current=%s", previous.describe(), current.describe())
        return PhaseChanged(previous=previous, current=current)

    def _accept(
        self,
        *,
        outcome: ShotOutcome | None = None,
        sunk: ShipSpec | None = None,
        notice: str | None = None,
    ) -> IntentResult:
        return IntentResult(
            accepted=True,
            phase=self._turns.phase,
            message=self._status,
            outcome=outcome,
            sunk=sunk,
            notice=notice,
        )

    def _reject(self, reason: RejectionKind, message: str) -> IntentResult:
        phase = self._turns.phase
        logger.info("intent_rejected phase=%s reason=%s detail=%s", phase.describe(), reason.value, message)
        self._events.publish(IntentRejectedEvent(phase=phase, reason=reason, message=message))
        return IntentResult(accepted=False, phase=phase, message=message, reason=reason)

    def _publish(self, events: list[object]) -> None:
        for event in events:
            self._events.publish(event)
