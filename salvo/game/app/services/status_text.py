"""Human-readable status and hand-off texts."""

from __future__ import annotations

from collections.abc import Sequence

from salvo.game.core.models import Player, ShipSpec, ShotOutcome
from salvo.game.core.turns import GamePhase, PhaseKind, PlacementCursor


def setup_prompt(player: Player, ship: ShipSpec) -> str:
    return f"{player.label} Setup: place your {ship.name} (length {ship.length})"


def turn_prompt(player: Player) -> str:
    return f"{player.label}'s Turn to Fire!"


def shot_text(outcome: ShotOutcome, target: Player, sunk: ShipSpec | None = None) -> str:
    if outcome is ShotOutcome.MISS:
        return "MISS!"
    if sunk is not None:
        return f"HIT! {target.label}'s {sunk.name} sunk."
    return "HIT!"


def game_over_text(winner: Player) -> str:
    return f"GAME OVER! {winner.label} WINS!"


def setup_complete_notice(player: Player) -> str:
    if player is Player.ONE:
        return f"{player.label} Setup Complete! Pass control to {player.other.label}."
    return "Setup Complete! Let the Battle Begin!"


def pass_device_notice(player: Player) -> str:
    return f"Pass the device to {player.label}"


def phase_status(
    phase: GamePhase,
    cursor: PlacementCursor | None,
    fleet: Sequence[ShipSpec],
) -> str:
    """Status shown on entering ``phase`` before any shot is taken."""
    if phase.kind is PhaseKind.SETUP and cursor is not None:
        return setup_prompt(phase.player, fleet[cursor.ship_index])
    if phase.kind is PhaseKind.BATTLE:
        return turn_prompt(phase.player)
    return game_over_text(phase.player)
