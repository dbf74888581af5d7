"""Projection of the single action button from the current phase."""

from __future__ import annotations

from dataclasses import dataclass

from salvo.game.app.intents import EndTurnIntent, Intent, NewGameIntent, ToggleOrientationIntent
from salvo.game.core.models import Orientation
from salvo.game.core.turns import GamePhase, PhaseKind, PlacementCursor


@dataclass(frozen=True, slots=True)
class ActionButton:
    """Label, enabled flag and triggered intent of the action button."""

    label: str
    enabled: bool
    intent: Intent


def action_button(
    phase: GamePhase,
    cursor: PlacementCursor | None,
    shot_fired: bool,
) -> ActionButton:
    """Resolve what the action button shows and does in ``phase``."""
    if phase.kind is PhaseKind.SETUP:
        orientation = cursor.orientation if cursor is not None else Orientation.HORIZONTAL
        return ActionButton(
            label=f"Rotate ({orientation.value.capitalize()})",
            enabled=True,
            intent=ToggleOrientationIntent(),
        )
    if phase.kind is PhaseKind.BATTLE:
        return ActionButton(label="End Turn", enabled=shot_fired, intent=EndTurnIntent())
    return ActionButton(label="New Game", enabled=True, intent=NewGameIntent())
