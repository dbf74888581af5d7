"""Which intents the engine accepts in a given phase."""

from __future__ import annotations

from salvo.game.app.intents import IntentKind
from salvo.game.core.turns import GamePhase, PhaseKind


def valid_intents(phase: GamePhase, shot_fired: bool) -> frozenset[IntentKind]:
    """Return the intents accepted for ``phase``; new game is always accepted."""
    if phase.kind is PhaseKind.SETUP:
        return frozenset({IntentKind.PLACE_SHIP, IntentKind.TOGGLE_ORIENTATION, IntentKind.NEW_GAME})
    if phase.kind is PhaseKind.BATTLE:
        if shot_fired:
            return frozenset({IntentKind.END_TURN, IntentKind.NEW_GAME})
        return frozenset({IntentKind.FIRE, IntentKind.NEW_GAME})
    return frozenset({IntentKind.NEW_GAME})
