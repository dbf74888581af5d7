from salvo.game.app.intents import EndTurnIntent, NewGameIntent, ToggleOrientationIntent
from salvo.game.app.services import action_button
from salvo.game.core.models import Orientation, Player
from salvo.game.core.turns import GamePhase, PlacementCursor


def test_setup_button_rotates_and_names_orientation() -> None:
    phase = GamePhase.setup(Player.ONE)
    horizontal = action_button(phase, PlacementCursor(), shot_fired=False)
    assert horizontal.label == "Rotate (Horizontal)"
    assert horizontal.enabled
    assert horizontal.intent == ToggleOrientationIntent()
    vertical = action_button(phase, PlacementCursor(0, Orientation.VERTICAL), shot_fired=False)
    assert vertical.label == "Rotate (Vertical)"


def test_battle_button_ends_turn_only_after_shot() -> None:
    phase = GamePhase.battle(Player.TWO)
    before = action_button(phase, None, shot_fired=False)
    after = action_button(phase, None, shot_fired=True)
    assert before.label == after.label == "End Turn"
    assert not before.enabled
    assert after.enabled
    assert after.intent == EndTurnIntent()


def test_game_over_button_starts_new_game() -> None:
    button = action_button(GamePhase.game_over(Player.ONE), None, shot_fired=False)
    assert button.label == "New Game"
    assert button.intent == NewGameIntent()
