import pytest

from salvo.game.app.engine import GameEngine
from salvo.game.app.intents import (
    EndTurnIntent,
    FireIntent,
    IntentKind,
    NewGameIntent,
    PlacementIntent,
    ToggleOrientationIntent,
)
from salvo.game.core.errors import FireErrorKind, IntentRejectedKind, PlacementErrorKind
from salvo.game.core.models import (
    Coord,
    DisplayState,
    GameConfig,
    Orientation,
    Player,
    ShipSpec,
    ShotOutcome,
)
from salvo.game.core.turns import GamePhase, PlacementCursor


def _ship_cells(stacked_bows) -> list[Coord]:
    lengths = [5, 4, 3, 3, 2]
    return [Coord(bow.row, bow.col + i) for bow, length in zip(stacked_bows, lengths) for i in range(length)]


def _water_cells() -> list[Coord]:
    return [Coord(row, col) for row in (1, 3) for col in range(10)]


def test_initial_state(engine: GameEngine) -> None:
    assert engine.current_phase() == GamePhase.setup(Player.ONE)
    assert engine.placement_cursor == PlacementCursor()
    assert engine.status_message() == "Player 1 Setup: place your Carrier (length 5)"
    assert engine.valid_intents() == {
        IntentKind.PLACE_SHIP,
        IntentKind.TOGGLE_ORIENTATION,
        IntentKind.NEW_GAME,
    }


def test_placement_advances_cursor_and_status(engine: GameEngine) -> None:
    result = engine.handle_placement_intent(Coord(0, 0))
    assert result.accepted
    assert result.notice is None
    assert engine.placement_cursor == PlacementCursor(ship_index=1)
    assert engine.current_ship() == ShipSpec("Battleship", 4)
    assert engine.status_message() == "Player 1 Setup: place your Battleship (length 4)"
    view = engine.current_display_board().view
    assert [view.at(Coord(0, col)) for col in range(5)] == [DisplayState.SHIP] * 5
    assert view.at(Coord(0, 5)) is DisplayState.EMPTY


def test_invalid_placement_changes_nothing(engine: GameEngine) -> None:
    engine.handle_placement_intent(Coord(0, 0))
    status = engine.status_message()

    out = engine.handle_placement_intent(Coord(5, 7))
    assert not out.accepted
    assert out.reason is PlacementErrorKind.OUT_OF_BOUNDS

    overlap = engine.handle_placement_intent(Coord(0, 3), Orientation.VERTICAL)
    assert not overlap.accepted
    assert overlap.reason is PlacementErrorKind.OVERLAP

    assert engine.placement_cursor == PlacementCursor(ship_index=1)
    assert engine.status_message() == status
    assert engine.current_display_board().view.count(DisplayState.SHIP) == 5


def test_toggle_orientation_alternates_without_board_effects(engine: GameEngine) -> None:
    before = engine.current_display_board()
    orientations = []
    for _ in range(4):
        assert engine.toggle_orientation().accepted
        orientations.append(engine.placement_cursor.orientation)
    assert orientations == [
        Orientation.VERTICAL,
        Orientation.HORIZONTAL,
        Orientation.VERTICAL,
        Orientation.HORIZONTAL,
    ]
    assert engine.current_display_board() == before


def test_orientation_persists_within_setup_and_resets_for_player_two(engine: GameEngine) -> None:
    engine.toggle_orientation()
    for col in range(5):
        assert engine.handle_placement_intent(Coord(0, col * 2)).accepted
        if engine.placement_cursor is not None and engine.current_phase().player is Player.ONE:
            assert engine.placement_cursor.orientation is Orientation.VERTICAL
    assert engine.current_phase() == GamePhase.setup(Player.TWO)
    assert engine.placement_cursor == PlacementCursor(0, Orientation.HORIZONTAL)


def test_setup_completion_notices(engine: GameEngine, place_fleet) -> None:
    for bow in [Coord(0, 0), Coord(2, 0), Coord(4, 0), Coord(6, 0)]:
        engine.handle_placement_intent(bow)
    last = engine.handle_placement_intent(Coord(8, 0))
    assert last.notice == "Player 1 Setup Complete! Pass control to Player 2."
    assert engine.status_message() == "Player 2 Setup: place your Carrier (length 5)"
    assert engine.current_display_board().view.count(DisplayState.SHIP) == 0

    place_fleet(engine)
    assert engine.current_phase() == GamePhase.battle(Player.ONE)
    assert engine.placement_cursor is None
    assert engine.status_message() == "Player 1's Turn to Fire!"


def test_setup_intents_rejected_in_battle(battle_engine: GameEngine) -> None:
    placed = battle_engine.handle_placement_intent(Coord(9, 9))
    toggled = battle_engine.toggle_orientation()
    assert placed.reason is IntentRejectedKind.WRONG_PHASE
    assert toggled.reason is IntentRejectedKind.WRONG_PHASE


def test_battle_intents_rejected_in_setup(engine: GameEngine) -> None:
    assert engine.handle_fire_intent(Coord(0, 0)).reason is IntentRejectedKind.WRONG_PHASE
    assert engine.handle_end_turn_intent().reason is IntentRejectedKind.WRONG_PHASE
    assert engine.current_phase() == GamePhase.setup(Player.ONE)


def test_fire_then_end_turn_cycle(battle_engine: GameEngine) -> None:
    early = battle_engine.handle_end_turn_intent()
    assert early.reason is IntentRejectedKind.TURN_NOT_YET_FIRED

    shot = battle_engine.handle_fire_intent(Coord(9, 9))
    assert shot.accepted
    assert shot.outcome is ShotOutcome.MISS
    assert battle_engine.status_message() == "MISS!"
    assert battle_engine.shot_fired
    assert battle_engine.valid_intents() == {IntentKind.END_TURN, IntentKind.NEW_GAME}

    ended = battle_engine.handle_end_turn_intent()
    assert ended.accepted
    assert ended.notice == "Pass the device to Player 2"
    assert battle_engine.current_phase() == GamePhase.battle(Player.TWO)
    assert battle_engine.status_message() == "Player 2's Turn to Fire!"
    assert not battle_engine.shot_fired


def test_repeat_target_is_rejected_and_turn_is_kept(battle_engine: GameEngine) -> None:
    battle_engine.handle_fire_intent(Coord(5, 5))
    battle_engine.handle_end_turn_intent()
    battle_engine.handle_fire_intent(Coord(9, 9))
    battle_engine.handle_end_turn_intent()

    repeat = battle_engine.handle_fire_intent(Coord(5, 5))
    assert not repeat.accepted
    assert repeat.reason is FireErrorKind.ALREADY_TARGETED
    assert not battle_engine.shot_fired
    assert battle_engine.handle_fire_intent(Coord(5, 6)).accepted


def test_off_board_shot_is_rejected(battle_engine: GameEngine) -> None:
    result = battle_engine.handle_fire_intent(Coord(0, 10))
    assert result.reason is FireErrorKind.OUT_OF_BOUNDS
    assert not battle_engine.shot_fired


def test_fog_of_war_in_battle(battle_engine: GameEngine) -> None:
    for player in Player:
        display = battle_engine.current_display_board(player)
        assert display.owner is player.other
        assert not display.reveal_ships
        assert display.view.count(DisplayState.SHIP) == 0

    battle_engine.handle_fire_intent(Coord(0, 0))
    view = battle_engine.current_display_board().view
    assert view.at(Coord(0, 0)) is DisplayState.HIT
    assert view.at(Coord(0, 1)) is DisplayState.EMPTY


def test_setup_view_for_other_player_shows_only_their_own_board(engine: GameEngine) -> None:
    engine.handle_placement_intent(Coord(0, 0))
    other = engine.current_display_board(Player.TWO)
    assert other.owner is Player.TWO
    assert other.view.count(DisplayState.SHIP) == 0


def test_sinking_reports_ship(battle_engine: GameEngine) -> None:
    battle_engine.handle_fire_intent(Coord(8, 0))
    battle_engine.handle_end_turn_intent()
    battle_engine.handle_fire_intent(Coord(9, 9))
    battle_engine.handle_end_turn_intent()
    result = battle_engine.handle_fire_intent(Coord(8, 1))
    assert result.sunk == ShipSpec("Destroyer", 2)
    assert battle_engine.status_message() == "HIT! Player 2's Destroyer sunk."


def test_full_game_to_victory(battle_engine: GameEngine, stacked_bows) -> None:
    targets = _ship_cells(stacked_bows)
    water = _water_cells()
    last = None
    for index, target in enumerate(targets):
        last = battle_engine.handle_fire_intent(target)
        assert last.accepted
        if index == len(targets) - 1:
            break
        assert battle_engine.remaining_ship_cells(Player.TWO) == 17 - index - 1
        battle_engine.handle_end_turn_intent()
        assert battle_engine.handle_fire_intent(water[index]).outcome is ShotOutcome.MISS
        battle_engine.handle_end_turn_intent()

    assert last is not None
    assert last.notice == "GAME OVER! Player 1 WINS!"
    assert battle_engine.current_phase() == GamePhase.game_over(Player.ONE)
    assert battle_engine.current_phase().winner is Player.ONE
    assert battle_engine.remaining_ship_cells(Player.TWO) == 0
    assert battle_engine.status_message() == "GAME OVER! Player 1 WINS!"
    assert battle_engine.valid_intents() == {IntentKind.NEW_GAME}

    final = battle_engine.current_display_board()
    assert final.owner is Player.TWO
    assert final.reveal_ships
    assert final.view.count(DisplayState.HIT) == 17

    assert battle_engine.handle_end_turn_intent().reason is IntentRejectedKind.WRONG_PHASE
    assert battle_engine.handle_fire_intent(Coord(9, 9)).reason is IntentRejectedKind.WRONG_PHASE
    assert battle_engine.handle_placement_intent(Coord(9, 9)).reason is IntentRejectedKind.WRONG_PHASE


def test_new_game_resets_everything(battle_engine: GameEngine) -> None:
    battle_engine.handle_fire_intent(Coord(0, 0))
    result = battle_engine.new_game()
    assert result.accepted
    assert battle_engine.current_phase() == GamePhase.setup(Player.ONE)
    assert battle_engine.placement_cursor == PlacementCursor()
    assert not battle_engine.shot_fired
    assert battle_engine.remaining_ship_cells(Player.ONE) == 0
    assert battle_engine.current_display_board().view.count(DisplayState.EMPTY) == 100


def test_handle_dispatches_intents(engine: GameEngine) -> None:
    assert engine.handle(ToggleOrientationIntent()).accepted
    assert engine.handle(PlacementIntent(Coord(0, 0))).accepted
    assert engine.current_display_board().view.at(Coord(4, 0)) is DisplayState.SHIP
    assert engine.handle(FireIntent(Coord(0, 0))).reason is IntentRejectedKind.WRONG_PHASE
    assert engine.handle(EndTurnIntent()).reason is IntentRejectedKind.WRONG_PHASE
    assert engine.handle(NewGameIntent()).accepted
    with pytest.raises(TypeError):
        engine.handle("fire")  # type: ignore[arg-type]


def test_custom_config_and_invalid_config(small_config: GameConfig) -> None:
    engine = GameEngine(small_config)
    assert engine.current_display_board().view.size == 4
    assert engine.status_message() == "Player 1 Setup: place your Scout (length 2)"
    with pytest.raises(ValueError):
        GameEngine(GameConfig(board_size=2, fleet=(ShipSpec("Carrier", 5),)))
