"""Hot-seat text frontend.

The frontend keeps no game state: every frame is drawn from
``GameEngine.current_display_board`` and every keystroke becomes an intent.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from salvo.game.app.engine import DisplayBoard, GameEngine, IntentResult
from salvo.game.app.intents import (
    EndTurnIntent,
    FireIntent,
    Intent,
    NewGameIntent,
    PlacementIntent,
    ToggleOrientationIntent,
)
from salvo.game.app.services.action_button import action_button
from salvo.game.core.fleet import random_fleet
from salvo.game.core.models import Coord, DisplayState, Orientation
from salvo.game.ui.coords import format_coord, parse_coord, row_label

logger = logging.getLogger(__name__)

CELL_SYMBOLS: dict[DisplayState, str] = {
    DisplayState.EMPTY: ".",
    DisplayState.SHIP: "S",
    DisplayState.HIT: "X",
    DisplayState.MISS: "o",
}

HELP_TEXT = (
    "Commands: <coord> [h|v] place or fire (e.g. A1, B7 v), r rotate, e end turn, "
    "auto place remaining ships, n new game, q quit, ? help"
)

BLANK_LINES = 40


@dataclass(frozen=True, slots=True)
class ConsoleCommand:
    """Parsed console line: either an intent or a frontend-only action."""

    intent: Intent | None = None
    action: str | None = None
    error: str | None = None


def parse_command(line: str, *, size: int, firing: bool) -> ConsoleCommand:
    """Parse one input line; coordinates fire during battle and place otherwise."""
    parts = line.strip().lower().split()
    if not parts:
        return ConsoleCommand(error="Empty command.")
    head = parts[0]
    if head in {"q", "quit", "exit"}:
        return ConsoleCommand(action="quit")
    if head in {"?", "h", "help"} and len(parts) == 1:
        return ConsoleCommand(action="help")
    if head in {"a", "auto"}:
        return ConsoleCommand(action="auto")
    if head in {"r", "rotate"}:
        return ConsoleCommand(intent=ToggleOrientationIntent())
    if head in {"e", "end"}:
        return ConsoleCommand(intent=EndTurnIntent())
    if head in {"n", "new"}:
        return ConsoleCommand(intent=NewGameIntent())

    try:
        coord = parse_coord(head, size)
    except ValueError as exc:
        return ConsoleCommand(error=str(exc))
    if firing:
        return ConsoleCommand(intent=FireIntent(coord))
    orientation: Orientation | None = None
    if len(parts) > 1:
        if parts[1] in {"h", "horizontal"}:
            orientation = Orientation.HORIZONTAL
        elif parts[1] in {"v", "vertical"}:
            orientation = Orientation.VERTICAL
        else:
            return ConsoleCommand(error="Orientation must be h or v.")
    return ConsoleCommand(intent=PlacementIntent(coord, orientation))


def render_board(display: DisplayBoard) -> list[str]:
    """Render a display board as text rows with letter/number labels."""
    view = display.view
    lines = ["   " + "".join(str(col + 1).rjust(3) for col in range(view.size))]
    for row in range(view.size):
        symbols = "".join(CELL_SYMBOLS[view.at(Coord(row, col))].rjust(3) for col in range(view.size))
        lines.append(f"{row_label(row):2} {symbols}")
    return lines


class ConsoleFrontend:
    """Drives a GameEngine from line-based input."""

    def __init__(
        self,
        engine: GameEngine,
        *,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        rng: random.Random | None = None,
    ) -> None:
        if engine.config.board_size > 26:
            raise ValueError("The console frontend labels rows A-Z and supports boards up to 26x26.")
        self._engine = engine
        self._input = input_fn
        self._output = output_fn
        self._rng = rng if rng is not None else random.Random()

    def run(self) -> None:
        """Read and apply commands until quit or end of input."""
        self._output(HELP_TEXT)
        while True:
            self.show()
            try:
                line = self._input("> ")
            except EOFError:
                return
            if not self.execute(line):
                return

    def show(self) -> None:
        display = self._engine.current_display_board()
        phase = self._engine.current_phase()
        button = action_button(phase, self._engine.placement_cursor, self._engine.shot_fired)
        title = f"{display.owner.label}'s waters" + ("" if display.reveal_ships else " (fogged)")
        self._output("")
        self._output(title)
        for line in render_board(display):
            self._output(line)
        suffix = "" if button.enabled else " - disabled"
        self._output(f"{self._engine.status_message()}    [{button.label}{suffix}]")

    def execute(self, line: str) -> bool:
        """Apply one command line; return False when the user quits."""
        firing = self._engine.current_phase().is_battle
        command = parse_command(line, size=self._engine.config.board_size, firing=firing)
        if command.error is not None:
            self._output(command.error)
            return True
        if command.action == "quit":
            return False
        if command.action == "help":
            self._output(HELP_TEXT)
            return True
        if command.action == "auto":
            self._auto_place()
            return True
        if command.intent is not None:
            self._apply(command.intent)
        return True

    def _apply(self, intent: Intent) -> IntentResult:
        result = self._engine.handle(intent)
        if not result.accepted:
            self._output(f"Rejected: {result.message}")
            return result
        if isinstance(intent, FireIntent):
            self._output(f"{format_coord(intent.coord)}: {result.message}")
        if result.notice is not None:
            self._handoff(result.notice)
        return result

    def _auto_place(self) -> None:
        cursor = self._engine.placement_cursor
        if cursor is None:
            self._output("Rejected: ships can only be placed during setup.")
            return
        display = self._engine.current_display_board()
        occupied = [
            Coord(row, col)
            for row in range(display.view.size)
            for col in range(display.view.size)
            if display.view.at(Coord(row, col)) is DisplayState.SHIP
        ]
        remaining = self._engine.config.fleet[cursor.ship_index :]
        try:
            placements = random_fleet(self._rng, remaining, self._engine.config.board_size, occupied)
        except RuntimeError:
            logger.info("auto_place_failed ships=%d occupied=%d", len(remaining), len(occupied))
            self._output("Rejected: the remaining ships do not fit around the ones already placed.")
            return
        logger.debug("auto_place ships=%d", len(placements))
        for placement in placements:
            result = self._apply(PlacementIntent(placement.bow, placement.orientation))
            if not result.accepted:
                break

    def _handoff(self, notice: str) -> None:
        """Show a notice, wait for acknowledgement, then blank the screen."""
        self._output(notice)
        try:
            self._input("Press Enter to continue...")
        except EOFError:
            return
        self._output("\n" * BLANK_LINES)
