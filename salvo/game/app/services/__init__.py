"""Application service-layer helpers."""

from salvo.game.app.services.action_button import ActionButton, action_button
from salvo.game.app.services.intent_policy import valid_intents
from salvo.game.app.services.status_text import (
    game_over_text,
    pass_device_notice,
    phase_status,
    setup_complete_notice,
    setup_prompt,
    shot_text,
    turn_prompt,
)

__all__ = [
    "ActionButton",
    "action_button",
    "game_over_text",
    "pass_device_notice",
    "phase_status",
    "setup_complete_notice",
    "setup_prompt",
    "shot_text",
    "turn_prompt",
    "valid_intents",
]
