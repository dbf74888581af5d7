"""In-process event bus and the domain events published by the engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from salvo.game.core.errors import RejectionKind
from salvo.game.core.models import Coord, Player, ShipPlacement, ShipSpec, ShotOutcome
from salvo.game.core.turns import GamePhase

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class EventBus:
    """Simple in-process pub/sub; handlers run inline, in subscription order."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for an event type."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers."""
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if isinstance(event, subscribed_type):
                handler(event)
                invoked += 1
        return invoked


@dataclass(frozen=True, slots=True)
class ShipPlaced:
    player: Player
    placement: ShipPlacement


@dataclass(frozen=True, slots=True)
class ShotResolved:
    shooter: Player
    coord: Coord
    outcome: ShotOutcome
    sunk: ShipSpec | None = None


@dataclass(frozen=True, slots=True)
class TurnEnded:
    player: Player


@dataclass(frozen=True, slots=True)
class PhaseChanged:
    previous: GamePhase
    current: GamePhase


@dataclass(frozen=True, slots=True)
class GameWon:
    winner: Player


@dataclass(frozen=True, slots=True)
class IntentRejectedEvent:
    phase: GamePhase
    reason: RejectionKind
    message: str
