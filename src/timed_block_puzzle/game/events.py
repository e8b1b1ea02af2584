"""Typed engine notifications and the channel that fans them out.

Every notification is one of four small event classes. Subscribers register a
callback with an optional set of event kinds; delivery follows registration
order across all kinds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, FrozenSet, List, Optional, Tuple, Type, Union

if TYPE_CHECKING:
    from .grid import BlockCoordinate
    from .pieces import GamePiece


@dataclass(frozen=True)
class GameUpdated:
    pass


@dataclass(frozen=True)
class NextPieceChanged:
    current: "GamePiece"
    following: "GamePiece"


@dataclass(frozen=True)
class LinesCleared:
    coordinates: FrozenSet["BlockCoordinate"]


@dataclass(frozen=True)
class TimerTicked:
    pass


GameEvent = Union[GameUpdated, NextPieceChanged, LinesCleared, TimerTicked]
EventKind = Type[GameEvent]
Subscriber = Callable[[GameEvent], None]

EVENT_KINDS: Tuple[EventKind, ...] = (GameUpdated, NextPieceChanged, LinesCleared, TimerTicked)


class Subscription:
    def __init__(self, channel: "EventChannel", callback: Subscriber, kinds: Optional[FrozenSet[EventKind]]) -> None:
        self._channel = channel
        self.callback = callback
        self.kinds = kinds

    def accepts(self, event: GameEvent) -> bool:
        return self.kinds is None or type(event) in self.kinds

    def cancel(self) -> None:
        self._channel.unsubscribe(self)


class EventChannel:
    def __init__(self) -> None:
        self._subscriptions: List[Subscription] = []

    def subscribe(self, callback: Subscriber, *kinds: EventKind) -> Subscription:
        """Register `callback` for `kinds` (all kinds when none are given)."""
        for kind in kinds:
            if kind not in EVENT_KINDS:
                raise TypeError(f"not an engine event kind: {kind!r}")
        sub = Subscription(self, callback, frozenset(kinds) if kinds else None)
        self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def publish(self, event: GameEvent) -> None:
        # Copy so callbacks may (un)subscribe while we iterate
        for sub in list(self._subscriptions):
            if sub.accepts(event):
                sub.callback(event)

    def clear(self) -> None:
        self._subscriptions.clear()

    def __len__(self) -> int:
        return len(self._subscriptions)
