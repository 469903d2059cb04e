"""Domain events emitted by the battle engine.

Presentation adapters (renderer, audio, logs) subscribe to an :class:`EventBus`
instead of the engine calling into them. Each event carries the ``match_id`` it
belongs to so adapters can drop events from a superseded match.
"""
from __future__ import annotations
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Type
from bending.core.logging import logger
from .models import Outcome


@dataclass(frozen=True)
class BattleEvent:
    match_id: int


@dataclass(frozen=True)
class MatchStarted(BattleEvent):
    mode: str
    side_a: str
    side_b: str


@dataclass(frozen=True)
class ActionResolved(BattleEvent):
    side: str
    outcome: Outcome


@dataclass(frozen=True)
class ActionRejected(BattleEvent):
    side: str
    ability: str
    reason: str
    remaining: int = 0


@dataclass(frozen=True)
class EffectTicked(BattleEvent):
    side: str
    effect: str
    amount: int
    remaining: int
    current_hp: int


@dataclass(frozen=True)
class ElementSwitched(BattleEvent):
    side: str
    element: str


@dataclass(frozen=True)
class RoundAdvanced(BattleEvent):
    round_index: int
    healed: int
    opponent: str
    opponent_max_hp: int


@dataclass(frozen=True)
class MatchOver(BattleEvent):
    winner: Optional[str]
    round_index: int


EventHandler = Callable[[BattleEvent], None]


class EventBus:
    def __init__(self, history: int = 200):
        self._subscribers: Dict[Type[BattleEvent], List[EventHandler]] = defaultdict(list)
        self._universal: List[EventHandler] = []
        self.history: Deque[BattleEvent] = deque(maxlen=history)

    def subscribe(self, event_type: Type[BattleEvent], handler: EventHandler):
        self._subscribers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler):
        self._universal.append(handler)

    def unsubscribe(self, event_type: Type[BattleEvent], handler: EventHandler):
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: BattleEvent):
        self.history.append(event)
        for handler in [*self._subscribers.get(type(event), []), *self._universal]:
            try:
                handler(event)
            except Exception as e:
                # A failing adapter must not leave the match half-updated
                logger.error("EventHandlerFailed", event=type(event).__name__, error=repr(e))

    def of_type(self, event_type: Type[BattleEvent]) -> list:
        return [e for e in self.history if isinstance(e, event_type)]


__all__ = [
    "BattleEvent", "MatchStarted", "ActionResolved", "ActionRejected", "EffectTicked",
    "ElementSwitched", "RoundAdvanced", "MatchOver", "EventBus",
]
