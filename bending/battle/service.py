"""Battle service: the entry points consumed by the presentation layer.

    service = BattleService(scheduler=ManualScheduler())
    service.events.subscribe(MatchOver, on_match_over)
    service.start_match("single", "water", "fire")
    service.submit_action("a", "heavy")

Only one match is live per service; starting another abandons the current one
(its pending automated move is cancelled and ignored if it still fires).
Sessions share the service lock, so timer callbacks, event handlers that read
``snapshot()`` and external submissions never wait on each other in opposite
orders.
"""
from __future__ import annotations
import itertools
import random
import threading
from typing import Optional
from bending.core.errors import ValidationError
from bending.core.logging import logger
from bending.system.settings import Settings
from .ai import OpponentPolicy
from .core import BattleCore
from .events import EventBus
from .factory import create_fighter, random_elemental_key
from .models import Element, MatchSnapshot, Mode, Outcome, Result, Side, Ability
from .scheduling import Scheduler, TimerScheduler
from .session import BattleSession, Match


class BattleService:
    def __init__(self, settings: Optional[Settings] = None, *, scheduler: Optional[Scheduler] = None,
                 rng: Optional[random.Random] = None, events: Optional[EventBus] = None):
        self.settings = settings or Settings.load()
        self.settings.apply_log_level()
        if self.settings.data.debug:
            logger.set_level("DEBUG")
        self.scheduler = scheduler or TimerScheduler()
        self.rng = rng or random.Random()
        self.events = events or EventBus()
        self.session: Optional[BattleSession] = None
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def start_match(self, mode: Mode | str, player_key: str, opponent_key: Optional[str] = None,
                    *, first: Side | str = Side.A) -> MatchSnapshot:
        """Set up a new match, abandoning any current one.

        Raises ValidationError for an unknown mode/side and UnknownTemplate for
        an unregistered fighter key; nothing is replaced in that case.
        """
        mode = Mode.parse(mode)
        first = Side.parse(first)
        player = create_fighter(player_key, Side.A)
        opp_key = opponent_key if opponent_key is not None else random_elemental_key(self.rng)
        opponent = create_fighter(opp_key, Side.B)
        with self._lock:
            if self.session is not None:
                self.session.close()
            match = Match(match_id=next(self._ids), mode=mode,
                          fighters={Side.A: player, Side.B: opponent}, turn_owner=first)
            data = self.settings.data
            self.session = BattleSession(
                match, scheduler=self.scheduler, events=self.events, rng=self.rng,
                core=BattleCore(self.rng),
                policy=OpponentPolicy(self.rng, respect_cooldowns=data.ai_respects_cooldowns),
                ai_delay_ms=data.ai_delay_ms, lock=self._lock,
            )
            self.session.begin()
            return self.session.snapshot()

    def submit_action(self, side: Side | str, ability: Ability | str) -> Result[Outcome]:
        with self._lock:
            if self.session is None:
                return Result.rejected(ValidationError("No match in progress"))
            return self.session.submit(side, ability)

    def switch_avatar_element(self, side: Side | str, element: Element | str) -> Result[None]:
        with self._lock:
            if self.session is None:
                return Result.rejected(ValidationError("No match in progress"))
            return self.session.switch_element(side, element)

    def snapshot(self) -> Optional[MatchSnapshot]:
        with self._lock:
            return self.session.snapshot() if self.session else None

    def abandon(self):
        with self._lock:
            if self.session is not None:
                self.session.close()
                self.session = None


__all__ = ["BattleService"]
