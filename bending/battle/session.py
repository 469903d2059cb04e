"""Match state and the turn-ownership state machine.

A :class:`BattleSession` owns one :class:`Match`. Every action, external or
automated, goes through the same pipeline:

  1. reject if the match is over or the side does not own the turn
  2. a stunned owner forfeits the action (one stun point) and the turn ends
  3. a cooldown-locked ability is rejected and the owner may choose again
  4. otherwise resolve, lock the ability and check for a winner
  5. end the turn: tick the owner's cooldowns (not the slot just locked)
  6. hand over: tick the other side's burn and evade, check for a winner
     again, then give it the turn

In single and endless mode side B is driven by :class:`OpponentPolicy` through
the injected scheduler after ``ai_delay_ms``. Entry points and scheduled
callbacks share one re-entrant lock, normally the owning service's.
"""
from __future__ import annotations
import random
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from bending.core.errors import AbilityLockedError, BendingError, ValidationError
from bending.core.logging import logger
from . import cooldowns, effects, progression
from .ai import OpponentPolicy
from .core import BattleCore
from .events import (ActionRejected, ActionResolved, EffectTicked, ElementSwitched, EventBus,
                     MatchOver, MatchStarted, RoundAdvanced)
from .models import (Ability, Element, Fighter, FighterSnapshot, MatchSnapshot, MatchState, Mode,
                     Outcome, Result, Side)
from .scheduling import ScheduledCall, Scheduler
from .victory import Verdict, evaluate


@dataclass
class Match:
    match_id: int
    mode: Mode
    fighters: Dict[Side, Fighter]
    turn_owner: Side = Side.A
    state: MatchState = MatchState.AWAITING_A
    is_over: bool = False
    winner: Optional[Side] = None
    round_index: int = 0
    log: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.state = MatchState.awaiting(self.turn_owner)

    @property
    def player(self) -> Fighter:
        return self.fighters[Side.A]

    @property
    def opponent(self) -> Fighter:
        return self.fighters[Side.B]

    def is_automated(self, side: Side) -> bool:
        return self.mode.has_automated_side and side is Side.B


class BattleSession:
    def __init__(self, match: Match, *, scheduler: Scheduler, events: Optional[EventBus] = None,
                 core: Optional[BattleCore] = None, policy: Optional[OpponentPolicy] = None,
                 rng: Optional[random.Random] = None, ai_delay_ms: int = 1500,
                 lock: Optional[threading.RLock] = None):
        self.match = match
        self.scheduler = scheduler
        self.events = events or EventBus()
        self.rng = rng or random.Random()
        self.core = core or BattleCore(self.rng)
        self.policy = policy or OpponentPolicy(self.rng)
        self.ai_delay_ms = ai_delay_ms
        self.closed = False
        self._pending: Optional[ScheduledCall] = None
        self._lock = lock or threading.RLock()

        def _capture(msg: str):
            self.match.log.append(msg)
        self.core.message_cb = _capture

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def begin(self):
        with self._lock:
            m = self.match
            for f in m.fighters.values():
                if f.is_avatar and f.element is Element.AVATAR:
                    # Avatars enter the arena attuned to water
                    f.element = Element.WATER
            logger.info("MatchStarted", match=m.match_id, mode=m.mode.value,
                        a=m.player.name, b=m.opponent.name)
            self.events.emit(MatchStarted(m.match_id, m.mode.value, m.player.name, m.opponent.name))
            if m.is_automated(m.turn_owner):
                self._schedule_automated()

    def close(self):
        """Abandon the match; a pending automated move can no longer touch it."""
        with self._lock:
            self.closed = True
            self._cancel_pending()

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    @property
    def has_pending_automated_turn(self) -> bool:
        return self._pending is not None

    # ------------------------------------------------------------------
    # External entry points
    # ------------------------------------------------------------------
    def submit(self, side: Side | str, ability: Ability | str) -> Result[Outcome]:
        with self._lock:
            try:
                side = Side.parse(side)
                ability = Ability.parse(ability)
                self._check_turn(side)
            except ValidationError as e:
                return self._reject(side, ability, e)
            return self._take_turn(side, ability)

    def switch_element(self, side: Side | str, element: Element | str) -> Result[None]:
        with self._lock:
            try:
                side = Side.parse(side)
                element = Element.parse(element)
                self._check_turn(side)
                fighter = self.match.fighters[side]
                if not fighter.is_avatar:
                    raise ValidationError(f"{fighter.name} cannot switch elements")
                if element is Element.AVATAR:
                    raise ValidationError("Avatar must attune to water, fire, earth or air")
            except ValidationError as e:
                logger.warn("ElementSwitchRejected", side=_label(side), element=_label(element), reason=str(e))
                return Result.rejected(e)
            fighter.element = element
            self.match.log.append(f"{fighter.name} switched to {element.value.upper()}!")
            self.events.emit(ElementSwitched(self.match.match_id, side.value, element.value))
            return Result.success(None)

    def snapshot(self) -> MatchSnapshot:
        with self._lock:
            m = self.match
            return MatchSnapshot(
                match_id=m.match_id, mode=m.mode.value, state=m.state.value,
                turn_owner=m.turn_owner.value, is_over=m.is_over,
                winner=m.winner.value if m.winner else None, round_index=m.round_index,
                fighters={s.value: FighterSnapshot.of(f) for s, f in m.fighters.items()},
            )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def _check_turn(self, side: Side, *, automated: bool = False):
        m = self.match
        if self.closed:
            raise ValidationError("This match was abandoned")
        if m.is_over:
            raise ValidationError("The match is over")
        if m.is_automated(side) and not automated:
            raise ValidationError(f"Side {side.value.upper()} is controlled by the engine")
        if m.state is not MatchState.awaiting(side):
            raise ValidationError(f"It is not side {side.value.upper()}'s turn")

    def _reject(self, side, ability, error: BendingError) -> Result[Outcome]:
        remaining = error.remaining if isinstance(error, AbilityLockedError) else 0
        logger.warn("ActionRejected", side=_label(side), ability=_label(ability), reason=str(error))
        self.events.emit(ActionRejected(self.match.match_id, _label(side), _label(ability), str(error), remaining))
        return Result.rejected(error)

    def _take_turn(self, side: Side, ability: Ability) -> Result[Outcome]:
        actor = self.match.fighters[side]
        target = self.match.fighters[side.other]
        if effects.consume_stun(actor):
            outcome = self.core.forfeit(actor, ability)
            self.events.emit(ActionResolved(self.match.match_id, side.value, outcome))
            cooldowns.tick(actor)
        else:
            try:
                cooldowns.ensure_available(actor, ability)
            except AbilityLockedError as e:
                return self._reject(side, ability, e)
            outcome = self.core.resolve(actor, target, ability)
            cooldowns.lock(actor, ability)
            logger.debug("ActionResolved", side=side.value, ability=ability.value,
                         damage=outcome.damage_dealt, healed=outcome.healed, evaded=outcome.evaded)
            self.events.emit(ActionResolved(self.match.match_id, side.value, outcome))
            if self._evaluate() is not Verdict.CONTINUE:
                return Result.success(outcome)
            cooldowns.tick(actor, skip=ability)
        self._hand_over(side.other)
        return Result.success(outcome)

    def _hand_over(self, side: Side):
        fighter = self.match.fighters[side]
        for tick in effects.turn_boundary(fighter):
            if tick.effect == "burn":
                self.match.log.append(f"{fighter.name} took {tick.amount} BURN damage!")
            self.events.emit(EffectTicked(self.match.match_id, side.value, tick.effect, tick.amount,
                                          tick.remaining, fighter.current_hp))
        if self._evaluate() is not Verdict.CONTINUE:
            return
        self.match.turn_owner = side
        self.match.state = MatchState.awaiting(side)
        if self.match.is_automated(side):
            self._schedule_automated()

    def _evaluate(self) -> Verdict:
        verdict, winner = evaluate(self.match.mode, self.match.player, self.match.opponent)
        if verdict is Verdict.OVER:
            self._finish(winner)
        elif verdict is Verdict.NEXT_ROUND:
            self._next_round()
        return verdict

    def _finish(self, winner: Optional[Side]):
        m = self.match
        m.is_over = True
        m.winner = winner
        m.state = MatchState.MATCH_OVER
        self._cancel_pending()
        m.log.append(f"{m.fighters[winner].name} wins!" if winner else "The match ended.")
        logger.info("MatchOver", match=m.match_id, winner=_label(winner), round=m.round_index)
        self.events.emit(MatchOver(m.match_id, winner.value if winner else None, m.round_index))

    def _next_round(self):
        m = self.match
        m.state = MatchState.ROUND_TRANSITION
        report = progression.advance_round(m.player, m.round_index, self.rng)
        m.round_index = report.round_index
        m.fighters[Side.B] = report.opponent
        m.turn_owner = Side.A
        m.state = MatchState.AWAITING_A
        m.log.append(f"Round {report.round_index}: {report.opponent.name} enters the arena!")
        logger.info("RoundAdvanced", match=m.match_id, round=report.round_index,
                    opponent=report.opponent.name, max_hp=report.opponent.max_hp, healed=report.healed)
        self.events.emit(RoundAdvanced(m.match_id, report.round_index, report.healed,
                                       report.opponent.name, report.opponent.max_hp))

    # ------------------------------------------------------------------
    # Automated side
    # ------------------------------------------------------------------
    def _schedule_automated(self):
        match_id = self.match.match_id
        self._pending = self.scheduler.schedule(lambda: self._run_automated_turn(match_id), self.ai_delay_ms)

    def _run_automated_turn(self, match_id: int):
        with self._lock:
            self._pending = None
            m = self.match
            if self.closed or match_id != m.match_id:
                logger.debug("StaleAutomatedTurnIgnored", match=match_id)
                return
            try:
                self._check_turn(Side.B, automated=True)
            except ValidationError as e:
                logger.debug("AutomatedTurnSkipped", match=match_id, reason=str(e))
                return
            ability = self.policy.choose(m.opponent)
            result = self._take_turn(Side.B, ability)
            if not result.ok:
                # Locked pick: the automated side wastes its turn
                m.log.append(f"{m.opponent.name} hesitated and wasted the turn!")
                cooldowns.tick(m.opponent)
                self._hand_over(Side.A)


def _label(value) -> str:
    if value is None:
        return "-"
    return getattr(value, "value", str(value))


__all__ = ["Match", "BattleSession"]
