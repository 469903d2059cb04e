"""Status effect bookkeeping (stun / burn / evade).

All three effects are plain turn counters on :class:`Fighter.effects`:

  stun  - the bearer's next chosen action is discarded, one point per action
  burn  - the bearer loses 8% of max HP at each of its turn boundaries
  evade - incoming hits are negated 80% of the time; decays once per boundary

Counters never go negative; helpers here are the only code that decrements them.
"""
from __future__ import annotations
import math
from typing import List, NamedTuple, Optional
from .models import Fighter

STUN_TURNS = 2
BURN_TURNS = 5
EVADE_TURNS = 4
BURN_RATIO = 0.08

EFFECT_KINDS = ("stun", "burn", "evade")


class EffectTick(NamedTuple):
    effect: str
    amount: int      # HP lost for burn, 0 otherwise
    remaining: int


def grant(target: Fighter, kind: str, turns: int):
    if kind not in EFFECT_KINDS:
        raise ValueError(f"unknown effect '{kind}'")
    setattr(target.effects, kind, max(0, int(turns)))


def burn_damage(target: Fighter) -> int:
    return int(math.floor(target.max_hp * BURN_RATIO))


def consume_stun(target: Fighter) -> bool:
    """Spend one stun point; True if the bearer's action is forfeited."""
    if target.effects.stun <= 0:
        return False
    target.effects.stun -= 1
    return True


def burn_tick(target: Fighter) -> Optional[EffectTick]:
    if target.effects.burn <= 0:
        return None
    dmg = burn_damage(target)
    target.set_hp(target.current_hp - dmg)
    target.effects.burn -= 1
    return EffectTick("burn", dmg, target.effects.burn)


def decay_evade(target: Fighter) -> Optional[EffectTick]:
    if target.effects.evade <= 0:
        return None
    target.effects.evade -= 1
    return EffectTick("evade", 0, target.effects.evade)


def turn_boundary(target: Fighter) -> List[EffectTick]:
    """Burn then evade decay, as applied when ``target`` receives the turn."""
    ticks = []
    for fn in (burn_tick, decay_evade):
        tick = fn(target)
        if tick is not None:
            ticks.append(tick)
    return ticks


def status_labels(target: Fighter) -> List[str]:
    labels = []
    if target.effects.burn > 0: labels.append("BURNED")
    if target.effects.stun > 0: labels.append("STUNNED")
    if target.effects.evade > 0: labels.append("EVASIVE")
    return labels


__all__ = [
    "STUN_TURNS", "BURN_TURNS", "EVADE_TURNS", "BURN_RATIO", "EffectTick",
    "grant", "burn_damage", "consume_stun", "burn_tick", "decay_evade",
    "turn_boundary", "status_labels",
]
