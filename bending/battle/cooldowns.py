"""Per-ability cooldown locks.

Using an ability sets its slot to the lock duration. The owner's slots tick
down by one as each of its turns ends, except the slot locked on that turn, so
a lock of N blocks exactly N of the owner's later turns. Light has no slot.
"""
from __future__ import annotations
from typing import Dict, List, Optional
from bending.core.errors import AbilityLockedError
from .models import Ability, Fighter

LOCK_DURATIONS: Dict[Ability, int] = {
    Ability.LIGHT: 0,
    Ability.MID: 2,
    Ability.HEAVY: 3,
    Ability.SPECIAL: 4,
}


def remaining(fighter: Fighter, ability: Ability) -> int:
    if ability is Ability.LIGHT:
        return 0
    return int(getattr(fighter.cooldowns, ability.value))


def is_locked(fighter: Fighter, ability: Ability) -> bool:
    return remaining(fighter, ability) > 0


def ensure_available(fighter: Fighter, ability: Ability):
    left = remaining(fighter, ability)
    if left > 0:
        raise AbilityLockedError(ability.value, left)


def lock(fighter: Fighter, ability: Ability):
    duration = LOCK_DURATIONS[ability]
    if duration > 0:
        setattr(fighter.cooldowns, ability.value, duration)


def tick(fighter: Fighter, skip: Optional[Ability] = None):
    for ability in (Ability.MID, Ability.HEAVY, Ability.SPECIAL):
        if ability is not skip:
            setattr(fighter.cooldowns, ability.value, max(0, remaining(fighter, ability) - 1))


def available(fighter: Fighter) -> List[Ability]:
    return [a for a in Ability if not is_locked(fighter, a)]


__all__ = ["LOCK_DURATIONS", "remaining", "is_locked", "ensure_available", "lock", "tick", "available"]
