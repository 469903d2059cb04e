from __future__ import annotations
import random
from typing import Optional
from . import cooldowns
from .models import Ability, Fighter

ABILITY_POOL = (Ability.LIGHT, Ability.MID, Ability.HEAVY, Ability.SPECIAL)


class OpponentPolicy:
    """Uniform random move choice for the automated side.

    By default the pick ignores the fighter's own cooldowns; a locked pick is
    rejected by the turn pipeline and the automated side wastes its turn.
    """

    def __init__(self, rng: Optional[random.Random] = None, *, respect_cooldowns: bool = False):
        self.rng = rng or random.Random()
        self.respect_cooldowns = respect_cooldowns

    def choose(self, user: Fighter) -> Ability:
        pool = list(ABILITY_POOL)
        if self.respect_cooldowns:
            pool = [a for a in pool if not cooldowns.is_locked(user, a)] or [Ability.LIGHT]
        return self.rng.choice(pool)
