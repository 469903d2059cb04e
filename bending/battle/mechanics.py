from __future__ import annotations
import math
import random
from .models import Element

# (attacker, defender) -> multiplier; every pair not listed is neutral
TYPE_EFFECTIVENESS = {
    (Element.WATER, Element.FIRE): 1.5,
    (Element.EARTH, Element.FIRE): 1.5,
    (Element.AIR, Element.EARTH): 1.5,
    (Element.FIRE, Element.AIR): 1.5,
    (Element.FIRE, Element.WATER): 0.5,
    (Element.FIRE, Element.EARTH): 0.5,
    (Element.EARTH, Element.AIR): 0.5,
    (Element.AIR, Element.FIRE): 0.5,
}

EVADE_CHANCE = 0.8


def effectiveness(attack: Element | str, defend: Element | str) -> float:
    return TYPE_EFFECTIVENESS.get((Element.parse(attack), Element.parse(defend)), 1.0)


def scaled_damage(base: int, multiplier: float) -> int:
    return int(math.floor(base * multiplier))


def evasion_check(rng: random.Random) -> bool:
    """True when an incoming hit is negated."""
    return rng.random() < EVADE_CHANCE
