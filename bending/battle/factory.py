"""Factory helpers for constructing Fighter instances from the template registry.

Shared across the match service, round progression and tests.
"""
from __future__ import annotations
import random
from typing import Dict, NamedTuple, Optional
from bending.core.errors import UnknownTemplate
from .models import Fighter, Element, Side, BASE_ELEMENTS


class Template(NamedTuple):
    name: str
    hp: int
    element: Element


TEMPLATES: Dict[str, Template] = {
    "water": Template("Water Master", 100, Element.WATER),
    "fire": Template("Fire Lord", 100, Element.FIRE),
    "earth": Template("Earth Guard", 120, Element.EARTH),   # tankier
    "air": Template("Air Monk", 90, Element.AIR),           # fragile, relies on evade
    "avatar": Template("The Avatar", 110, Element.AVATAR),
}

ELEMENTAL_KEYS = tuple(e.value for e in BASE_ELEMENTS)


def get_template(key: str) -> Template:
    try:
        return TEMPLATES[str(key).strip().lower()]
    except KeyError:
        raise UnknownTemplate(str(key)) from None


def create_fighter(template_key: str, side: Side = Side.A, *, max_hp: Optional[int] = None) -> Fighter:
    """Build a fresh fighter; ``max_hp`` overrides the template HP (endless scaling)."""
    key = str(template_key).strip().lower()
    t = get_template(key)
    hp = t.hp if max_hp is None else int(max_hp)
    return Fighter(side=side, name=t.name, element=t.element, max_hp=hp, template_key=key,
                   is_avatar=(key == "avatar"))


def random_elemental_key(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return rng.choice(ELEMENTAL_KEYS)


__all__ = ["Template", "TEMPLATES", "ELEMENTAL_KEYS", "get_template", "create_fighter", "random_elemental_key"]
