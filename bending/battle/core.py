"""Action resolution: turns one chosen ability into HP and status changes.

Basic attacks scale by the element matchup and respect the defender's evade;
specials are looked up per attacker element in ``SPECIALS``.
"""
from __future__ import annotations
import math
import random
from typing import Callable, Dict, NamedTuple, Optional
from . import effects
from .mechanics import effectiveness, evasion_check, scaled_damage
from .models import Ability, Element, Fighter, Outcome


class Skill(NamedTuple):
    name: str
    damage: int


SKILLS: Dict[Ability, Skill] = {
    Ability.LIGHT: Skill("Light Atk", 10),
    Ability.MID: Skill("Mid Atk", 20),
    Ability.HEAVY: Skill("Heavy Atk", 30),
    Ability.SPECIAL: Skill("Special", 0),
}

FIRE_BURST_DAMAGE = 20
WATER_HEAL_RATIO = 0.25

SpecialHandler = Callable[["BattleCore", Fighter, Fighter, Outcome], None]


def _water_special(core: "BattleCore", attacker: Fighter, defender: Fighter, out: Outcome):
    amount = int(math.floor(attacker.max_hp * WATER_HEAL_RATIO))
    out.healed = core.apply_heal(attacker, amount)
    out.message = f"{attacker.name} healed for {out.healed} HP!"


def _fire_special(core: "BattleCore", attacker: Fighter, defender: Fighter, out: Outcome):
    # Fixed burst: no matchup modifier and no evasion roll
    out.damage_dealt = core.apply_damage(defender, FIRE_BURST_DAMAGE)
    effects.grant(defender, "burn", effects.BURN_TURNS)
    out.status_granted = "burn"
    out.message = f"{attacker.name} unleashed a fire burst for {out.damage_dealt}! {defender.name} is burning."


def _earth_special(core: "BattleCore", attacker: Fighter, defender: Fighter, out: Outcome):
    effects.grant(defender, "stun", effects.STUN_TURNS)
    out.status_granted = "stun"
    out.message = f"{attacker.name} used STUN! {defender.name} is frozen for {effects.STUN_TURNS} turns."


def _air_special(core: "BattleCore", attacker: Fighter, defender: Fighter, out: Outcome):
    effects.grant(attacker, "evade", effects.EVADE_TURNS)
    out.status_granted = "evade"
    out.message = f"{attacker.name} used EVADE! 80% miss chance."


def _unattuned_special(core: "BattleCore", attacker: Fighter, defender: Fighter, out: Outcome):
    out.message = f"{attacker.name} has no element attuned; the special fizzles."


SPECIALS: Dict[Element, SpecialHandler] = {
    Element.WATER: _water_special,
    Element.FIRE: _fire_special,
    Element.EARTH: _earth_special,
    Element.AIR: _air_special,
    Element.AVATAR: _unattuned_special,
}


class BattleCore:
    def __init__(self, rng: Optional[random.Random] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or random.Random()
        self.message_cb = message_cb

    def _msg(self, text: str):
        if self.message_cb:
            self.message_cb(text)

    # ------------------------------------------------------------------
    # HP mutation (always clamped)
    # ------------------------------------------------------------------
    def apply_damage(self, target: Fighter, amount: int) -> int:
        """Subtract ``amount`` (HP clamped at 0); returns the damage inflicted."""
        amount = max(0, int(amount))
        target.set_hp(target.current_hp - amount)
        return amount

    def apply_heal(self, target: Fighter, amount: int) -> int:
        old = target.current_hp
        new = target.set_hp(old + max(0, int(amount)))
        return new - old

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, attacker: Fighter, defender: Fighter, ability: Ability | str) -> Outcome:
        ability = Ability.parse(ability)
        out = Outcome(side=attacker.side, ability=ability)
        if ability is Ability.SPECIAL:
            SPECIALS[attacker.element](self, attacker, defender, out)
        else:
            self._basic(attacker, defender, ability, out)
        self._msg(out.message)
        return out

    def _basic(self, attacker: Fighter, defender: Fighter, ability: Ability, out: Outcome):
        skill = SKILLS[ability]
        mult = effectiveness(attacker.element, defender.element)
        out.effectiveness = mult
        dmg = scaled_damage(skill.damage, mult)
        if defender.effects.evade > 0 and evasion_check(self.rng):
            out.evaded = True
            out.message = f"{defender.name} EVADED the attack!"
            return
        out.damage_dealt = self.apply_damage(defender, dmg)
        eff_txt = "" if mult == 1 else (" It's super effective!" if mult > 1 else " It's not very effective...")
        out.message = f"{attacker.name} used {skill.name} for {out.damage_dealt}!{eff_txt}"

    def forfeit(self, attacker: Fighter, ability: Ability) -> Outcome:
        out = Outcome(side=attacker.side, ability=ability, forfeited=True,
                      message=f"{attacker.name} is STUNNED and cannot move!")
        self._msg(out.message)
        return out


__all__ = ["BattleCore", "Skill", "SKILLS", "SPECIALS", "FIRE_BURST_DAMAGE", "WATER_HEAL_RATIO"]
