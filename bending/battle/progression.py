"""Endless-mode round progression.

Each defeated opponent advances the round: the player recovers 30% of max HP
with effects and cooldowns cleared, and a fresh elemental opponent spawns with
max HP scaled by 15% per round reached.
"""
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Optional
from .factory import create_fighter, get_template, random_elemental_key
from .models import Fighter, Side

# Percentages kept integral so floor() is exact (100 * 1.15 is 114.999... as a float)
PLAYER_RECOVERY_PERCENT = 30
ROUND_HP_GROWTH_PERCENT = 15


@dataclass
class RoundReport:
    round_index: int
    healed: int
    opponent: Fighter


def scaled_max_hp(base_hp: int, round_index: int) -> int:
    return base_hp * (100 + round_index * ROUND_HP_GROWTH_PERCENT) // 100


def recovery_amount(player: Fighter) -> int:
    return player.max_hp * PLAYER_RECOVERY_PERCENT // 100


def advance_round(player: Fighter, round_index: int, rng: Optional[random.Random] = None,
                  opponent_side: Side = Side.B) -> RoundReport:
    """Heal/reset ``player`` and spawn the opponent for ``round_index + 1``."""
    rng = rng or random.Random()
    next_round = round_index + 1
    before = player.current_hp
    player.set_hp(before + recovery_amount(player))
    player.reset_status()
    key = random_elemental_key(rng)
    opponent = create_fighter(key, opponent_side, max_hp=scaled_max_hp(get_template(key).hp, next_round))
    return RoundReport(round_index=next_round, healed=player.current_hp - before, opponent=opponent)


__all__ = ["RoundReport", "scaled_max_hp", "recovery_amount", "advance_round",
           "PLAYER_RECOVERY_PERCENT", "ROUND_HP_GROWTH_PERCENT"]
