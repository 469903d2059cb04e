import random
from bending.battle.core import BattleCore
from bending.battle.factory import create_fighter
from bending.battle.models import Ability, Side


def duel(a_key, b_key, rng=None):
    core = BattleCore(rng=rng or random.Random(1))
    return core, create_fighter(a_key, Side.A), create_fighter(b_key, Side.B)


def test_heavy_super_effective(scripted_rng):
    core, water, fire = duel("water", "fire", scripted_rng())
    out = core.resolve(water, fire, Ability.HEAVY)
    assert out.damage_dealt == 45
    assert out.effectiveness == 1.5
    assert fire.current_hp == 55
    assert "super effective" in out.message
    assert out.side is Side.A


def test_heavy_not_very_effective_and_neutral():
    core, fire, water = duel("fire", "water")
    assert core.resolve(fire, water, "heavy").damage_dealt == 15
    core, water, earth = duel("water", "earth")
    assert core.resolve(water, earth, "heavy").damage_dealt == 30


def test_damage_clamps_at_zero():
    core, water, fire = duel("water", "fire")
    fire.set_hp(10)
    core.resolve(water, fire, Ability.HEAVY)
    assert fire.current_hp == 0


def test_evade_negates_hit_when_roll_lands(scripted_rng):
    core, water, air = duel("water", "air", scripted_rng(rolls=[0.5]))
    air.effects.evade = 2
    out = core.resolve(water, air, Ability.MID)
    assert out.evaded and out.damage_dealt == 0
    assert air.current_hp == 90
    # Evade only decays at the bearer's turn boundary, not per hit
    assert air.effects.evade == 2


def test_evade_roll_can_miss(scripted_rng):
    core, water, air = duel("water", "air", scripted_rng(rolls=[0.85]))
    air.effects.evade = 1
    out = core.resolve(water, air, Ability.MID)
    assert not out.evaded
    assert air.current_hp == 70


def test_evade_rate_is_about_eighty_percent():
    core, water, air = duel("water", "air", random.Random(2024))
    air.effects.evade = 1
    trials = 4000
    evaded = 0
    for _ in range(trials):
        air.set_hp(air.max_hp)
        if core.resolve(water, air, Ability.LIGHT).evaded:
            evaded += 1
    assert 0.77 <= evaded / trials <= 0.83


def test_water_special_heals_quarter_capped():
    core, water, fire = duel("water", "fire")
    water.set_hp(50)
    out = core.resolve(water, fire, Ability.SPECIAL)
    assert out.healed == 25 and water.current_hp == 75
    water.set_hp(90)
    out = core.resolve(water, fire, Ability.SPECIAL)
    assert out.healed == 10 and water.current_hp == 100
    assert fire.current_hp == 100


def test_fire_special_ignores_matchup_and_evade(scripted_rng):
    core, fire, water = duel("fire", "water", scripted_rng(rolls=[0.0]))
    water.effects.evade = 3
    out = core.resolve(fire, water, Ability.SPECIAL)
    assert out.damage_dealt == 20
    assert not out.evaded
    assert water.current_hp == 80
    assert water.effects.burn == 5
    assert out.status_granted == "burn"


def test_earth_special_stuns_without_damage():
    core, earth, air = duel("earth", "air")
    out = core.resolve(earth, air, Ability.SPECIAL)
    assert out.damage_dealt == 0
    assert air.effects.stun == 2
    assert air.current_hp == 90


def test_air_special_grants_self_evade():
    core, air, fire = duel("air", "fire")
    out = core.resolve(air, fire, Ability.SPECIAL)
    assert air.effects.evade == 4
    assert out.status_granted == "evade"
    assert fire.current_hp == 100


def test_unattuned_avatar_special_does_nothing():
    core, avatar, fire = duel("avatar", "fire")
    out = core.resolve(avatar, fire, Ability.SPECIAL)
    assert (out.damage_dealt, out.healed, out.status_granted) == (0, 0, None)
    assert fire.current_hp == 100


def test_messages_reach_callback():
    lines = []
    core, water, fire = duel("water", "fire")
    core.message_cb = lines.append
    core.resolve(water, fire, Ability.LIGHT)
    core.forfeit(fire, Ability.LIGHT)
    assert len(lines) == 2
    assert "STUNNED" in lines[1]
