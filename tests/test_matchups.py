from itertools import product
from bending.battle.mechanics import effectiveness, scaled_damage
from bending.battle.models import Element

STRONG = [("water", "fire"), ("earth", "fire"), ("air", "earth"), ("fire", "air")]
WEAK = [("fire", "water"), ("fire", "earth"), ("earth", "air"), ("air", "fire")]


def test_table_is_total_with_expected_split():
    results = {(a, d): effectiveness(a, d) for a, d in product(Element, Element)}
    assert len(results) == 25
    assert sorted(k for k, v in results.items() if v == 1.5) == sorted((Element(a), Element(d)) for a, d in STRONG)
    assert sorted(k for k, v in results.items() if v == 0.5) == sorted((Element(a), Element(d)) for a, d in WEAK)
    assert sum(1 for v in results.values() if v == 1.0) == 17


def test_mirror_and_avatar_pairs_are_neutral():
    for e in Element:
        assert effectiveness(e, e) == 1.0
        assert effectiveness(Element.AVATAR, e) == 1.0
        assert effectiveness(e, Element.AVATAR) == 1.0


def test_damage_formula_floors():
    assert scaled_damage(30, 1.5) == 45
    assert scaled_damage(30, 0.5) == 15
    assert scaled_damage(30, 1.0) == 30
    assert scaled_damage(25, 0.5) == 12
