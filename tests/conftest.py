import random
from pathlib import Path

import pytest

from bending.battle.scheduling import ManualScheduler
from bending.battle.service import BattleService
from bending.system.settings import Settings, SettingsData


class ScriptedRng:
    """Deterministic stand-in for random.Random.

    ``random()`` pops from ``rolls`` (0.99 when empty, i.e. evasion never
    triggers); ``choice()`` pops the wanted value from ``picks`` and falls back
    to the first option.
    """

    def __init__(self, rolls=(), picks=(), default_roll=0.99):
        self.rolls = list(rolls)
        self.picks = list(picks)
        self.default_roll = default_roll

    def random(self):
        return self.rolls.pop(0) if self.rolls else self.default_roll

    def choice(self, seq):
        if self.picks:
            want = self.picks.pop(0)
            for item in seq:
                if item == want:
                    return item
        return seq[0]


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def make_service(tmp_path):
    def _make(rng=None, **settings_kw):
        settings = Settings(SettingsData(**settings_kw), Path(tmp_path) / "settings.json")
        scheduler = ManualScheduler()
        service = BattleService(settings, scheduler=scheduler, rng=rng or random.Random(0))
        return service, scheduler
    return _make
