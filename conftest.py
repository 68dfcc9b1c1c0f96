# Ensure project root is on sys.path for tests, and share battle test helpers
import sys, pathlib
root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

import pytest

from pokestack.battle.core import Creature
from pokestack.battle.stats import StatBlock


class ScriptedRng:
    """Deterministic RandomSource: pops queued values, then falls back to defaults."""

    def __init__(self, bernoulli=(), chisquare=(), *, default_bernoulli=False, default_chisquare=10.0):
        self.bernoulli_queue = list(bernoulli)
        self.chisquare_queue = list(chisquare)
        self.default_bernoulli = default_bernoulli
        self.default_chisquare = default_chisquare
        self.calls = {"bernoulli": 0, "chisquare": 0}

    def bernoulli(self, p):
        self.calls["bernoulli"] += 1
        return self.bernoulli_queue.pop(0) if self.bernoulli_queue else self.default_bernoulli

    def chisquare(self, df=1):
        self.calls["chisquare"] += 1
        return self.chisquare_queue.pop(0) if self.chisquare_queue else self.default_chisquare

    def uniform(self, a, b): return a
    def choice(self, seq): return seq[0]
    def randint(self, a, b): return a
    def sample(self, seq, k): return list(seq)[:k]


@pytest.fixture
def scripted():
    return ScriptedRng


@pytest.fixture
def make_creature():
    def _make(name="Mon", level=10, hp=50, atk=50, def_=50, sp_atk=50, sp_def=50, spd=0, **kw):
        zero = StatBlock(0, 0, 0, 0, 0, 0)
        return Creature(species_id=1, name=name, form="normal", level=level, nature="Hardy",
                        ivs=zero, evs=zero, stats=StatBlock(hp, atk, def_, sp_atk, sp_def, spd), **kw)
    return _make
