import random

from pokestack.battle.stats import (
    StatBlock, assemble_ivs, calc_all_stats, calc_stat, clamp_level, hp_iv_from,
    random_evs, random_ivs, shrink_evs,
)
from pokestack.core.rng import StdRandomSource


def test_hp_iv_from_low_bits():
    # bits [1,1,1,0] -> 0b0111
    assert hp_iv_from([5, 3, 9, 2]) == 7
    assert hp_iv_from([0, 0, 0, 0]) == 0
    assert hp_iv_from([1, 1, 1, 1]) == 15


def test_iv_slots_reuse_fourth_draw():
    ivs = assemble_ivs([5, 3, 9, 2])
    assert ivs == StatBlock(7, 5, 3, 2, 2, 9)


def test_random_ivs_scale_and_clamp(scripted):
    # chi-square draws are doubled then truncated; 20 * 2 clamps at 15
    rng = scripted(chisquare=[2.6, 1.5, 4.6, 20.0])
    ivs = random_ivs(rng)
    assert ivs.as_list() == [hp_iv_from([5, 3, 9, 15]), 5, 3, 15, 15, 9]


def test_random_ivs_in_range():
    rng = StdRandomSource(seed=1)
    for _ in range(500):
        assert all(0 <= v <= 15 for v in random_ivs(rng).as_list())


def test_shrink_evs_single_pass():
    assert shrink_evs([255, 255, 255, 0, 0, 0]) == [170, 170, 170, 0, 0, 0]


def test_shrink_evs_new_zero_changes_divisor():
    # first pass zeroes the 1, second pass spreads over four entries
    assert shrink_evs([255, 255, 255, 255, 0, 1]) == [127, 127, 127, 127, 0, 0]


def test_shrink_evs_never_negative_and_terminates():
    rnd = random.Random(99)
    for _ in range(300):
        raw = [rnd.choice([0, rnd.randint(0, 255)]) for _ in range(6)]
        out = shrink_evs(raw)
        assert sum(out) <= 510
        assert all(v >= 0 for v in out)
        if sum(raw) <= 510:
            assert out == raw


def test_shrink_evs_under_cap_untouched():
    assert shrink_evs([100, 100, 100, 100, 100, 10]) == [100, 100, 100, 100, 100, 10]


def test_random_evs_caps():
    rng = StdRandomSource(seed=12345)
    for level in (1, 5, 30, 70, 100):
        for _ in range(100):
            evs = random_evs(level, rng).as_list()
            assert sum(evs) <= 510
            assert all(0 <= v <= 255 for v in evs)


def test_calc_stat_hp_and_other():
    assert calc_stat(45, 15, 0, 50, hp=True) == 112
    assert calc_stat(49, 15, 100, 50, 1.1) == 81
    assert calc_stat(49, 15, 100, 50, 0.9) == 66


def test_calc_all_stats_hp_ignores_nature():
    base = (45, 49, 49, 65, 65, 45)
    ivs = StatBlock(7, 5, 3, 2, 2, 9)
    evs = StatBlock(10, 20, 30, 40, 50, 60)
    up = calc_all_stats(base, ivs, evs, 40, (1.1,) * 5)
    down = calc_all_stats(base, ivs, evs, 40, (0.9,) * 5)
    assert up.hp == down.hp
    assert up.atk > down.atk and up.spd > down.spd


def test_calc_all_stats_pure():
    base = (80, 82, 83, 100, 100, 80)
    ivs, evs = StatBlock(1, 2, 3, 4, 5, 6), StatBlock(6, 5, 4, 3, 2, 1)
    mults = (1.1, 0.9, 1.0, 1.0, 1.0)
    assert calc_all_stats(base, ivs, evs, 33, mults) == calc_all_stats(base, ivs, evs, 33, mults)


def test_stats_positive_at_level_one():
    stats = calc_all_stats((1, 1, 1, 1, 1, 1), StatBlock(0, 0, 0, 0, 0, 0), StatBlock(0, 0, 0, 0, 0, 0), 1, (0.9,) * 5)
    assert all(v > 0 for v in stats.as_list())


def test_clamp_level():
    assert clamp_level(0) == 1
    assert clamp_level(150) == 100
    assert clamp_level("junk") == 1
