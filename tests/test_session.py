import pytest

from pokestack.battle.session import PadPolicy, ROSTER_SIZE, Team, build_team
from pokestack.core.errors import InvalidRosterState
from pokestack.core.rng import StdRandomSource


def test_build_team_orders_by_level_stable(make_creature):
    mons = [make_creature("a", level=5), make_creature("b", level=20), make_creature("c", level=5),
            make_creature("d", level=40), make_creature("e", level=20), make_creature("f", level=1)]
    team = build_team(mons)
    assert [c.name for c in team] == ["d", "b", "e", "a"]
    assert len(team) == ROSTER_SIZE


def test_build_team_no_padding_by_default(make_creature):
    team = build_team([make_creature("solo")])
    assert len(team) == 1


def test_build_team_pads_with_random_creatures(make_creature):
    solo = make_creature("solo", level=90)
    team = build_team([solo], PadPolicy.GENERATE_RANDOM, rng=StdRandomSource(seed=10))
    assert len(team) == ROSTER_SIZE
    assert team.members[0] is solo
    assert all(c.is_free for c in team.members[1:])


def test_pad_empty_roster():
    team = build_team([], PadPolicy.GENERATE_RANDOM, roster_size=2, rng=StdRandomSource(seed=1))
    assert len(team) == 2


def test_team_above_roster_rejected(make_creature):
    with pytest.raises(InvalidRosterState):
        Team([make_creature() for _ in range(5)])
    with pytest.raises(InvalidRosterState):
        build_team([make_creature()], roster_size=0)


def test_working_copy_is_independent(make_creature):
    team = Team([make_creature("x", hp=30)])
    copy = team.working_copy()
    copy.members[0].current_hp = 0
    assert team.members[0].current_hp == 30
    assert not copy.has_available() and team.has_available()
    assert copy.ids() == team.ids()
