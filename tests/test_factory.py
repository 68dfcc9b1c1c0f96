import pytest

from pokestack.battle.factory import create_creature, random_level
from pokestack.core.errors import UnknownSpecies, ValidationError
from pokestack.core.rng import StdRandomSource
from pokestack.data.natures import NATURES
from pokestack.data.species import default_species
from pokestack.world.geo import Location


class TwoFormSpecies:
    """Minimal species provider with a single species in two forms."""
    def count(self): return 1
    def forms(self, species_id):
        if species_id != 1:
            raise UnknownSpecies(species_id)
        return ("sunny", "rainy")
    def base_stats(self, species_id, form):
        return (70, 70, 70, 70, 70, 70) if form == "sunny" else (70, 90, 70, 90, 70, 70)
    def species_id(self, name):
        if name.lower() != "castform":
            raise UnknownSpecies(name)
        return 1
    def name(self, species_id): return "castform"


def test_generated_creatures_respect_invariants():
    rng = StdRandomSource(seed=2024)
    for _ in range(300):
        c = create_creature(rng=rng)
        assert 1 <= c.level <= 100
        assert all(0 <= v <= 15 for v in c.ivs.as_list())
        assert c.evs.total() <= 510
        assert all(0 <= v <= 255 for v in c.evs.as_list())
        assert all(v > 0 for v in c.stats.as_list())
        assert c.current_hp == c.stats.hp
        assert c.nature in NATURES
        assert 1 <= c.species_id <= default_species().count()
        assert -180 <= c.loc.lng <= 180 and -90 <= c.loc.lat <= 90
        assert c.is_free


def test_name_resolves_species():
    c = create_creature(name="Pikachu", level=12, rng=StdRandomSource(seed=1))
    assert c.species_id == 25
    assert c.name == "Pikachu"
    assert c.level == 12


def test_unknown_name_raises_lookup_error():
    with pytest.raises(UnknownSpecies):
        create_creature(name="missingno")
    with pytest.raises(LookupError):
        create_creature(name="missingno")


def test_unknown_species_id_raises():
    with pytest.raises(UnknownSpecies):
        create_creature(species_id=999)


def test_owner_and_stadium_exclusive():
    with pytest.raises(ValidationError):
        create_creature(owner_id="a", stadium_id="b")


def test_explicit_location_and_owner_kept():
    loc = Location(2.35, 48.85)
    c = create_creature(species_id=4, loc=loc, owner_id="ash", rng=StdRandomSource(seed=3))
    assert c.loc == loc
    assert c.owner_id == "ash"
    assert not c.is_free


def test_same_seed_same_creature():
    a = create_creature(species_id=150, rng=StdRandomSource(seed=77))
    b = create_creature(species_id=150, rng=StdRandomSource(seed=77))
    assert (a.level, a.nature, a.ivs, a.evs, a.stats, a.loc) == (b.level, b.nature, b.ivs, b.evs, b.stats, b.loc)
    assert a.creature_id != b.creature_id


def test_form_drawn_from_species_forms():
    provider = TwoFormSpecies()
    seen = {create_creature(rng=StdRandomSource(seed=s), species=provider).form for s in range(40)}
    assert seen == {"sunny", "rainy"}
    c = create_creature(name="castform", level=50, species=provider, rng=StdRandomSource(seed=5))
    assert c.species_id == 1 and c.name == "Castform"


def test_random_level_clamped(scripted):
    assert random_level(scripted(chisquare=[0.01])) == 1
    assert random_level(scripted(chisquare=[100.0])) == 100
    assert random_level(scripted(chisquare=[2.5])) == 12


def test_explicit_zero_is_not_unset():
    with pytest.raises(UnknownSpecies):
        create_creature(species_id=0)
    c = create_creature(species_id=7, level=0, rng=StdRandomSource(seed=9))
    assert c.level == 1
