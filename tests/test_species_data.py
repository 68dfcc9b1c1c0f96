import json

import pytest

from pokestack.core.errors import DataLoadError, UnknownSpecies
from pokestack.data.natures import NATURES, nature_multipliers
from pokestack.data.species import JsonSpeciesProvider, default_species


def test_species_table_complete():
    table = default_species()
    assert table.count() == 151
    assert table.name(1) == "bulbasaur"
    assert table.name(151) == "mew"


def test_lookup_by_name_case_insensitive():
    assert default_species().species_id("CHARIZARD") == 6
    assert default_species().species_id(" mr-mime ") == 122


def test_base_stats_row():
    assert default_species().base_stats(25, "normal") == (35, 55, 40, 50, 50, 90)
    assert default_species().forms(25) == ("normal",)


def test_unknown_lookups():
    table = default_species()
    with pytest.raises(UnknownSpecies):
        table.species_id("digimon")
    with pytest.raises(UnknownSpecies):
        table.forms(0)
    with pytest.raises(UnknownSpecies):
        table.base_stats(1, "mega")


def test_malformed_table(tmp_path):
    bad = tmp_path / "species.json"
    bad.write_text("[]")
    with pytest.raises(DataLoadError):
        JsonSpeciesProvider(bad)


def test_ids_must_be_contiguous(tmp_path):
    path = tmp_path / "species.json"
    path.write_text(json.dumps({"species": [
        {"id": 1, "name": "a", "forms": {"normal": [1, 1, 1, 1, 1, 1]}},
        {"id": 3, "name": "c", "forms": {"normal": [1, 1, 1, 1, 1, 1]}},
    ]}))
    with pytest.raises(DataLoadError):
        JsonSpeciesProvider(path)


def test_natures_table():
    assert len(NATURES) == 25
    for mults in NATURES.values():
        assert sorted(set(mults)) in ([1.0], [0.9, 1.0, 1.1])
    assert nature_multipliers("adamant") == (1.1, 1.0, 0.9, 1.0, 1.0)
    assert nature_multipliers(None) == (1.0,) * 5
