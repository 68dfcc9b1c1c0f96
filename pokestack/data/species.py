"""Species base-stat provider.

Provides cached access to the bundled species table (``species.json``).
Focus: lightweight lookups for creature generation without any storage layer.

Base stats are six ints ordered HP, Atk, Def, SpAtk, SpDef, Spd. Each species
lists its valid forms; every form carries its own base-stat row.
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Protocol, Tuple

from pokestack.core.errors import DataLoadError, UnknownSpecies
from pokestack.core.paths import SPECIES_TABLE

BaseStats = Tuple[int, int, int, int, int, int]

class SpeciesProvider(Protocol):
    def count(self) -> int: ...
    def forms(self, species_id: int) -> Tuple[str, ...]: ...
    def base_stats(self, species_id: int, form: str) -> BaseStats: ...
    def species_id(self, name: str) -> int: ...
    def name(self, species_id: int) -> str: ...


class JsonSpeciesProvider:
    """Species table backed by a JSON document.

    Expected layout::

        {"species": [{"id": 1, "name": "bulbasaur",
                      "forms": {"normal": [45, 49, 49, 65, 65, 45]}}, ...]}

    Ids must be contiguous from 1 so that a uniform draw over ``1..count()``
    always hits a valid species.
    """

    def __init__(self, path: Path = SPECIES_TABLE):
        self.path = path
        self._by_id: Dict[int, Dict[str, BaseStats]] = {}
        self._names: Dict[int, str] = {}
        self._ids: Dict[str, int] = {}
        self._load()

    def _load(self):
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            rows = raw["species"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise DataLoadError(str(self.path), str(e)) from e
        for row in rows:
            try:
                sid = int(row["id"])
                name = str(row["name"]).lower()
                forms = {f: _as_base(v) for f, v in row["forms"].items()}
            except (KeyError, TypeError, ValueError) as e:
                raise DataLoadError(str(self.path), f"bad species row {row!r}: {e}") from e
            if not forms:
                raise DataLoadError(str(self.path), f"species {sid} has no forms")
            self._by_id[sid] = forms
            self._names[sid] = name
            self._ids[name] = sid
        if sorted(self._by_id) != list(range(1, len(self._by_id) + 1)):
            raise DataLoadError(str(self.path), "species ids are not contiguous from 1")

    def count(self) -> int:
        return len(self._by_id)

    def _forms_of(self, species_id: int) -> Dict[str, BaseStats]:
        try:
            return self._by_id[int(species_id)]
        except (KeyError, TypeError, ValueError):
            raise UnknownSpecies(species_id) from None

    def forms(self, species_id: int) -> Tuple[str, ...]:
        return tuple(self._forms_of(species_id))

    def base_stats(self, species_id: int, form: str) -> BaseStats:
        forms = self._forms_of(species_id)
        if form not in forms:
            raise UnknownSpecies(f"{species_id}/{form}")
        return forms[form]

    def species_id(self, name: str) -> int:
        key = str(name).strip().lower()
        if key not in self._ids:
            raise UnknownSpecies(name)
        return self._ids[key]

    def name(self, species_id: int) -> str:
        self._forms_of(species_id)
        return self._names[int(species_id)]


def _as_base(values) -> BaseStats:
    vals = tuple(int(v) for v in values)
    if len(vals) != 6 or any(v <= 0 for v in vals):
        raise ValueError(f"expected six positive base stats, got {values!r}")
    return vals  # type: ignore[return-value]

@lru_cache(maxsize=None)
def default_species() -> JsonSpeciesProvider:
    return JsonSpeciesProvider()

# Simple CLI for debugging
if __name__ == "__main__":
    import sys
    table = default_species()
    if len(sys.argv) == 2:
        q = sys.argv[1]
        sid = int(q) if q.isdigit() else table.species_id(q)
        for form in table.forms(sid):
            print(sid, table.name(sid), form, table.base_stats(sid, form))
    else:
        print(f"Loaded {table.count()} species")
