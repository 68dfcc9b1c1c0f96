"""Factory helpers for constructing Creature instances from species data.

Shared across the world services, the CLI and tests.
"""
from __future__ import annotations
from typing import Optional

from pokestack.core.errors import UnknownSpecies, ValidationError
from pokestack.core.logging import logger
from pokestack.core.rng import RandomSource, default_rng
from pokestack.data.natures import NATURE_NAMES, nature_multipliers
from pokestack.data.species import SpeciesProvider, default_species
from pokestack.world.geo import Location, random_location
from .core import Creature
from .stats import MAX_LEVEL, MIN_LEVEL, calc_all_stats, clamp_level, limit, random_evs, random_ivs

def random_level(rng: RandomSource) -> int:
    return limit(rng.chisquare(2) * 5, lo=MIN_LEVEL, hi=MAX_LEVEL)

def create_creature(species_id: Optional[int] = None, name: Optional[str] = None,
                    level: Optional[int] = None, loc: Optional[Location] = None,
                    owner_id: Optional[str] = None, stadium_id: Optional[str] = None, *,
                    rng: Optional[RandomSource] = None,
                    species: Optional[SpeciesProvider] = None) -> Creature:
    """Generate a fully specified creature.

    Unset arguments are rolled: species uniformly (or resolved from ``name``),
    level from a chi-square(2) * 5 draw, form and nature uniformly, location
    uniformly on the globe.
    """
    rng = rng or default_rng()
    species = species or default_species()
    if owner_id is not None and stadium_id is not None:
        raise ValidationError("A creature cannot be owned and garrisoned at once")
    if species_id is None:
        if name:
            species_id = species.species_id(name)
        else:
            species_id = rng.randint(1, species.count())
    elif not 1 <= int(species_id) <= species.count():
        raise UnknownSpecies(species_id)
    level = clamp_level(level) if level is not None else random_level(rng)

    form = rng.choice(species.forms(species_id))
    nature = rng.choice(NATURE_NAMES)
    ivs = random_ivs(rng)
    evs = random_evs(level, rng)
    stats = calc_all_stats(species.base_stats(species_id, form), ivs, evs, level,
                           nature_multipliers(nature))
    creature = Creature(
        species_id=int(species_id),
        name=species.name(species_id).capitalize(),
        form=form,
        level=level,
        nature=nature,
        ivs=ivs,
        evs=evs,
        stats=stats,
        loc=loc or random_location(rng=rng),
        owner_id=owner_id,
        stadium_id=stadium_id,
    )
    logger.debug("CreatureCreated", id=creature.creature_id, species=creature.species_id,
                 level=level, nature=nature)
    return creature

__all__ = ["create_creature", "random_level"]
