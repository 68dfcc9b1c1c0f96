"""Trainers, stadiums and pokestops plus their random generators.

Generators follow the seeding distributions of the live game: counts and
points are truncated chi-square draws, creatures spawn at their holder's
location.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Dict, Iterable, List, Optional, Tuple
import uuid

from pokestack.battle.core import Creature
from pokestack.battle.factory import create_creature
from pokestack.core.rng import RandomSource, default_rng
from pokestack.data.species import SpeciesProvider
from .bag import Bag
from .geo import Location, random_location

def _new_id() -> str:
    return uuid.uuid4().hex

@dataclass
class Trainer:
    id: str = field(default_factory=_new_id)
    label: str = ""
    loc: Location = field(default_factory=Location)
    bag: Bag = field(default_factory=Bag)
    creature_ids: List[str] = field(default_factory=list)
    stadium_ids: List[str] = field(default_factory=list)
    points: int = 0

    def __post_init__(self):
        if not self.label:
            self.label = f"Trainer #{self.id[:6]}"

@dataclass
class PokeStop:
    id: str = field(default_factory=_new_id)
    loc: Location = field(default_factory=Location)
    items: Bag = field(default_factory=Bag)

@dataclass
class Stadium(PokeStop):
    owner_id: Optional[str] = None
    defending_ids: List[str] = field(default_factory=list)
    points: int = 0

# ---------------- Generators -----------------

def random_items(rng: RandomSource) -> Bag:
    return Bag(
        pokeball=math.trunc(rng.chisquare(1) * 3),
        greatball=math.trunc(rng.chisquare(1) / 3),
        revive=math.trunc(rng.chisquare(2)),
        lure=int(rng.bernoulli(0.2)) + int(rng.bernoulli(0.05)),
    )

def gen_pokestop(rng: Optional[RandomSource] = None) -> PokeStop:
    rng = rng or default_rng()
    return PokeStop(loc=random_location(rng=rng), items=random_items(rng))

def gen_stadium(rng: Optional[RandomSource] = None,
                species: Optional[SpeciesProvider] = None) -> Tuple[Stadium, List[Creature]]:
    """Return the stadium and the creatures garrisoned in it."""
    rng = rng or default_rng()
    stadium = Stadium(loc=random_location(rng=rng), items=random_items(rng))
    stadium.points = math.trunc(rng.chisquare(2) * 10)
    garrison = [create_creature(stadium_id=stadium.id, loc=stadium.loc, rng=rng, species=species)
                for _ in range(math.trunc(rng.chisquare(2) / 2.5))]
    stadium.defending_ids.extend(c.creature_id for c in garrison)
    return stadium, garrison

def gen_trainer(rng: Optional[RandomSource] = None,
                species: Optional[SpeciesProvider] = None) -> Tuple[Trainer, List[Creature]]:
    """Return a rival trainer with a stocked bag and the creatures it owns."""
    rng = rng or default_rng()
    trainer = Trainer(loc=random_location(rng=rng), bag=Bag(
        pokeball=math.trunc(rng.chisquare(3) * 5),
        greatball=math.trunc(rng.chisquare(1) * 2),
        revive=math.trunc(rng.chisquare(1) * 3),
        lure=math.trunc(rng.chisquare(1)),
    ))
    owned = [create_creature(owner_id=trainer.id, loc=trainer.loc, rng=rng, species=species)
             for _ in range(1 + math.trunc(rng.chisquare(1)))]
    trainer.creature_ids.extend(c.creature_id for c in owned)
    return trainer, owned

def new_user(loc: Optional[Location] = None, rng: Optional[RandomSource] = None) -> Trainer:
    """A player: empty bag, no creatures, no points."""
    return Trainer(loc=loc or random_location(rng=rng))

# ---------------- Registry -----------------

@dataclass
class World:
    """In-memory registry of everything the services act upon."""
    creatures: Dict[str, Creature] = field(default_factory=dict)
    trainers: Dict[str, Trainer] = field(default_factory=dict)
    stadiums: Dict[str, Stadium] = field(default_factory=dict)
    pokestops: Dict[str, PokeStop] = field(default_factory=dict)

    def add_creatures(self, creatures: Iterable[Creature]) -> None:
        for c in creatures:
            self.creatures[c.creature_id] = c

    def add_trainer(self, trainer: Trainer, owned: Iterable[Creature] = ()) -> Trainer:
        self.trainers[trainer.id] = trainer
        self.add_creatures(owned)
        return trainer

    def add_stadium(self, stadium: Stadium, garrison: Iterable[Creature] = ()) -> Stadium:
        self.stadiums[stadium.id] = stadium
        self.add_creatures(garrison)
        return stadium

    def add_pokestop(self, stop: PokeStop) -> PokeStop:
        self.pokestops[stop.id] = stop
        return stop

__all__ = ["Trainer", "PokeStop", "Stadium", "World", "random_items",
           "gen_pokestop", "gen_stadium", "gen_trainer", "new_user"]
