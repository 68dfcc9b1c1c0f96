"""Team assembly for battles.

A Team is the single value type handed to the battle engine, whatever the
opponent is (a wild creature, a trainer's roster or a stadium garrison).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from pokestack.core.errors import InvalidRosterState
from pokestack.core.rng import RandomSource
from pokestack.data.species import SpeciesProvider
from .core import BattleCore, BattleOutcome, Creature
from .factory import create_creature

ROSTER_SIZE = 4

class PadPolicy(str, Enum):
    NONE = "none"
    GENERATE_RANDOM = "generate_random"

@dataclass
class Team:
    members: List[Creature] = field(default_factory=list)
    roster_size: int = ROSTER_SIZE

    def __post_init__(self):
        if len(self.members) > self.roster_size:
            raise InvalidRosterState(f"Team of {len(self.members)} exceeds roster size {self.roster_size}")

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)

    def has_available(self) -> bool:
        return any(not m.is_fainted() for m in self.members)

    def working_copy(self) -> "Team":
        return Team([m.clone() for m in self.members], self.roster_size)

    def ids(self) -> List[str]:
        return [m.creature_id for m in self.members]


def build_team(creatures: Iterable[Creature], pad: PadPolicy = PadPolicy.NONE,
               roster_size: int = ROSTER_SIZE, *, rng: Optional[RandomSource] = None,
               species: Optional[SpeciesProvider] = None) -> Team:
    """Strongest ``roster_size`` creatures by level (stable on ties).

    With ``PadPolicy.GENERATE_RANDOM`` a short roster is topped up with freshly
    generated free creatures; padding never reorders the real members.
    """
    if roster_size < 1:
        raise InvalidRosterState(f"Roster size must be positive, got {roster_size}")
    members = sorted(creatures, key=lambda c: -c.level)[:roster_size]
    if pad == PadPolicy.GENERATE_RANDOM:
        while len(members) < roster_size:
            members.append(create_creature(rng=rng, species=species))
    return Team(members, roster_size)


def fight(offense: Team, defense: Team, rng: Optional[RandomSource] = None) -> BattleOutcome:
    """Run the engine on working copies so the teams keep their records intact."""
    return BattleCore(rng).resolve(offense.working_copy().members, defense.working_copy().members)

__all__ = ["Team", "PadPolicy", "build_team", "fight", "ROSTER_SIZE"]
