"""Creature model and the turn-based battle engine.

Two ordered teams fight one active creature at a time. The offense attacks
first, sides alternate one attack each, a creature at 0 HP hands over to the
next live member of its team and the battle ends as soon as one side has no
live creature left.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence
import uuid

from pokestack.core.errors import InvalidRosterState
from pokestack.core.logging import logger
from pokestack.core.rng import RandomSource, default_rng
from pokestack.world.geo import Location
from .stats import StatBlock

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

def _new_id() -> str:
    return uuid.uuid4().hex

@dataclass
class Creature:
    species_id: int
    name: str
    form: str
    level: int
    nature: str
    ivs: StatBlock
    evs: StatBlock
    stats: StatBlock
    loc: Location = field(default_factory=Location)
    owner_id: Optional[str] = None
    stadium_id: Optional[str] = None
    creature_id: str = field(default_factory=_new_id)
    # Battle scratch value; None means full health
    current_hp: Optional[float] = None

    def __post_init__(self):
        max_hp = self.stats.hp
        if self.current_hp is None:
            self.current_hp = max_hp
        else:
            self.current_hp = max(0, min(self.current_hp, max_hp))

    @property
    def is_free(self) -> bool:
        return self.owner_id is None and self.stadium_id is None

    def is_fainted(self) -> bool:
        return (self.current_hp or 0) <= 0

    def clone(self) -> "Creature":
        """Working copy for a battle; the source record keeps its HP."""
        return replace(self)

    def heal(self):
        self.current_hp = self.stats.hp

@dataclass(frozen=True)
class AttackResult:
    attacker: str
    defender: str
    special: bool
    dodged: bool
    damage: float
    remaining_hp: float

@dataclass
class BattleOutcome:
    offense_won: bool
    attacks: int = 0
    log: List[AttackResult] = field(default_factory=list)

# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def special_chance(level: int) -> float:
    return max(0.0, 0.51 - 8 / (15 + level))

def dodge_chance(defender: Creature, special: bool) -> float:
    p = min(defender.stats.spd / 255, 1) * 0.7
    return p / 2 if special else p

class BattleCore:
    def __init__(self, rng: Optional[RandomSource] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or default_rng()
        self.message_cb = message_cb

    def _msg(self, text: str):
        if self.message_cb:
            self.message_cb(text)

    def attack(self, attacker: Creature, defender: Creature) -> AttackResult:
        special = self.rng.bernoulli(special_chance(attacker.level))
        if self.rng.bernoulli(dodge_chance(defender, special)):
            self._msg(f"{defender.name} dodged {attacker.name}'s attack!")
            logger.debug("AttackDodged", attacker=attacker.name, defender=defender.name, special=special)
            return AttackResult(attacker.name, defender.name, special, True, 0.0, defender.current_hp or 0)
        a, d = attacker.stats, defender.stats
        if special:
            base = (a.sp_atk / 8) * min(self.rng.chisquare(50) / 50, 3)
            mult = 510 / (510 + 2 * d.sp_def + d.def_)
        else:
            base = (a.atk / 10) * min(self.rng.chisquare(10) / 10, 2)
            mult = 255 / (255 + d.def_)
        damage = base * mult
        defender.current_hp = max((defender.current_hp or 0) - damage, 0)
        self._msg(f"{attacker.name} used a {'special' if special else 'normal'} attack on {defender.name} for {damage:.1f}")
        logger.debug("Attack", attacker=attacker.name, defender=defender.name, special=special,
                     damage=round(damage, 2), hp=round(defender.current_hp, 2))
        return AttackResult(attacker.name, defender.name, special, False, damage, defender.current_hp)

    def resolve(self, offense: Sequence[Creature], defense: Sequence[Creature]) -> BattleOutcome:
        """Fight until one side runs out of creatures.

        Callers pass working copies (see :meth:`Creature.clone`); ``current_hp``
        of every participant is mutated.
        """
        off_team, def_team = list(offense), list(defense)
        if not off_team or not def_team:
            raise InvalidRosterState("Both teams need at least one creature")
        outcome = BattleOutcome(offense_won=False)
        oi = _next_alive(off_team, 0)
        di = _next_alive(def_team, 0)
        offense_turn = True
        while oi is not None and di is not None:
            if offense_turn:
                res = self.attack(off_team[oi], def_team[di])
                if def_team[di].is_fainted():
                    self._msg(f"{def_team[di].name} fainted!")
                    di = _next_alive(def_team, di + 1)
            else:
                res = self.attack(def_team[di], off_team[oi])
                if off_team[oi].is_fainted():
                    self._msg(f"{off_team[oi].name} fainted!")
                    oi = _next_alive(off_team, oi + 1)
            outcome.log.append(res)
            outcome.attacks += 1
            offense_turn = not offense_turn
        outcome.offense_won = oi is not None
        logger.info("BattleResolved", offense_won=outcome.offense_won, attacks=outcome.attacks,
                    offense=len(off_team), defense=len(def_team))
        return outcome

def _next_alive(team: List[Creature], start: int) -> Optional[int]:
    for i in range(start, len(team)):
        if not team[i].is_fainted():
            return i
    return None

def resolve_battle(offense: Sequence[Creature], defense: Sequence[Creature],
                   rng: Optional[RandomSource] = None) -> bool:
    """Return True when the offensive team wins."""
    return BattleCore(rng).resolve(offense, defense).offense_won

__all__ = ["Creature", "AttackResult", "BattleOutcome", "BattleCore", "resolve_battle",
           "special_chance", "dodge_chance"]
