"""World service: runs the capture and battle engines for trainers and
applies the outcomes (ownership, garrisons, points, bags, locations).

Every operation works on the in-memory :class:`~pokestack.world.actors.World`
handed to the service; callers serialize operations for a given trainer.
"""
from __future__ import annotations
from typing import Dict, List, Literal, Mapping, Optional, Tuple, TypedDict

from pokestack.battle.capture import attempt_capture
from pokestack.battle.core import Creature
from pokestack.battle.factory import create_creature
from pokestack.battle.session import PadPolicy, ROSTER_SIZE, Team, build_team, fight
from pokestack.battle.stats import MAX_LEVEL, calc_all_stats
from pokestack.core.errors import ValidationError
from pokestack.core.logging import logger
from pokestack.core.rng import RandomSource, default_rng
from pokestack.data.natures import nature_multipliers
from pokestack.data.species import SpeciesProvider, default_species
from .actors import PokeStop, Stadium, Trainer, World
from .bag import ITEMS, Bag
from .geo import MAX_MOVE_DIST_SQ, Location, Offset, offset_dist_sq, offset_location, random_location

LURE_RADIUS_MT = 100000
LURE_SPAWN_COUNT = 20
UPKEEP_COUNT = 10

class CaptureReport(TypedDict):
    captured: bool
    bag: Bag

class BattleReport(TypedDict):
    outcome: Literal["VICTORY","DEFEAT"]
    won: List[Creature]
    lost: List[Creature]
    attacks: int

class WorldService:
    def __init__(self, world: World, rng: Optional[RandomSource] = None,
                 species: Optional[SpeciesProvider] = None, roster_size: int = ROSTER_SIZE):
        self.world = world
        self.rng = rng or default_rng()
        self.species = species
        self.roster_size = roster_size

    # ---------------- Lookups -----------------
    def _trainer(self, trainer_id: str) -> Trainer:
        try:
            return self.world.trainers[trainer_id]
        except KeyError:
            raise ValidationError(f"Trainer {trainer_id} not found") from None

    def _stadium(self, stadium_id: str) -> Stadium:
        try:
            return self.world.stadiums[stadium_id]
        except KeyError:
            raise ValidationError(f"Stadium {stadium_id} not found") from None

    def _pokestop(self, stop_id: str) -> PokeStop:
        stop = self.world.pokestops.get(stop_id) or self.world.stadiums.get(stop_id)
        if stop is None:
            raise ValidationError(f"Pokestop {stop_id} not found")
        return stop

    def _creatures(self, ids: List[str]) -> List[Creature]:
        return [self.world.creatures[i] for i in ids if i in self.world.creatures]

    def _fighters(self, trainer: Trainer, pad: PadPolicy, *, challenger: bool = False) -> Team:
        # garrisoned creatures stay home
        available = [c for c in self._creatures(trainer.creature_ids) if c.stadium_id is None]
        if challenger and not available:
            # padding only tops up a real roster
            raise ValidationError("Trainer has no creature available to fight")
        return build_team(available, pad, self.roster_size, rng=self.rng, species=self.species)

    # ---------------- Capture -----------------
    def capture(self, trainer_id: str, creature_id: str, *, keep_throwing: bool = True) -> CaptureReport:
        trainer = self._trainer(trainer_id)
        creature = self.world.creatures.get(creature_id)
        if creature is None:
            raise ValidationError(f"Creature {creature_id} not found")
        if not creature.is_free:
            raise ValidationError("Can't capture a creature that is already owned")
        res = attempt_capture(trainer.bag, creature.level, self.rng, keep_throwing=keep_throwing)
        trainer.bag = res.bag
        if res.captured:
            creature.owner_id = trainer.id
            creature.loc = trainer.loc
            if creature.creature_id not in trainer.creature_ids:
                trainer.creature_ids.append(creature.creature_id)
        logger.info("CaptureApplied", trainer=trainer.id, creature=creature_id, captured=res.captured)
        return {"captured": res.captured, "bag": trainer.bag}

    # ---------------- Battles -----------------
    def _own(self, trainer: Trainer, team: Team) -> List[Creature]:
        # padded helpers never join the trainer
        return [c for c in team if c.creature_id in trainer.creature_ids]

    def _lose(self, user: Trainer, fighters: List[Creature]):
        for c in fighters:
            user.creature_ids.remove(c.creature_id)
            c.owner_id = None
            c.loc = random_location(rng=self.rng)

    def _register(self, team: Team):
        # padded members are new to the world
        for c in team:
            self.world.creatures.setdefault(c.creature_id, c)

    def battle_trainer(self, user_id: str, trainer_id: str, pad: PadPolicy = PadPolicy.NONE) -> BattleReport:
        user = self._trainer(user_id)
        rival = self._trainer(trainer_id)
        ours = self._fighters(user, pad, challenger=True)
        theirs = self._fighters(rival, pad)
        outcome = fight(ours, theirs, self.rng)
        logger.info("TrainerBattle", user=user.id, trainer=rival.id, victory=outcome.offense_won)
        if outcome.offense_won:
            self._register(theirs)
            for c in theirs:
                if c.creature_id in rival.creature_ids:
                    rival.creature_ids.remove(c.creature_id)
                if c.creature_id not in user.creature_ids:
                    user.creature_ids.append(c.creature_id)
                c.owner_id = user.id
            return {"outcome": "VICTORY", "won": list(theirs), "lost": [], "attacks": outcome.attacks}
        lost = self._own(user, ours)
        self._lose(user, lost)
        return {"outcome": "DEFEAT", "won": [], "lost": lost, "attacks": outcome.attacks}

    def battle_stadium(self, user_id: str, stadium_id: str, pad: PadPolicy = PadPolicy.NONE) -> BattleReport:
        """Challenge a stadium; the winner's fighters take over its garrison."""
        user = self._trainer(user_id)
        stadium = self._stadium(stadium_id)
        if stadium.owner_id == user.id:
            raise ValidationError("Trainer already holds this stadium")
        ours = self._fighters(user, pad, challenger=True)
        garrison = self._creatures(stadium.defending_ids)
        if garrison or pad == PadPolicy.GENERATE_RANDOM:
            theirs = build_team(garrison, pad, self.roster_size, rng=self.rng, species=self.species)
            outcome = fight(ours, theirs, self.rng)
            won, attacks = outcome.offense_won, outcome.attacks
        else:
            theirs, won, attacks = Team([], self.roster_size), True, 0
        logger.info("StadiumBattle", user=user.id, stadium=stadium.id, victory=won)
        if not won:
            lost = self._own(user, ours)
            self._lose(user, lost)
            return {"outcome": "DEFEAT", "won": [], "lost": lost, "attacks": attacks}

        self._register(theirs)
        if stadium.owner_id and stadium.owner_id in self.world.trainers:
            previous = self.world.trainers[stadium.owner_id]
            if stadium.id in previous.stadium_ids:
                previous.stadium_ids.remove(stadium.id)
            previous.creature_ids = [i for i in previous.creature_ids if i not in stadium.defending_ids]
        stadium.owner_id = user.id
        defenders = self._own(user, ours)
        stadium.defending_ids = [c.creature_id for c in defenders]
        for c in defenders:
            c.stadium_id = stadium.id
            c.owner_id = None
        for c in theirs:
            c.stadium_id = None
            c.owner_id = user.id
            if c.creature_id not in user.creature_ids:
                user.creature_ids.append(c.creature_id)
        if stadium.id not in user.stadium_ids:
            user.stadium_ids.append(stadium.id)
        user.points += stadium.points
        return {"outcome": "VICTORY", "won": list(theirs), "lost": [], "attacks": attacks}

    # ---------------- Items & movement -----------------
    def collect(self, trainer_id: str, stop_id: str) -> Bag:
        trainer = self._trainer(trainer_id)
        stop = self._pokestop(stop_id)
        trainer.bag = trainer.bag.add(stop.items)
        logger.debug("ItemsCollected", trainer=trainer.id, stop=stop.id)
        return trainer.bag

    def lure(self, trainer_id: str, stop_id: str, count: int = LURE_SPAWN_COUNT) -> List[Creature]:
        """Spawn wild creatures around a pokestop; an empty lure counter never fails."""
        trainer = self._trainer(trainer_id)
        stop = self._pokestop(stop_id)
        trainer.bag = trainer.bag.drop({"lure": 1})
        spawned = [create_creature(loc=random_location(stop.loc, LURE_RADIUS_MT, self.rng),
                                   rng=self.rng, species=self.species)
                   for _ in range(count)]
        self.world.add_creatures(spawned)
        logger.debug("LureSpawned", stop=stop.id, count=count)
        return spawned

    def drop(self, trainer_id: str, items: Mapping[str, int]) -> Bag:
        trainer = self._trainer(trainer_id)
        trainer.bag = trainer.bag.drop(items)
        return trainer.bag

    def move(self, trainer_id: str, offset: Offset) -> Location:
        if offset_dist_sq(offset) > MAX_MOVE_DIST_SQ:
            raise ValidationError("Cannot move more than 50km at a time")
        trainer = self._trainer(trainer_id)
        trainer.loc = offset_location(trainer.loc, offset)
        for c in self._creatures(trainer.creature_ids):
            c.loc = trainer.loc
        for sid in trainer.stadium_ids:
            if sid in self.world.stadiums:
                self.world.stadiums[sid].loc = trainer.loc
        return trainer.loc

    # ---------------- World upkeep -----------------
    def improve(self, count: int = UPKEEP_COUNT) -> Tuple[List[PokeStop], str]:
        """Add one unit of a single random item to ``count`` sampled pokestops."""
        item = self.rng.choice(ITEMS)
        improved = self.rng.sample(list(self.world.pokestops.values()), count)
        for stop in improved:
            stop.items = stop.items.add(Bag(**{item: 1}))
        logger.debug("PokestopsImproved", count=len(improved), item=item)
        return improved, item

    def level_up(self, count: int = UPKEEP_COUNT) -> List[Creature]:
        """Raise ``count`` sampled creatures below the level cap by one level."""
        species = self.species or default_species()
        eligible = [c for c in self.world.creatures.values() if c.level < MAX_LEVEL]
        leveled = self.rng.sample(eligible, count)
        for c in leveled:
            c.level += 1
            base = species.base_stats(c.species_id, c.form)
            c.stats = calc_all_stats(base, c.ivs, c.evs, c.level, nature_multipliers(c.nature))
            c.heal()
        logger.debug("CreaturesLeveledUp", count=len(leveled))
        return leveled

    def nuke(self, count: int = UPKEEP_COUNT) -> List[Creature]:
        """Remove ``count`` sampled free creatures from the world."""
        free = [c for c in self.world.creatures.values() if c.is_free]
        removed = self.rng.sample(free, count)
        for c in removed:
            del self.world.creatures[c.creature_id]
        logger.info("CreaturesRemoved", count=len(removed))
        return removed

    def census(self) -> Dict[str, int]:
        return {
            "creatures": len(self.world.creatures),
            "free": sum(1 for c in self.world.creatures.values() if c.is_free),
            "trainers": len(self.world.trainers),
            "stadiums": len(self.world.stadiums),
            "pokestops": len(self.world.pokestops),
        }

__all__ = ["WorldService", "CaptureReport", "BattleReport"]
