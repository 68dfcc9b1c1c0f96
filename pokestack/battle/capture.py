"""Capture mechanics: a bounded volley of poke balls then great balls.

Each trial rolls against the creature's level; a ball is spent per trial while
any are left. Once a trial succeeds the capture sticks.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pokestack.core.logging import logger
from pokestack.core.rng import RandomSource, default_rng
from pokestack.world.bag import Bag

POKEBALL_TRIES = 10
GREATBALL_TRIES = 2

# Level at which each ball type stops working
BALL_LEVEL_DIVISORS = {
    'pokeball': 120,
    'greatball': 220,
}

@dataclass
class CaptureResult:
    captured: bool
    bag: Bag
    pokeballs_used: int = 0
    greatballs_used: int = 0


def capture_chance(level: int, ball: str) -> float:
    p = 1 - level / BALL_LEVEL_DIVISORS[ball]
    return max(0.0, min(1.0, p))


def attempt_capture(bag: Bag, level: int, rng: Optional[RandomSource] = None, *,
                    keep_throwing: bool = True) -> CaptureResult:
    """Throw balls at a creature of ``level``; the input bag is left untouched.

    With ``keep_throwing`` the volley goes on after a success until the trial
    count or the balls run out; without it no ball is spent once captured.
    """
    rng = rng or default_rng()
    out = bag.copy()
    captured = False
    used = {'pokeball': 0, 'greatball': 0}
    for ball, tries in (('pokeball', POKEBALL_TRIES), ('greatball', GREATBALL_TRIES)):
        chance = capture_chance(level, ball)
        for _ in range(tries):
            success = rng.bernoulli(chance)
            if getattr(out, ball) <= 0:
                continue
            if captured and not keep_throwing:
                continue
            setattr(out, ball, getattr(out, ball) - 1)
            used[ball] += 1
            if not captured:
                captured = success
    logger.info("CaptureAttempt", level=level, captured=captured,
                pokeballs=used['pokeball'], greatballs=used['greatball'])
    return CaptureResult(captured, out, used['pokeball'], used['greatball'])

__all__ = ["attempt_capture", "capture_chance", "CaptureResult", "POKEBALL_TRIES", "GREATBALL_TRIES"]
