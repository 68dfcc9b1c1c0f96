"""Individual values, effort values and stat derivation.

Implements the generation II/III style stat model:
- IVs drawn per stat in [0,15]; the HP IV is assembled from the low bits of
  the other draws.
- EVs drawn from a level scaled chi-square and shrunk to the 510 total cap.
- Stats derived with the generation III formula (nature applies to non-HP).
"""
from __future__ import annotations
import math
from dataclasses import dataclass, astuple
from typing import Iterable, List, Optional, Sequence

from pokestack.core.rng import RandomSource, default_rng

MIN_LEVEL = 1
MAX_LEVEL = 100
MAX_IV = 15
MAX_EV = 255
MAX_EV_TOTAL = 510

@dataclass(frozen=True)
class StatBlock:
    """Six values in the fixed order HP, Atk, Def, SpAtk, SpDef, Spd."""
    hp: int
    atk: int
    def_: int
    sp_atk: int
    sp_def: int
    spd: int

    @classmethod
    def of(cls, values: Iterable[int]) -> "StatBlock":
        vals = list(values)
        if len(vals) != 6:
            raise ValueError(f"expected 6 values, got {len(vals)}")
        return cls(*vals)

    def as_list(self) -> List[int]:
        return list(astuple(self))

    def total(self) -> int:
        return sum(astuple(self))

    def to_dict(self) -> dict:
        return {"HP": self.hp, "Atk": self.atk, "Def": self.def_,
                "SpAtk": self.sp_atk, "SpDef": self.sp_def, "Spd": self.spd}


def clamp_level(level: int) -> int:
    try:
        return max(MIN_LEVEL, min(int(level), MAX_LEVEL))
    except (TypeError, ValueError):
        return MIN_LEVEL

def limit(v: float, lo: float = -math.inf, hi: float = math.inf) -> int:
    """Clamp then truncate toward zero."""
    if v < lo:
        v = lo
    if v > hi:
        v = hi
    return math.trunc(v)

# ---------------- Individual values -----------------

def hp_iv_from(values: Sequence[int]) -> int:
    """HP IV: bit i is the low bit of the i-th drawn IV."""
    hp = 0
    for i, v in enumerate(values[:4]):
        hp |= (int(v) & 1) << i
    return hp

def assemble_ivs(values: Sequence[int]) -> StatBlock:
    v0, v1, v2, v3 = (int(v) for v in values[:4])
    # v3 feeds both Def and SpDef
    return StatBlock(hp_iv_from(values), v0, v1, v3, v3, v2)

def random_ivs(rng: Optional[RandomSource] = None) -> StatBlock:
    rng = rng or default_rng()
    drawn = [limit(rng.chisquare(3) * 2, hi=MAX_IV) for _ in range(4)]
    return assemble_ivs(drawn)

# ---------------- Effort values -----------------

def shrink_evs(evs: Sequence[float], cap: int = MAX_EV_TOTAL) -> List[int]:
    """Proportionally shrink EVs until their sum fits the cap.

    Each pass removes the excess spread evenly over the positive entries; new
    zeros change the divisor, hence the loop.
    """
    out = [limit(v, lo=0) for v in evs]
    while sum(out) > cap:
        positive = sum(1 for v in out if v > 0)
        diff = (sum(out) - cap) / positive
        out = [limit(v - diff, lo=0) for v in out]
    return out

def random_evs(level: int, rng: Optional[RandomSource] = None) -> StatBlock:
    rng = rng or default_rng()
    scale = rng.chisquare(1) * math.pow(level, 1.4)
    raw = [limit(math.sqrt(rng.chisquare(3) * 40 * scale), hi=MAX_EV) for _ in range(6)]
    return StatBlock.of(shrink_evs(raw))

# ---------------- Stat derivation -----------------

def calc_stat(base: int, iv: int, ev: int, level: int, nature_mult: float = 1.0, *, hp: bool = False) -> int:
    core = math.floor(((2 * base + iv + math.floor(ev / 4)) * level) / 100)
    if hp:
        value = core + level + 10
    else:
        value = math.floor((core + 5) * nature_mult)
    return max(1, int(value))

def calc_all_stats(base: Sequence[int], ivs: StatBlock, evs: StatBlock, level: int,
                   nature_mults: Sequence[float]) -> StatBlock:
    b = list(base)
    iv = ivs.as_list()
    ev = evs.as_list()
    stats = [calc_stat(b[0], iv[0], ev[0], level, hp=True)]
    for i in range(1, 6):
        stats.append(calc_stat(b[i], iv[i], ev[i], level, nature_mults[i - 1]))
    return StatBlock.of(stats)

__all__ = [
    "StatBlock", "clamp_level", "hp_iv_from", "assemble_ivs", "random_ivs",
    "shrink_evs", "random_evs", "calc_stat", "calc_all_stats",
    "MIN_LEVEL", "MAX_LEVEL", "MAX_IV", "MAX_EV", "MAX_EV_TOTAL",
]
