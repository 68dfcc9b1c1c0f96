from __future__ import annotations
from dataclasses import dataclass, asdict, fields, replace
from typing import Dict, Mapping

from pokestack.core.errors import ValidationError

ITEMS = ("pokeball", "greatball", "revive", "lure")

@dataclass
class Bag:
    """Item counters carried by a trainer (or offered by a pokestop)."""
    pokeball: int = 0
    greatball: int = 0
    revive: int = 0
    lure: int = 0

    def __post_init__(self):
        for f in fields(self):
            v = getattr(self, f.name)
            if int(v) != v or v < 0:
                raise ValidationError(f"Bag counter {f.name} must be a non-negative integer, got {v!r}")
            setattr(self, f.name, int(v))

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "Bag":
        unknown = set(data) - set(ITEMS)
        if unknown:
            raise ValidationError(f"Unknown bag items: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def copy(self) -> "Bag":
        return replace(self)

    def add(self, other: "Bag") -> "Bag":
        return Bag(**{k: getattr(self, k) + getattr(other, k) for k in ITEMS})

    def drop(self, items: Mapping[str, int]) -> "Bag":
        """Decrement counters, flooring each at zero."""
        out = self.copy()
        for k, qty in items.items():
            if k not in ITEMS:
                raise ValidationError(f"Unknown bag item: {k}")
            setattr(out, k, max(0, getattr(out, k) - int(qty)))
        return out

__all__ = ["Bag", "ITEMS"]
