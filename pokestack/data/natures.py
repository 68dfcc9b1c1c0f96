from __future__ import annotations
from typing import Dict, Tuple

NatureMults = Tuple[float, float, float, float, float]

# Multipliers for Atk, Def, SpAtk, SpDef, Spd (HP is never affected)
NATURES: Dict[str, NatureMults] = {
    "Hardy":   (1.0, 1.0, 1.0, 1.0, 1.0),
    "Lonely":  (1.1, 0.9, 1.0, 1.0, 1.0),
    "Adamant": (1.1, 1.0, 0.9, 1.0, 1.0),
    "Naughty": (1.1, 1.0, 1.0, 0.9, 1.0),
    "Brave":   (1.1, 1.0, 1.0, 1.0, 0.9),
    "Bold":    (0.9, 1.1, 1.0, 1.0, 1.0),
    "Docile":  (1.0, 1.0, 1.0, 1.0, 1.0),
    "Impish":  (1.0, 1.1, 0.9, 1.0, 1.0),
    "Lax":     (1.0, 1.1, 1.0, 0.9, 1.0),
    "Relaxed": (1.0, 1.1, 1.0, 1.0, 0.9),
    "Modest":  (0.9, 1.0, 1.1, 1.0, 1.0),
    "Mild":    (1.0, 0.9, 1.1, 1.0, 1.0),
    "Bashful": (1.0, 1.0, 1.0, 1.0, 1.0),
    "Rash":    (1.0, 1.0, 1.1, 0.9, 1.0),
    "Quiet":   (1.0, 1.0, 1.1, 1.0, 0.9),
    "Calm":    (0.9, 1.0, 1.0, 1.1, 1.0),
    "Gentle":  (1.0, 0.9, 1.0, 1.1, 1.0),
    "Careful": (1.0, 1.0, 0.9, 1.1, 1.0),
    "Quirky":  (1.0, 1.0, 1.0, 1.0, 1.0),
    "Sassy":   (1.0, 1.0, 1.0, 1.1, 0.9),
    "Timid":   (0.9, 1.0, 1.0, 1.0, 1.1),
    "Hasty":   (1.0, 0.9, 1.0, 1.0, 1.1),
    "Jolly":   (1.0, 1.0, 0.9, 1.0, 1.1),
    "Naive":   (1.0, 1.0, 1.0, 0.9, 1.1),
    "Serious": (1.0, 1.0, 1.0, 1.0, 1.0),
}

NATURE_NAMES: Tuple[str, ...] = tuple(NATURES)

def nature_multipliers(nature: str | None) -> NatureMults:
    if not nature:
        return NATURES["Hardy"]
    return NATURES.get(nature.capitalize(), NATURES["Hardy"])
