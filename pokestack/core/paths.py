"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokestack/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
DATA = PACKAGE / "data"
SPECIES_TABLE = DATA / "species.json"
