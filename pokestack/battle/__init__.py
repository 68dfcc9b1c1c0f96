"""
Battle package: creature model, stat generation, capture and battle engines.
- stats.py (IVs, EVs, stat formulas)
- factory.py (creature generation)
- capture.py (ball volleys)
- core.py (Creature, attack resolution, team battle loop)
- session.py (teams, roster size, padding policy)
"""
from .capture import attempt_capture
from .core import Creature, resolve_battle
from .factory import create_creature
__all__ = ["attempt_capture", "Creature", "resolve_battle", "create_creature"]
