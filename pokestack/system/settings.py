from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from pokestack.battle.session import PadPolicy, ROSTER_SIZE
from pokestack.core.logging import logger

SETTINGS_FILENAME = ".pokestack_settings.json"
LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    log_level: str = "WARN"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Per-attack battle log
    seed: Optional[int] = None     # Fixed random seed for reproducible runs
    pad_policy: str = PadPolicy.NONE.value
    roster_size: int = ROSTER_SIZE

    def normalize(self):
        if self.log_level not in LOG_LEVELS:
            self.log_level = "WARN"
        if self.pad_policy not in {p.value for p in PadPolicy}:
            self.pad_policy = PadPolicy.NONE.value
        try:
            self.roster_size = max(1, min(int(self.roster_size), ROSTER_SIZE))
        except (TypeError, ValueError):
            self.roster_size = ROSTER_SIZE
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None

    @property
    def pad(self) -> PadPolicy:
        return PadPolicy(self.pad_policy)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_logging(self):
        """Push the configured level to the global logger (debug forces DEBUG)."""
        lvl = "DEBUG" if self.data.debug else self.data.log_level
        logger.set_level(lvl)  # type: ignore[arg-type]
