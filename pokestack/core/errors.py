"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokestackError(Exception):
    pass

class DataLoadError(PokestackError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class UnknownSpecies(PokestackError, LookupError):
    def __init__(self, identifier: int | str):
        super().__init__(f"Unknown species {identifier!r}")
        self.identifier = identifier

class InvalidRosterState(PokestackError):
    pass

class ValidationError(PokestackError):
    pass
