#!/usr/bin/env python3
"""
pokestack - creature generation, capture and battle simulator.

Thin wrapper around :mod:`pokestack.cli`.

To run: python main.py battle --seed 7
"""

from pokestack.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
