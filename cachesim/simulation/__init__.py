"""Simulation package.

Exposes the Simulation class at `cachesim.simulation` so callers can use
`from cachesim.simulation import Simulation`.
"""
from .simulation import SCENARIOS, Simulation

__all__ = ["SCENARIOS", "Simulation"]
