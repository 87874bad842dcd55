"""Reaction kinetics maps."""

from __future__ import annotations

from adiabatic_batch.kinetics.base import AbstractKineticsMap
from adiabatic_batch.kinetics.mass_action import ElementaryReaction, MassActionKineticsMap
from adiabatic_batch.kinetics.stateful import StatefulKineticsAdapter, StatefulKineticsMap

__all__ = [
    "AbstractKineticsMap",
    "ElementaryReaction",
    "MassActionKineticsMap",
    "StatefulKineticsAdapter",
    "StatefulKineticsMap",
]
