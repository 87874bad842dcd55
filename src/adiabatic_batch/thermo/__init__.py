"""Thermodynamic property maps."""

from __future__ import annotations

from adiabatic_batch.thermo.base import AbstractThermodynamicMap
from adiabatic_batch.thermo.nasa import NasaSpecies, NasaThermodynamicMap

__all__ = [
    "AbstractThermodynamicMap",
    "NasaSpecies",
    "NasaThermodynamicMap",
]
