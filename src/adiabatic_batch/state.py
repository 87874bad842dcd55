"""Immutable value types passed between reconstruction, closure and kinetics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy.typing as npt


@dataclass(frozen=True)
class ThermodynamicState:
    """Temperature (K) and pressure (Pa) of the mixture."""

    temperature: float
    pressure: float


@dataclass(frozen=True)
class ReconstructedState:
    """Physically valid composition derived from raw integrator concentrations.

    Attributes:
        concentrations: Clipped concentrations (kmol/m^3), shape (N,).
        total_concentration: Sum of clipped concentrations (kmol/m^3).
        mole_fractions: Normalized composition, shape (N,).
        molecular_weight: Mixture molecular weight (kg/kmol).
    """

    concentrations: npt.NDArray[Any]
    total_concentration: float
    mole_fractions: npt.NDArray[Any]
    molecular_weight: float


@dataclass(frozen=True)
class ClosureResult:
    """Outcome of the temperature/pressure fixed-point iteration.

    Attributes:
        temperature: Last computed temperature (K).
        pressure: Last computed pressure (Pa).
        iterations: Number of substitutions performed.
        converged: True if the relative pressure change met the tolerance.
        residual: Last relative pressure change |P - P_old| / P.
    """

    temperature: float
    pressure: float
    iterations: int
    converged: bool
    residual: float

    @property
    def state(self) -> ThermodynamicState:
        return ThermodynamicState(self.temperature, self.pressure)


@dataclass(frozen=True)
class ClosedState:
    """Composition plus the self-consistent thermodynamic state."""

    reconstructed: ReconstructedState
    closure: ClosureResult

    @property
    def thermo_state(self) -> ThermodynamicState:
        return self.closure.state

    @property
    def temperature(self) -> float:
        return self.closure.temperature

    @property
    def pressure(self) -> float:
        return self.closure.pressure

    @property
    def concentrations(self) -> npt.NDArray[Any]:
        return self.reconstructed.concentrations

    @property
    def mole_fractions(self) -> npt.NDArray[Any]:
        return self.reconstructed.mole_fractions

    @property
    def total_concentration(self) -> float:
        return self.reconstructed.total_concentration

    @property
    def molecular_weight(self) -> float:
        return self.reconstructed.molecular_weight


__all__ = ["ThermodynamicState", "ReconstructedState", "ClosureResult", "ClosedState"]
