"""State reconstruction and temperature/pressure closure.

The closure recovers (T, P) for a closed ideal-gas mixture of known
composition and mass internal energy U by successive substitution:

    H = U + P / (c_tot * W)            mass enthalpy consistent with P
    T = h^-1(H * W, x)                 enthalpy inversion, seeded with previous T
    P = c_tot * R * T                  ideal-gas law

until the relative pressure change falls below the tolerance or the iteration
budget is spent.
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from adiabatic_batch.exceptions import DegenerateStateError, ValidationError
from adiabatic_batch.state import ClosureResult, ReconstructedState
from adiabatic_batch.thermo.base import AbstractThermodynamicMap
from adiabatic_batch.utils.constants import R_J_KMOL

logger = logging.getLogger(__name__)


def reconstruct_state(
    thermo: AbstractThermodynamicMap,
    concentrations: npt.ArrayLike,
) -> ReconstructedState:
    """Clip raw concentrations and derive mole fractions and molecular weight.

    Args:
        thermo: Thermodynamic map (species count and molecular weights).
        concentrations: Raw integrator state (kmol/m^3), shape (N,). Small
            negative values from integrator overshoot are clipped to zero.
            The input is never modified.

    Returns:
        Reconstructed composition.

    Raises:
        ValidationError: On wrong shape or non-finite entries.
        DegenerateStateError: If the clipped total concentration is not positive.
    """
    c = np.array(concentrations, dtype=float)
    n_species = thermo.number_of_species
    if c.shape != (n_species,):
        raise ValidationError(f"Expected concentrations of shape ({n_species},), got {c.shape}")
    if not np.all(np.isfinite(c)):
        raise ValidationError(f"Concentrations must be finite, got {c}")

    c = np.maximum(c, 0.0)
    total = float(c.sum())
    if total <= 0.0:
        raise DegenerateStateError(
            "Total concentration is zero after clipping; mole fractions are undefined"
        )

    x = c / total
    mw = thermo.molecular_weight_from_mole_fractions(x)
    return ReconstructedState(
        concentrations=c,
        total_concentration=total,
        mole_fractions=x,
        molecular_weight=mw,
    )


def solve_closure(
    thermo: AbstractThermodynamicMap,
    reconstructed: ReconstructedState,
    internal_energy: float,
    initial_temperature: float,
    initial_pressure: float,
    max_iterations: int = 10,
    tolerance: float = 1e-4,
) -> ClosureResult:
    """Recover temperature and pressure from the fixed mass internal energy.

    Args:
        thermo: Thermodynamic map used for the enthalpy inversion.
        reconstructed: Composition from :func:`reconstruct_state`.
        internal_energy: Mass internal energy U (J/kg).
        initial_temperature: Seed temperature (K).
        initial_pressure: Seed pressure (Pa).
        max_iterations: Iteration budget.
        tolerance: Relative pressure change for convergence.

    Returns:
        Closure result. ``converged`` is False if the budget was exhausted;
        the last computed (T, P) is returned in that case.
    """
    c_tot = reconstructed.total_concentration
    mw = reconstructed.molecular_weight
    x = reconstructed.mole_fractions

    pressure = initial_pressure
    temperature = initial_temperature
    residual = float("inf")
    iterations = 0

    for iterations in range(1, max_iterations + 1):
        p_old = pressure
        enthalpy = internal_energy + pressure / (c_tot * mw)
        temperature = thermo.temperature_from_enthalpy_and_mole_fractions(
            enthalpy * mw, pressure, x, temperature
        )
        pressure = c_tot * R_J_KMOL * temperature
        residual = abs(pressure - p_old) / pressure
        if residual < tolerance:
            return ClosureResult(temperature, pressure, iterations, True, residual)

    return ClosureResult(temperature, pressure, iterations, False, residual)


__all__ = ["reconstruct_state", "solve_closure"]
