"""Ideal-gas thermodynamics from NASA 7-coefficient polynomials."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt
from scipy.optimize import newton

from adiabatic_batch.exceptions import SolverError, ValidationError
from adiabatic_batch.thermo.base import AbstractThermodynamicMap
from adiabatic_batch.utils.constants import R_J_KMOL
from adiabatic_batch.utils.registry import THERMO_REGISTRY

logger = logging.getLogger(__name__)


@dataclass
class NasaSpecies:
    """Species thermodynamic data in CHEMKIN (NASA 7-coefficient) form.

    ``low_coeffs`` apply on [t_low, t_mid], ``high_coeffs`` on [t_mid, t_high].
    Each holds a1..a7 such that

        cp/R  = a1 + a2 T + a3 T^2 + a4 T^3 + a5 T^4
        h/RT  = a1 + a2 T/2 + a3 T^2/3 + a4 T^3/4 + a5 T^4/5 + a6/T
        s/R   = a1 ln T + a2 T + a3 T^2/2 + a4 T^3/3 + a5 T^4/4 + a7
    """

    name: str
    molecular_weight: float
    low_coeffs: list[float]
    high_coeffs: list[float]
    t_low: float = 200.0
    t_mid: float = 1000.0
    t_high: float = 3500.0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.low_coeffs) != 7 or len(self.high_coeffs) != 7:
            raise ValidationError(f"Species {self.name}: NASA polynomials need 7 coefficients")
        if self.molecular_weight <= 0:
            raise ValidationError(f"Species {self.name}: molecular weight must be positive")
        if not self.t_low < self.t_mid < self.t_high:
            raise ValidationError(f"Species {self.name}: need t_low < t_mid < t_high")


@THERMO_REGISTRY.register("nasa7")
class NasaThermodynamicMap(AbstractThermodynamicMap):
    """Thermodynamic map for an ideal-gas mixture described by NASA polynomials.

    Temperatures outside [t_low, t_high] are evaluated by extrapolating the
    nearest polynomial; no error is raised.

    Attributes:
        species: Species data, in mechanism order.
        max_newton_iterations: Iteration cap for the enthalpy inversion.
        newton_tolerance: Absolute temperature tolerance (K) for the inversion.
    """

    def __init__(
        self,
        name: str,
        species: list[NasaSpecies],
        max_newton_iterations: int = 100,
        newton_tolerance: float = 1e-6,
    ):
        if not species:
            raise ValidationError("At least one species is required")
        names = [sp.name for sp in species]
        if len(set(names)) != len(names):
            raise ValidationError(f"Duplicate species names: {names}")

        super().__init__(name, names, [sp.molecular_weight for sp in species])
        self.species = list(species)
        self.max_newton_iterations = max_newton_iterations
        self.newton_tolerance = newton_tolerance

        self._low = np.array([sp.low_coeffs for sp in species], dtype=float)  # (N, 7)
        self._high = np.array([sp.high_coeffs for sp in species], dtype=float)
        self._t_mid = np.array([sp.t_mid for sp in species], dtype=float)

    def _coefficients(self, temperature: float) -> npt.NDArray[Any]:
        """Select the polynomial range for each species, shape (N, 7)."""
        use_high = (temperature > self._t_mid)[:, None]
        return np.where(use_high, self._high, self._low)

    def species_cp_r(self, temperature: float) -> npt.NDArray[Any]:
        """Dimensionless heat capacities cp/R, shape (N,)."""
        a = self._coefficients(temperature)
        T = temperature
        return a[:, 0] + a[:, 1] * T + a[:, 2] * T**2 + a[:, 3] * T**3 + a[:, 4] * T**4

    def species_enthalpies_rt(self, temperature: float) -> npt.NDArray[Any]:
        """Dimensionless enthalpies h/(R T), shape (N,)."""
        a = self._coefficients(temperature)
        T = temperature
        return (
            a[:, 0]
            + a[:, 1] * T / 2.0
            + a[:, 2] * T**2 / 3.0
            + a[:, 3] * T**3 / 4.0
            + a[:, 4] * T**4 / 5.0
            + a[:, 5] / T
        )

    def species_entropies_r(self, temperature: float) -> npt.NDArray[Any]:
        """Dimensionless standard entropies s/R, shape (N,)."""
        a = self._coefficients(temperature)
        T = temperature
        return (
            a[:, 0] * np.log(T)
            + a[:, 1] * T
            + a[:, 2] * T**2 / 2.0
            + a[:, 3] * T**3 / 3.0
            + a[:, 4] * T**4 / 4.0
            + a[:, 6]
        )

    def standard_gibbs_rt(self, temperature: float) -> npt.NDArray[Any]:
        return self.species_enthalpies_rt(temperature) - self.species_entropies_r(temperature)

    def mixture_cp_molar(self, temperature: float, mole_fractions: npt.NDArray[Any]) -> float:
        """Mixture molar heat capacity (J/(kmol*K))."""
        return float(R_J_KMOL * np.dot(mole_fractions, self.species_cp_r(temperature)))

    def mixture_enthalpy_molar(self, temperature: float, mole_fractions: npt.NDArray[Any]) -> float:
        h_rt = self.species_enthalpies_rt(temperature)
        return float(R_J_KMOL * temperature * np.dot(mole_fractions, h_rt))

    def temperature_from_enthalpy_and_mole_fractions(
        self,
        enthalpy: float,
        pressure: float,
        mole_fractions: npt.NDArray[Any],
        temperature_guess: float,
    ) -> float:
        """Newton inversion of h(T) = enthalpy with cp(T) as derivative.

        Raises:
            SolverError: If the iteration fails or leaves the physical range.
        """
        x = np.asarray(mole_fractions, dtype=float)

        def residual(T: float) -> float:
            return self.mixture_enthalpy_molar(T, x) - enthalpy

        def derivative(T: float) -> float:
            return self.mixture_cp_molar(T, x)

        try:
            temperature = newton(
                residual,
                temperature_guess,
                fprime=derivative,
                tol=self.newton_tolerance,
                maxiter=self.max_newton_iterations,
            )
        except (RuntimeError, OverflowError, ZeroDivisionError) as exc:
            raise SolverError(
                f"Temperature inversion failed from guess T={temperature_guess:.2f} K: {exc}"
            ) from exc

        temperature = float(temperature)
        if not np.isfinite(temperature) or temperature <= 0.0:
            raise SolverError(f"Temperature inversion produced a non-physical value: {temperature}")
        return temperature

    def to_dict(self) -> dict[str, Any]:
        config = super().to_dict()
        config["species"] = [
            {
                "name": sp.name,
                "molecular_weight": sp.molecular_weight,
                "low_coeffs": list(sp.low_coeffs),
                "high_coeffs": list(sp.high_coeffs),
                "t_low": sp.t_low,
                "t_mid": sp.t_mid,
                "t_high": sp.t_high,
            }
            for sp in self.species
        ]
        return config

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> NasaThermodynamicMap:
        """Deserialize NASA thermodynamic map from configuration.

        Args:
            config: Configuration dictionary with ``name`` and ``species``.

        Returns:
            NasaThermodynamicMap instance.
        """
        return cls(
            name=config["name"],
            species=[NasaSpecies(**sp) for sp in config["species"]],
            max_newton_iterations=config.get("max_newton_iterations", 100),
            newton_tolerance=config.get("newton_tolerance", 1e-6),
        )


__all__ = ["NasaSpecies", "NasaThermodynamicMap"]
