"""Adiabatic batch reactor at constant mass internal energy."""

from __future__ import annotations

import logging
import math
import warnings
from typing import Any

import numpy as np
import numpy.typing as npt

from adiabatic_batch.closure import reconstruct_state, solve_closure
from adiabatic_batch.exceptions import (
    ClosureNonConvergenceWarning,
    ConfigurationError,
    SolverError,
    UninitializedConfigurationError,
    ValidationError,
)
from adiabatic_batch.kinetics.base import AbstractKineticsMap
from adiabatic_batch.reactors.base import AbstractODESystem
from adiabatic_batch.state import ClosedState, ClosureResult
from adiabatic_batch.thermo.base import AbstractThermodynamicMap
from adiabatic_batch.utils.config import ReactorConfig
from adiabatic_batch.utils.constants import R_J_KMOL
from adiabatic_batch.utils.registry import REACTOR_REGISTRY

logger = logging.getLogger(__name__)

NON_CONVERGENCE_POLICIES = ("warn", "ignore", "raise")


def _require_positive(value: float, label: str) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(f"{label} must be finite and positive, got {value}")
    return value


@REACTOR_REGISTRY.register("adiabatic_batch")
class AdiabaticBatchReactor(AbstractODESystem):
    """Closed, adiabatic, gas-phase batch reactor with fixed mass internal energy.

    State variables:
        - c_i: Concentrations of species i (kmol/m^3)

    Species balance: dc_i/dt = R_i(T, P, c)

    Temperature and pressure are not integrated. Each evaluation recovers
    them from the conserved internal energy and the current composition
    (see :mod:`adiabatic_batch.closure`), then queries the kinetics map at
    that state. Nothing is cached between evaluations.

    The thermodynamic and kinetics maps are shared, not owned, and must
    outlive the reactor.

    Attributes:
        thermo: Thermodynamic map.
        kinetics: Kinetics map.
        initial_temperature: Closure seed temperature (K), ``None`` until set.
        initial_pressure: Closure seed pressure (Pa), ``None`` until set.
        internal_energy: Conserved mass internal energy (J/kg), ``None`` until set.
        max_closure_iterations: Closure iteration budget.
        closure_tolerance: Relative pressure change for closure convergence.
        on_non_convergence: 'warn', 'ignore' or 'raise'.
        non_converged_closures: Number of evaluations whose closure hit the budget.
    """

    def __init__(
        self,
        thermo: AbstractThermodynamicMap,
        kinetics: AbstractKineticsMap,
        name: str = "adiabatic_batch",
        max_closure_iterations: int = 10,
        closure_tolerance: float = 1e-4,
        on_non_convergence: str = "warn",
    ):
        """Initialize the reactor.

        Args:
            thermo: Thermodynamic map.
            kinetics: Kinetics map over the same species.
            name: Reactor identifier.
            max_closure_iterations: Closure iteration budget.
            closure_tolerance: Relative pressure tolerance.
            on_non_convergence: Policy when the closure budget is exhausted.
        """
        if kinetics.num_species != thermo.number_of_species:
            raise ConfigurationError(
                f"Kinetics map has {kinetics.num_species} species, "
                f"thermodynamic map has {thermo.number_of_species}"
            )
        if max_closure_iterations < 1:
            raise ValidationError("max_closure_iterations must be at least 1")
        _require_positive(closure_tolerance, "closure_tolerance")
        if on_non_convergence not in NON_CONVERGENCE_POLICIES:
            raise ValidationError(
                f"on_non_convergence must be one of {NON_CONVERGENCE_POLICIES}, "
                f"got '{on_non_convergence}'"
            )

        self.thermo = thermo
        self.kinetics = kinetics
        self.max_closure_iterations = int(max_closure_iterations)
        self.closure_tolerance = float(closure_tolerance)
        self.on_non_convergence = on_non_convergence

        self.initial_temperature: float | None = None
        self.initial_pressure: float | None = None
        self.internal_energy: float | None = None
        self.non_converged_closures = 0

        super().__init__(name)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_initial_temperature(self, temperature: float) -> None:
        self.initial_temperature = _require_positive(temperature, "Initial temperature")

    def set_initial_pressure(self, pressure: float) -> None:
        self.initial_pressure = _require_positive(pressure, "Initial pressure")

    def set_internal_energy(self, internal_energy: float) -> None:
        internal_energy = float(internal_energy)
        if not math.isfinite(internal_energy):
            raise ValidationError(f"Internal energy must be finite, got {internal_energy}")
        self.internal_energy = internal_energy

    def set_initial_state(
        self,
        temperature: float,
        pressure: float,
        mole_fractions: npt.ArrayLike,
    ) -> npt.NDArray[Any]:
        """Configure the reactor from an initial (T, P, x) and return c0.

        Sets the closure seeds to (T, P) and the conserved internal energy to
        the ideal-gas mass internal energy of the mixture at T.

        Args:
            temperature: Initial temperature (K).
            pressure: Initial pressure (Pa).
            mole_fractions: Initial composition, shape (N,); normalized here.

        Returns:
            Initial concentrations (kmol/m^3) consistent with (T, P, x).
        """
        temperature = _require_positive(temperature, "Initial temperature")
        pressure = _require_positive(pressure, "Initial pressure")

        x = np.array(mole_fractions, dtype=float)
        if x.shape != (self.state_dim,):
            raise ValidationError(f"Expected mole fractions of shape ({self.state_dim},), got {x.shape}")
        if np.any(x < 0.0) or not np.all(np.isfinite(x)) or x.sum() <= 0.0:
            raise ValidationError(f"Mole fractions must be non-negative with a positive sum: {x}")
        x = x / x.sum()

        self.set_initial_temperature(temperature)
        self.set_initial_pressure(pressure)
        self.set_internal_energy(self.thermo.mixture_internal_energy_mass(temperature, x))

        logger.info(
            f"{self.name}: initial state T={temperature:.2f} K, P={pressure:.1f} Pa, "
            f"U={self.internal_energy:.6e} J/kg"
        )
        return x * pressure / (R_J_KMOL * temperature)

    def number_of_equations(self) -> int:
        return self.thermo.number_of_species

    def get_state_labels(self) -> list[str]:
        return [f"C_{name}" for name in self.thermo.species_names]

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _require_configuration(self) -> tuple[float, float, float]:
        missing = [
            label
            for label, value in (
                ("initial temperature", self.initial_temperature),
                ("initial pressure", self.initial_pressure),
                ("internal energy", self.internal_energy),
            )
            if value is None
        ]
        if missing:
            raise UninitializedConfigurationError(
                f"{self.name}: set {', '.join(missing)} before evaluating the reactor"
            )
        return self.initial_temperature, self.initial_pressure, self.internal_energy  # type: ignore[return-value]

    def _handle_non_convergence(self, result: ClosureResult) -> None:
        self.non_converged_closures += 1
        message = (
            f"{self.name}: T/P closure not converged after {result.iterations} iterations "
            f"(relative pressure change {result.residual:.3e} >= {self.closure_tolerance:.1e}); "
            f"using T={result.temperature:.2f} K, P={result.pressure:.1f} Pa"
        )
        if self.on_non_convergence == "raise":
            raise SolverError(message)
        if self.on_non_convergence == "warn":
            logger.warning(message)
            # constant text: the default filter reports it once per reactor
            warnings.warn(
                f"{self.name}: T/P closure not converged; details are logged",
                ClosureNonConvergenceWarning,
                stacklevel=2,
            )
        else:
            logger.debug(message)

    def close_state(self, concentrations: npt.ArrayLike) -> ClosedState:
        """Reconstruct the composition and recover (T, P) for it.

        Args:
            concentrations: Raw integrator state (kmol/m^3), shape (N,).

        Returns:
            Closed thermodynamic state.

        Raises:
            UninitializedConfigurationError: If T0, P0 or U is unset.
            DegenerateStateError: If the clipped total concentration is zero.
            SolverError: On inversion failure, or non-convergence under 'raise'.
        """
        t0, p0, u = self._require_configuration()
        reconstructed = reconstruct_state(self.thermo, concentrations)
        result = solve_closure(
            self.thermo,
            reconstructed,
            internal_energy=u,
            initial_temperature=t0,
            initial_pressure=p0,
            max_iterations=self.max_closure_iterations,
            tolerance=self.closure_tolerance,
        )
        if not result.converged:
            self._handle_non_convergence(result)
        logger.debug(
            f"{self.name}: closure T={result.temperature:.4f} K, P={result.pressure:.2f} Pa "
            f"in {result.iterations} iterations"
        )
        return ClosedState(reconstructed=reconstructed, closure=result)

    def derivatives(self, t: float, y: npt.ArrayLike) -> npt.NDArray[Any]:
        """Net formation rates dc/dt (kmol/m^3/s); ``t`` is unused."""
        closed = self.close_state(y)
        rates = self.kinetics.formation_rates(closed.thermo_state, closed.concentrations)
        return np.array(rates, dtype=float)

    def jacobian(
        self, t: float, y: npt.ArrayLike
    ) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
        """Zero explicit time derivative and dR/dc (1/s); ``t`` is unused."""
        closed = self.close_state(y)
        dfdc = self.kinetics.formation_rate_derivatives(closed.thermo_state, closed.concentrations)
        return np.zeros(self.state_dim), np.array(dfdc, dtype=float)

    def evaluate(
        self, t: float, y: npt.ArrayLike
    ) -> tuple[ClosedState, npt.NDArray[Any], npt.NDArray[Any]]:
        """Closed state, formation rates and Jacobian from a single closure."""
        closed = self.close_state(y)
        state = closed.thermo_state
        rates = np.array(self.kinetics.formation_rates(state, closed.concentrations), dtype=float)
        dfdc = np.array(
            self.kinetics.formation_rate_derivatives(state, closed.concentrations), dtype=float
        )
        return closed, rates, dfdc

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize reactor configuration to dictionary."""
        return {
            "name": self.name,
            "type": self.__class__.__name__,
            "state_dim": self.state_dim,
            "initial_temperature": self.initial_temperature,
            "initial_pressure": self.initial_pressure,
            "internal_energy": self.internal_energy,
            "max_closure_iterations": self.max_closure_iterations,
            "closure_tolerance": self.closure_tolerance,
            "on_non_convergence": self.on_non_convergence,
        }

    @classmethod
    def from_config(
        cls,
        config: ReactorConfig,
        thermo: AbstractThermodynamicMap,
        kinetics: AbstractKineticsMap,
        name: str = "adiabatic_batch",
    ) -> AdiabaticBatchReactor:
        """Build a reactor from a validated configuration.

        ``internal_energy`` is left unset when the config omits it; call
        :meth:`set_initial_state` or :meth:`set_internal_energy` afterwards.
        """
        reactor = cls(
            thermo,
            kinetics,
            name=name,
            max_closure_iterations=config.max_closure_iterations,
            closure_tolerance=config.closure_tolerance,
            on_non_convergence=config.on_non_convergence,
        )
        reactor.set_initial_temperature(config.initial_temperature)
        reactor.set_initial_pressure(config.initial_pressure)
        if config.internal_energy is not None:
            reactor.set_internal_energy(config.internal_energy)
        return reactor


__all__ = ["AdiabaticBatchReactor", "NON_CONVERGENCE_POLICIES"]
