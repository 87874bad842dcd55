"""adiabatic-batch: ODE right-hand side of an adiabatic, constant-internal-energy batch reactor."""

from __future__ import annotations

__version__ = "0.1.0"

from adiabatic_batch.closure import reconstruct_state, solve_closure
from adiabatic_batch.exceptions import (
    AdiabaticBatchError,
    ClosureNonConvergenceWarning,
    ConfigurationError,
    DegenerateStateError,
    RegistryError,
    SolverError,
    UninitializedConfigurationError,
    ValidationError,
)
from adiabatic_batch.kinetics import (
    AbstractKineticsMap,
    ElementaryReaction,
    MassActionKineticsMap,
    StatefulKineticsAdapter,
)
from adiabatic_batch.reactors import AbstractODESystem, AdiabaticBatchReactor
from adiabatic_batch.simulation import BatchTrajectory, run_case, simulate
from adiabatic_batch.state import (
    ClosedState,
    ClosureResult,
    ReconstructedState,
    ThermodynamicState,
)
from adiabatic_batch.thermo import AbstractThermodynamicMap, NasaSpecies, NasaThermodynamicMap
from adiabatic_batch.utils import (
    KINETICS_REGISTRY,
    REACTOR_REGISTRY,
    THERMO_REGISTRY,
    Registry,
)
from adiabatic_batch.utils.config import CaseConfig, ReactorConfig, load_config
from adiabatic_batch.utils.logging import JSONFormatter, RunTracer, setup_logging

__all__ = [
    "__version__",
    # Exceptions
    "AdiabaticBatchError",
    "ClosureNonConvergenceWarning",
    "ConfigurationError",
    "DegenerateStateError",
    "RegistryError",
    "SolverError",
    "UninitializedConfigurationError",
    "ValidationError",
    # State values
    "ThermodynamicState",
    "ReconstructedState",
    "ClosureResult",
    "ClosedState",
    # Closure
    "reconstruct_state",
    "solve_closure",
    # Maps
    "AbstractThermodynamicMap",
    "NasaSpecies",
    "NasaThermodynamicMap",
    "AbstractKineticsMap",
    "ElementaryReaction",
    "MassActionKineticsMap",
    "StatefulKineticsAdapter",
    # Reactors
    "AbstractODESystem",
    "AdiabaticBatchReactor",
    # Simulation
    "BatchTrajectory",
    "simulate",
    "run_case",
    # Configuration
    "CaseConfig",
    "ReactorConfig",
    "load_config",
    # Registry System
    "Registry",
    "THERMO_REGISTRY",
    "KINETICS_REGISTRY",
    "REACTOR_REGISTRY",
    # Logging
    "JSONFormatter",
    "RunTracer",
    "setup_logging",
]
