"""adiabatic-batch exception hierarchy.

All library-specific exceptions inherit from :class:`AdiabaticBatchError`,
enabling callers to catch the broad base class or narrow subtypes. The closure
non-convergence condition is a warning, not an exception, and lives alongside
them so callers can filter it with :mod:`warnings`.
"""

from __future__ import annotations


class AdiabaticBatchError(Exception):
    """Base exception for all adiabatic-batch errors."""


class SolverError(AdiabaticBatchError):
    """Enthalpy inversion, closure or ODE integration failures."""


class ValidationError(AdiabaticBatchError):
    """Invalid inputs, shapes, types, or parameter values."""


class DegenerateStateError(ValidationError):
    """Total concentration is zero or negative after clipping.

    Mole fractions are undefined for such a state, so the evaluation is
    aborted before any kinetics service is queried.
    """


class RegistryError(AdiabaticBatchError):
    """Registry lookup or registration failures."""


class ConfigurationError(AdiabaticBatchError):
    """Reactor or case configuration errors (missing/invalid parameters)."""


class UninitializedConfigurationError(ConfigurationError):
    """Evaluation requested before T0, P0 and internal energy were set."""


class ClosureNonConvergenceWarning(RuntimeWarning):
    """Temperature/pressure closure exhausted its iteration budget."""


__all__ = [
    "AdiabaticBatchError",
    "SolverError",
    "ValidationError",
    "DegenerateStateError",
    "RegistryError",
    "ConfigurationError",
    "UninitializedConfigurationError",
    "ClosureNonConvergenceWarning",
]
