"""Utility modules: constants, logging, configuration, registries, numerics."""

from __future__ import annotations

from adiabatic_batch.utils.constants import P_ATM, R_J_KMOL
from adiabatic_batch.utils.logging import JSONFormatter, RunTracer, setup_logging
from adiabatic_batch.utils.registry import (
    KINETICS_REGISTRY,
    REACTOR_REGISTRY,
    THERMO_REGISTRY,
    Registry,
)

__all__ = [
    "Registry",
    "THERMO_REGISTRY",
    "KINETICS_REGISTRY",
    "REACTOR_REGISTRY",
    "R_J_KMOL",
    "P_ATM",
    "JSONFormatter",
    "RunTracer",
    "setup_logging",
]
