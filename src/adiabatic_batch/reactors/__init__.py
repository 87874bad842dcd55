"""Reactor ODE systems."""

from __future__ import annotations

from adiabatic_batch.reactors.adiabatic_batch import AdiabaticBatchReactor
from adiabatic_batch.reactors.base import AbstractODESystem

__all__ = [
    "AbstractODESystem",
    "AdiabaticBatchReactor",
]
