"""Adapter for kinetics maps that keep a mutable current temperature/pressure."""

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

import numpy as np
import numpy.typing as npt

from adiabatic_batch.exceptions import ValidationError
from adiabatic_batch.kinetics.base import AbstractKineticsMap
from adiabatic_batch.state import ThermodynamicState

logger = logging.getLogger(__name__)


class StatefulKineticsMap(Protocol):
    """Two-step "set T, P then query" protocol of CHEMKIN-style kinetics maps."""

    def set_temperature(self, temperature: float) -> None: ...

    def set_pressure(self, pressure: float) -> None: ...

    def compute_reaction_rates(self, concentrations: npt.NDArray[Any]) -> None: ...

    def formation_rates(self) -> npt.NDArray[Any]: ...

    def formation_rate_derivatives(self, concentrations: npt.NDArray[Any]) -> npt.NDArray[Any]: ...


class StatefulKineticsAdapter(AbstractKineticsMap):
    """Expose a stateful kinetics map through the explicit-state interface.

    Every query pushes the given temperature and pressure into the wrapped
    map and reads the result while holding a lock, so a single wrapped map can
    serve several reactor models or threads.

    Attributes:
        wrapped: The stateful map.
    """

    def __init__(
        self,
        wrapped: StatefulKineticsMap,
        num_species: int,
        num_reactions: int = 0,
        name: str = "stateful",
    ):
        super().__init__(name, num_species, num_reactions)
        self.wrapped = wrapped
        self._lock = threading.Lock()

    def _set_state(self, state: ThermodynamicState) -> None:
        self.wrapped.set_temperature(state.temperature)
        self.wrapped.set_pressure(state.pressure)

    def _check_shape(self, values: npt.NDArray[Any], shape: tuple[int, ...]) -> npt.NDArray[Any]:
        arr = np.array(values, dtype=float)
        if arr.shape != shape:
            raise ValidationError(
                f"Wrapped kinetics map '{self.name}' returned shape {arr.shape}, expected {shape}"
            )
        return arr

    def formation_rates(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        with self._lock:
            self._set_state(state)
            self.wrapped.compute_reaction_rates(concentrations)
            rates = self.wrapped.formation_rates()
            return self._check_shape(rates, (self.num_species,))

    def formation_rate_derivatives(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        with self._lock:
            self._set_state(state)
            jac = self.wrapped.formation_rate_derivatives(concentrations)
            return self._check_shape(jac, (self.num_species, self.num_species))


__all__ = ["StatefulKineticsMap", "StatefulKineticsAdapter"]
