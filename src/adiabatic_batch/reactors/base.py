"""Base abstract class for reactor ODE systems."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy.typing as npt

logger = logging.getLogger(__name__)


class AbstractODESystem(ABC):
    """Abstract base class for reactor ODE systems driven by an external integrator.

    Subclasses provide the right-hand side and its Jacobian; the integrator
    owns time stepping and error control.

    Attributes:
        name: Reactor identifier.
        state_dim: Number of ODE equations.
    """

    def __init__(self, name: str):
        self.name = name
        self.state_dim = self.number_of_equations()
        logger.debug(f"Initialized {self.__class__.__name__}: name={name}, state_dim={self.state_dim}")

    @abstractmethod
    def number_of_equations(self) -> int:
        """Dimension of the ODE system."""
        raise NotImplementedError("Subclasses must implement number_of_equations()")

    @abstractmethod
    def derivatives(self, t: float, y: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Right-hand side dy/dt, shape (state_dim,)."""
        raise NotImplementedError("Subclasses must implement derivatives()")

    @abstractmethod
    def jacobian(
        self, t: float, y: npt.NDArray[Any]
    ) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
        """Explicit time derivative and state Jacobian of the right-hand side.

        Returns:
            Tuple (df/dt of shape (state_dim,), df/dy of shape (state_dim, state_dim)).
        """
        raise NotImplementedError("Subclasses must implement jacobian()")

    @abstractmethod
    def get_state_labels(self) -> list[str]:
        """Human-readable labels for state variables."""
        raise NotImplementedError("Subclasses must implement get_state_labels()")

    def rhs(self, t: float, y: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Right-hand side with the scipy.integrate.solve_ivp signature."""
        return self.derivatives(t, y)

    def jac(self, t: float, y: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """State Jacobian with the scipy.integrate.solve_ivp signature."""
        return self.jacobian(t, y)[1]

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}(name='{self.name}', state_dim={self.state_dim})"


__all__ = ["AbstractODESystem"]
