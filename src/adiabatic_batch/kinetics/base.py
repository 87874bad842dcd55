"""Base abstract class for kinetics maps."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy.typing as npt

from adiabatic_batch.state import ThermodynamicState

logger = logging.getLogger(__name__)


class AbstractKineticsMap(ABC):
    """Abstract base class for reaction kinetics maps.

    The thermodynamic state is an explicit argument of every query, so a map
    carries no "current temperature/pressure" and may be shared freely.

    Attributes:
        name: Kinetics map name.
        num_species: Number of species (length of concentration vectors).
        num_reactions: Number of reactions.
    """

    def __init__(self, name: str, num_species: int, num_reactions: int):
        """Initialize kinetics map.

        Args:
            name: Kinetics map identifier.
            num_species: Number of species.
            num_reactions: Number of reactions.
        """
        self.name = name
        self.num_species = num_species
        self.num_reactions = num_reactions
        logger.debug(
            f"Initialized {self.__class__.__name__}: name={name}, "
            f"species={num_species}, reactions={num_reactions}"
        )

    @abstractmethod
    def formation_rates(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        """Compute net species formation rates.

        Args:
            state: Temperature and pressure of the mixture.
            concentrations: Species concentrations (kmol/m^3), shape (num_species,).

        Returns:
            Formation rates (kmol/m^3/s), shape (num_species,).
        """
        raise NotImplementedError("Subclasses must implement formation_rates()")

    @abstractmethod
    def formation_rate_derivatives(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        """Compute dR_i/dc_j at fixed temperature and pressure.

        Args:
            state: Temperature and pressure of the mixture.
            concentrations: Species concentrations (kmol/m^3), shape (num_species,).

        Returns:
            Jacobian (1/s), shape (num_species, num_species).
        """
        raise NotImplementedError("Subclasses must implement formation_rate_derivatives()")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"{self.__class__.__name__}(name='{self.name}', "
            f"species={self.num_species}, reactions={self.num_reactions})"
        )


__all__ = ["AbstractKineticsMap"]
