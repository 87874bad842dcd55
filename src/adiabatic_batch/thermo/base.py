"""Base abstract class for thermodynamic property maps."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy as np
import numpy.typing as npt

from adiabatic_batch.exceptions import ValidationError
from adiabatic_batch.utils.constants import R_J_KMOL

logger = logging.getLogger(__name__)


class AbstractThermodynamicMap(ABC):
    """Abstract base class for ideal-gas thermodynamic property maps.

    A thermodynamic map knows the species of a mechanism, their molecular
    weights and their enthalpy-temperature relations. The reactor model only
    queries it; temperature and pressure are always passed explicitly, so an
    instance can be shared between models and threads.

    Attributes:
        name: Map identifier.
        species_names: Ordered species names.
        molecular_weights: Species molecular weights (kg/kmol), shape (N,).
    """

    def __init__(self, name: str, species_names: list[str], molecular_weights: npt.ArrayLike):
        self.name = name
        self.species_names = list(species_names)
        self.molecular_weights = np.asarray(molecular_weights, dtype=float)
        if self.molecular_weights.shape != (len(self.species_names),):
            raise ValidationError("molecular_weights must have one entry per species")
        logger.debug(
            f"Initialized {self.__class__.__name__}: name={name}, species={len(self.species_names)}"
        )

    @property
    def number_of_species(self) -> int:
        return len(self.species_names)

    def species_index(self, species: str) -> int:
        """Index of a species by name."""
        return self.species_names.index(species)

    def molecular_weight_from_mole_fractions(self, mole_fractions: npt.NDArray[Any]) -> float:
        """Mixture molecular weight (kg/kmol) as the mole-fraction weighted average."""
        return float(np.dot(mole_fractions, self.molecular_weights))

    @abstractmethod
    def mixture_enthalpy_molar(self, temperature: float, mole_fractions: npt.NDArray[Any]) -> float:
        """Mixture molar enthalpy (J/kmol) at the given temperature.

        Args:
            temperature: Temperature in Kelvin.
            mole_fractions: Mixture composition, shape (N,).

        Returns:
            Molar enthalpy of the mixture.
        """
        raise NotImplementedError("Subclasses must implement mixture_enthalpy_molar()")

    @abstractmethod
    def temperature_from_enthalpy_and_mole_fractions(
        self,
        enthalpy: float,
        pressure: float,
        mole_fractions: npt.NDArray[Any],
        temperature_guess: float,
    ) -> float:
        """Invert the enthalpy relation.

        Args:
            enthalpy: Target mixture molar enthalpy (J/kmol).
            pressure: Pressure in Pa (unused by ideal-gas maps).
            mole_fractions: Mixture composition, shape (N,).
            temperature_guess: Search seed in Kelvin.

        Returns:
            Temperature (K) at which the mixture enthalpy equals ``enthalpy``.
        """
        raise NotImplementedError(
            "Subclasses must implement temperature_from_enthalpy_and_mole_fractions()"
        )

    def standard_gibbs_rt(self, temperature: float) -> npt.NDArray[Any]:
        """Dimensionless standard Gibbs energies g°/(R T), shape (N,).

        Only required by kinetics maps that derive reverse rate constants
        from equilibrium.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not provide standard Gibbs energies"
        )

    def mixture_enthalpy_mass(self, temperature: float, mole_fractions: npt.NDArray[Any]) -> float:
        """Mixture mass enthalpy (J/kg)."""
        mw = self.molecular_weight_from_mole_fractions(mole_fractions)
        return self.mixture_enthalpy_molar(temperature, mole_fractions) / mw

    def mixture_internal_energy_mass(
        self, temperature: float, mole_fractions: npt.NDArray[Any]
    ) -> float:
        """Mixture mass internal energy (J/kg), u = h - R T / W for an ideal gas."""
        mw = self.molecular_weight_from_mole_fractions(mole_fractions)
        h_molar = self.mixture_enthalpy_molar(temperature, mole_fractions)
        return (h_molar - R_J_KMOL * temperature) / mw

    def to_dict(self) -> dict[str, Any]:
        """Serialize map configuration to dictionary."""
        return {
            "name": self.name,
            "type": self.__class__.__name__,
            "species_names": self.species_names,
            "molecular_weights": self.molecular_weights.tolist(),
        }

    @classmethod
    @abstractmethod
    def from_dict(cls, config: dict[str, Any]) -> AbstractThermodynamicMap:
        """Deserialize map from configuration dictionary."""
        raise NotImplementedError("Subclasses must implement from_dict()")

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}(name='{self.name}', species={self.number_of_species})"


__all__ = ["AbstractThermodynamicMap"]
