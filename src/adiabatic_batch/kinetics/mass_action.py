"""Elementary mass-action kinetics with modified Arrhenius rate constants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

from adiabatic_batch.exceptions import ValidationError
from adiabatic_batch.kinetics.base import AbstractKineticsMap
from adiabatic_batch.state import ThermodynamicState
from adiabatic_batch.thermo.base import AbstractThermodynamicMap
from adiabatic_batch.utils.constants import P_ATM, R_J_KMOL
from adiabatic_batch.utils.registry import KINETICS_REGISTRY

logger = logging.getLogger(__name__)


@dataclass
class ElementaryReaction:
    """A single reaction ``sum(nu'_i A_i) <=> sum(nu''_i A_i)``.

    Forward rate constant: k_f = A * T^b * exp(-Ea / (R T)), with Ea in J/kmol
    and A in (m^3/kmol)^(n-1)/s for a reaction of overall order n.

    Attributes:
        reactants: Species name -> stoichiometric coefficient.
        products: Species name -> stoichiometric coefficient.
        pre_exponential: A.
        temperature_exponent: b.
        activation_energy: Ea (J/kmol).
        reversible: If True, the reverse rate follows from equilibrium.
        orders: Optional forward order overrides; unnamed species keep their
            reactant coefficient.
    """

    reactants: dict[str, float]
    products: dict[str, float]
    pre_exponential: float
    temperature_exponent: float = 0.0
    activation_energy: float = 0.0
    reversible: bool = False
    orders: dict[str, float] | None = None

    def __post_init__(self) -> None:
        if not self.reactants or not self.products:
            raise ValidationError("A reaction needs at least one reactant and one product")
        for side in (self.reactants, self.products):
            if any(nu <= 0 for nu in side.values()):
                raise ValidationError(f"Stoichiometric coefficients must be positive: {side}")
        if self.pre_exponential < 0:
            raise ValidationError("Pre-exponential factor must be non-negative")
        if self.orders is not None and any(o < 0 for o in self.orders.values()):
            raise ValidationError(f"Reaction orders must be non-negative: {self.orders}")

    @property
    def equation(self) -> str:
        def _side(terms: dict[str, float]) -> str:
            return " + ".join(
                name if nu == 1 else f"{nu:g} {name}" for name, nu in terms.items()
            )

        arrow = " <=> " if self.reversible else " => "
        return _side(self.reactants) + arrow + _side(self.products)


@KINETICS_REGISTRY.register("mass_action")
class MassActionKineticsMap(AbstractKineticsMap):
    """Mass-action kinetics over the species of a thermodynamic map.

    Net rate of progress of reaction j:
        q_j = k_f,j * prod(c_i^o'_ij) - k_r,j * prod(c_i^nu''_ij)

    with k_r,j = k_f,j / K_c,j for reversible reactions, where
        K_c = exp(-sum(nu_ij g_i/RT)) * (P_atm / (R T))^(sum nu_ij).

    Formation rates R_i = sum_j nu_ij q_j, and their concentration Jacobian is
    evaluated analytically.

    Attributes:
        thermo: Thermodynamic map providing species order and Gibbs energies.
        reactions: Reaction list.
        stoich: Net stoichiometric matrix, shape (num_reactions, num_species).
        forward_orders: Forward orders, shape (num_reactions, num_species).
        reverse_orders: Reverse orders, shape (num_reactions, num_species).
    """

    def __init__(
        self,
        name: str,
        thermo: AbstractThermodynamicMap,
        reactions: list[ElementaryReaction],
    ):
        super().__init__(name, thermo.number_of_species, len(reactions))
        self.thermo = thermo
        self.reactions = list(reactions)

        n_r, n_s = self.num_reactions, self.num_species
        reactant_nu = np.zeros((n_r, n_s))
        product_nu = np.zeros((n_r, n_s))
        self.forward_orders = np.zeros((n_r, n_s))

        for j, rxn in enumerate(self.reactions):
            for species, nu in rxn.reactants.items():
                reactant_nu[j, self._index(species)] += nu
            for species, nu in rxn.products.items():
                product_nu[j, self._index(species)] += nu
            self.forward_orders[j] = reactant_nu[j]
            if rxn.orders is not None:
                for species, order in rxn.orders.items():
                    self.forward_orders[j, self._index(species)] = order

        self.stoich = product_nu - reactant_nu
        self.reverse_orders = product_nu
        self.delta_nu = self.stoich.sum(axis=1)

        self.pre_exponential = np.array([r.pre_exponential for r in self.reactions], dtype=float)
        self.temperature_exponent = np.array(
            [r.temperature_exponent for r in self.reactions], dtype=float
        )
        self.activation_energy = np.array(
            [r.activation_energy for r in self.reactions], dtype=float
        )
        self.reversible = np.array([r.reversible for r in self.reactions], dtype=bool)

    def _index(self, species: str) -> int:
        if species not in self.thermo.species_names:
            raise ValidationError(f"Unknown species '{species}' in kinetics map '{self.name}'")
        return self.thermo.species_index(species)

    def _check(self, concentrations: npt.NDArray[Any]) -> npt.NDArray[Any]:
        c = np.asarray(concentrations, dtype=float)
        if c.shape != (self.num_species,):
            raise ValidationError(
                f"Expected concentrations of shape ({self.num_species},), got {c.shape}"
            )
        return c

    def forward_rate_constants(self, temperature: float) -> npt.NDArray[Any]:
        """k_f for every reaction, shape (num_reactions,)."""
        return (
            self.pre_exponential
            * temperature**self.temperature_exponent
            * np.exp(-self.activation_energy / (R_J_KMOL * temperature))
        )

    def equilibrium_constants(self, temperature: float) -> npt.NDArray[Any]:
        """Concentration-based equilibrium constants K_c, shape (num_reactions,)."""
        delta_g_rt = self.stoich @ self.thermo.standard_gibbs_rt(temperature)
        return np.exp(-delta_g_rt) * (P_ATM / (R_J_KMOL * temperature)) ** self.delta_nu

    def rate_constants(self, temperature: float) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
        """Forward and reverse rate constants at the given temperature."""
        kf = self.forward_rate_constants(temperature)
        kr = np.zeros_like(kf)
        if self.reversible.any():
            kc = self.equilibrium_constants(temperature)
            kr[self.reversible] = kf[self.reversible] / kc[self.reversible]
        return kf, kr

    @staticmethod
    def _concentration_products(
        c: npt.NDArray[Any], orders: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        return np.prod(c[None, :] ** orders, axis=1)

    @staticmethod
    def _concentration_product_derivatives(
        c: npt.NDArray[Any], orders: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        """d/dc_k of prod_i(c_i^o_ji), shape (num_reactions, num_species)."""
        powers = c[None, :] ** orders
        derivs = np.zeros_like(orders, dtype=float)
        for j in range(orders.shape[0]):
            for k in np.nonzero(orders[j])[0]:
                order = orders[j, k]
                if c[k] > 0.0:
                    d_own = order * c[k] ** (order - 1.0)
                elif order == 1.0:
                    d_own = 1.0
                else:
                    # zero for order > 1; singular for order < 1, taken as zero
                    d_own = 0.0
                derivs[j, k] = d_own * np.prod(np.delete(powers[j], k))
        return derivs

    def reaction_rates(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        """Net rates of progress (kmol/m^3/s), shape (num_reactions,)."""
        c = self._check(concentrations)
        kf, kr = self.rate_constants(state.temperature)
        return kf * self._concentration_products(c, self.forward_orders) - kr * (
            self._concentration_products(c, self.reverse_orders)
        )

    def formation_rates(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        return self.stoich.T @ self.reaction_rates(state, concentrations)

    def formation_rate_derivatives(
        self,
        state: ThermodynamicState,
        concentrations: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        c = self._check(concentrations)
        kf, kr = self.rate_constants(state.temperature)
        dq_dc = kf[:, None] * self._concentration_product_derivatives(c, self.forward_orders)
        if self.reversible.any():
            dq_dc -= kr[:, None] * self._concentration_product_derivatives(
                c, self.reverse_orders
            )
        return self.stoich.T @ dq_dc

    def to_dict(self) -> dict[str, Any]:
        """Serialize kinetics configuration to dictionary."""
        return {
            "name": self.name,
            "type": self.__class__.__name__,
            "reactions": [
                {
                    "reactants": dict(r.reactants),
                    "products": dict(r.products),
                    "pre_exponential": r.pre_exponential,
                    "temperature_exponent": r.temperature_exponent,
                    "activation_energy": r.activation_energy,
                    "reversible": r.reversible,
                    "orders": None if r.orders is None else dict(r.orders),
                }
                for r in self.reactions
            ],
        }

    @classmethod
    def from_dict(
        cls, config: dict[str, Any], thermo: AbstractThermodynamicMap
    ) -> MassActionKineticsMap:
        """Deserialize mass-action kinetics from configuration.

        Args:
            config: Configuration dictionary with ``name`` and ``reactions``.
            thermo: Thermodynamic map defining the species order.

        Returns:
            MassActionKineticsMap instance.
        """
        return cls(
            name=config["name"],
            thermo=thermo,
            reactions=[ElementaryReaction(**r) for r in config["reactions"]],
        )


__all__ = ["ElementaryReaction", "MassActionKineticsMap"]
