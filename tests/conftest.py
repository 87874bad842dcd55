"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from adiabatic_batch.kinetics import ElementaryReaction, MassActionKineticsMap
from adiabatic_batch.reactors import AdiabaticBatchReactor
from adiabatic_batch.thermo import NasaSpecies, NasaThermodynamicMap
from adiabatic_batch.utils.constants import R_J_KMOL

# GRI-Mech 3.0 NASA polynomials
O2_DATA = dict(
    name="O2",
    molecular_weight=31.998,
    low_coeffs=[3.78245636, -2.99673416e-03, 9.84730201e-06, -9.68129509e-09,
                3.24372837e-12, -1063.94356, 3.65767573],
    high_coeffs=[3.28253784, 1.48308754e-03, -7.57966669e-07, 2.09470555e-10,
                 -2.16717794e-14, -1088.45772, 5.45323129],
)
N2_DATA = dict(
    name="N2",
    molecular_weight=28.014,
    low_coeffs=[3.298677, 1.4082404e-03, -3.963222e-06, 5.641515e-09,
                -2.444854e-12, -1020.8999, 3.950372],
    high_coeffs=[2.92664, 1.4879768e-03, -5.68476e-07, 1.0097038e-10,
                 -6.753351e-15, -922.7977, 5.980528],
)
H2O_DATA = dict(
    name="H2O",
    molecular_weight=18.015,
    low_coeffs=[4.19864056, -2.03643410e-03, 6.52040211e-06, -5.48797062e-09,
                1.77197817e-12, -30293.7267, -0.849032208],
    high_coeffs=[3.03399249, 2.17691804e-03, -1.64072518e-07, -9.70419870e-11,
                 1.68200992e-14, -30004.2971, 4.96677010],
)


def constant_cp_species(name: str, molecular_weight: float = 28.0, a6: float = 0.0) -> NasaSpecies:
    """Species with cp = 3.5 R and h = R (3.5 T + a6)."""
    coeffs = [3.5, 0.0, 0.0, 0.0, 0.0, a6, 0.0]
    return NasaSpecies(
        name=name,
        molecular_weight=molecular_weight,
        low_coeffs=list(coeffs),
        high_coeffs=list(coeffs),
    )


@pytest.fixture
def air_thermo() -> NasaThermodynamicMap:
    """Real-gas O2/N2 mixture."""
    return NasaThermodynamicMap("air", [NasaSpecies(**O2_DATA), NasaSpecies(**N2_DATA)])


@pytest.fixture
def water_thermo() -> NasaThermodynamicMap:
    return NasaThermodynamicMap("water", [NasaSpecies(**H2O_DATA)])


@pytest.fixture
def exothermic_thermo() -> NasaThermodynamicMap:
    """A -> B releases 1000 R J/kmol; both species have cp = 3.5 R."""
    return NasaThermodynamicMap(
        "exothermic_ab",
        [constant_cp_species("A", a6=0.0), constant_cp_species("B", a6=-1000.0)],
    )


@pytest.fixture
def exothermic_kinetics(exothermic_thermo) -> MassActionKineticsMap:
    """First-order A -> B with k(1000 K) of about 66 1/s."""
    return MassActionKineticsMap(
        "exothermic_ab",
        exothermic_thermo,
        [
            ElementaryReaction(
                reactants={"A": 1.0},
                products={"B": 1.0},
                pre_exponential=1.0e6,
                activation_energy=8.0e7,
            )
        ],
    )


@pytest.fixture
def neutral_thermo() -> NasaThermodynamicMap:
    """Three thermally identical species: temperature does not depend on composition."""
    return NasaThermodynamicMap(
        "neutral_abc",
        [constant_cp_species("A"), constant_cp_species("B"), constant_cp_species("C")],
    )


@pytest.fixture
def neutral_kinetics(neutral_thermo) -> MassActionKineticsMap:
    """Reversible A + B <=> 2 C plus a fractional-order C => A."""
    return MassActionKineticsMap(
        "neutral_abc",
        neutral_thermo,
        [
            ElementaryReaction(
                reactants={"A": 1.0, "B": 1.0},
                products={"C": 2.0},
                pre_exponential=5.0e3,
                temperature_exponent=0.5,
                activation_energy=2.0e7,
                reversible=True,
            ),
            ElementaryReaction(
                reactants={"C": 1.0},
                products={"A": 1.0},
                pre_exponential=50.0,
                orders={"C": 1.5},
            ),
        ],
    )


@pytest.fixture
def exothermic_reactor(exothermic_thermo, exothermic_kinetics) -> AdiabaticBatchReactor:
    """Reactor configured at 1000 K, 1 atm, pure A."""
    reactor = AdiabaticBatchReactor(exothermic_thermo, exothermic_kinetics, name="exo")
    reactor.set_initial_state(1000.0, 101325.0, [1.0, 0.0])
    return reactor


@pytest.fixture
def neutral_reactor(neutral_thermo, neutral_kinetics) -> AdiabaticBatchReactor:
    reactor = AdiabaticBatchReactor(neutral_thermo, neutral_kinetics, name="neutral")
    reactor.set_initial_state(800.0, 2.0e5, [0.5, 0.3, 0.2])
    return reactor


@pytest.fixture
def ideal_gas_concentration():
    """c = P / (R T)."""

    def _c(temperature: float, pressure: float) -> float:
        return pressure / (R_J_KMOL * temperature)

    return _c


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def constant_cp():
    """Factory for constant-cp species."""
    return constant_cp_species


@pytest.fixture
def o2_data() -> dict:
    return dict(O2_DATA)


@pytest.fixture
def restore_package_logger():
    """Undo handler and level changes made by setup_logging."""
    pkg_logger = logging.getLogger("adiabatic_batch")
    closure_logger = logging.getLogger("adiabatic_batch.closure")
    handlers, level = list(pkg_logger.handlers), pkg_logger.level
    closure_level = closure_logger.level
    yield
    for handler in pkg_logger.handlers:
        if handler not in handlers:
            handler.close()
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    closure_logger.setLevel(closure_level)
