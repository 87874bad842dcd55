"""Quickstart example: adiabatic hydrogen-air batch reactor.

This example demonstrates the basic workflow:
1. Build a NASA-polynomial thermodynamic map for H2/O2/H2O/N2
2. Define a one-step global mechanism with mass-action kinetics
3. Configure the reactor from an initial (T, P, x)
4. Integrate with BDF and the analytic Jacobian
5. Inspect the recovered temperature and pressure history

The global rate parameters are illustrative, not a validated mechanism.

Run: python examples/00_quickstart.py
"""

from __future__ import annotations

import numpy as np

from adiabatic_batch import (
    AdiabaticBatchReactor,
    ElementaryReaction,
    MassActionKineticsMap,
    NasaSpecies,
    NasaThermodynamicMap,
    setup_logging,
    simulate,
)

# GRI-Mech 3.0 NASA polynomials
SPECIES = [
    NasaSpecies(
        name="H2",
        molecular_weight=2.016,
        low_coeffs=[2.34433112, 7.98052075e-03, -1.94781510e-05, 2.01572094e-08,
                    -7.37611761e-12, -917.935173, 0.683010238],
        high_coeffs=[3.33727920, -4.94024731e-05, 4.99456778e-07, -1.79566394e-10,
                     2.00255376e-14, -950.158922, -3.20502331],
    ),
    NasaSpecies(
        name="O2",
        molecular_weight=31.998,
        low_coeffs=[3.78245636, -2.99673416e-03, 9.84730201e-06, -9.68129509e-09,
                    3.24372837e-12, -1063.94356, 3.65767573],
        high_coeffs=[3.28253784, 1.48308754e-03, -7.57966669e-07, 2.09470555e-10,
                     -2.16717794e-14, -1088.45772, 5.45323129],
    ),
    NasaSpecies(
        name="H2O",
        molecular_weight=18.015,
        low_coeffs=[4.19864056, -2.03643410e-03, 6.52040211e-06, -5.48797062e-09,
                    1.77197817e-12, -30293.7267, -0.849032208],
        high_coeffs=[3.03399249, 2.17691804e-03, -1.64072518e-07, -9.70419870e-11,
                     1.68200992e-14, -30004.2971, 4.96677010],
    ),
    NasaSpecies(
        name="N2",
        molecular_weight=28.014,
        low_coeffs=[3.298677, 1.4082404e-03, -3.963222e-06, 5.641515e-09,
                    -2.444854e-12, -1020.8999, 3.950372],
        high_coeffs=[2.92664, 1.4879768e-03, -5.68476e-07, 1.0097038e-10,
                     -6.753351e-15, -922.7977, 5.980528],
    ),
]


def main() -> None:
    """Run quickstart example."""
    setup_logging(level="INFO")

    print("=" * 60)
    print("adiabatic-batch quickstart")
    print("=" * 60)

    # 1. Thermodynamics
    thermo = NasaThermodynamicMap("h2_air", SPECIES)
    print(f"\n1. {thermo}")

    # 2. Kinetics: 2 H2 + O2 => 2 H2O, first order in each reactant
    kinetics = MassActionKineticsMap(
        "h2_global",
        thermo,
        [
            ElementaryReaction(
                reactants={"H2": 2.0, "O2": 1.0},
                products={"H2O": 2.0},
                pre_exponential=1.0e11,  # m^3/kmol/s
                activation_energy=1.5e8,  # J/kmol
                orders={"H2": 1.0, "O2": 1.0},
            )
        ],
    )
    print(f"2. {kinetics.reactions[0].equation}")

    # 3. Stoichiometric hydrogen-air at 1200 K, 1 atm
    reactor = AdiabaticBatchReactor(thermo, kinetics, name="h2_air_batch")
    x0 = np.array([2.0, 1.0, 0.0, 3.76])
    c0 = reactor.set_initial_state(1200.0, 101325.0, x0)
    print(f"3. c0 = {np.round(c0, 6)} kmol/m^3, U = {reactor.internal_energy:.4e} J/kg")

    # 4. Integrate
    traj = simulate(reactor, (0.0, 0.05), c0, n_points=200, method="BDF")
    print(f"4. Integration success: {traj.success} ({traj.message})")

    # 5. Results
    i_half = int(np.argmax(traj.species(reactor, "H2O") >= 0.5 * traj.species(reactor, "H2O")[-1]))
    print("\n5. Results")
    print(f"   T: {traj.temperatures[0]:.1f} K -> {traj.temperatures[-1]:.1f} K")
    print(f"   P: {traj.pressures[0]:.0f} Pa -> {traj.pressures[-1]:.0f} Pa")
    print(f"   Half of final H2O formed by t = {traj.times[i_half] * 1e3:.3f} ms")
    print(f"   Final mole fractions: {dict(zip(thermo.species_names, np.round(traj.mole_fractions[-1], 4)))}")


if __name__ == "__main__":
    main()
