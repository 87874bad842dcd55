"""Config-driven run: build maps from dictionaries and integrate a YAML case.

The thermodynamic and kinetics maps are looked up in the plugin registries and
deserialized from plain dictionaries; the reactor and integrator settings come
from ``case.yaml``. Set ``AB_T0`` to override the initial temperature.

Run: python examples/01_config_driven.py
"""

from __future__ import annotations

from pathlib import Path

from adiabatic_batch import KINETICS_REGISTRY, THERMO_REGISTRY, load_config, run_case

CONSTANT_CP = [3.5, 0.0, 0.0, 0.0, 0.0]

THERMO = {
    "name": "isomerization",
    "species": [
        {"name": "A", "molecular_weight": 28.0,
         "low_coeffs": CONSTANT_CP + [0.0, 0.0], "high_coeffs": CONSTANT_CP + [0.0, 0.0]},
        {"name": "B", "molecular_weight": 28.0,
         "low_coeffs": CONSTANT_CP + [-1000.0, 0.0], "high_coeffs": CONSTANT_CP + [-1000.0, 0.0]},
    ],
}

KINETICS = {
    "name": "a_to_b",
    "reactions": [
        {"reactants": {"A": 1.0}, "products": {"B": 1.0},
         "pre_exponential": 1.0e6, "activation_energy": 8.0e7},
    ],
}


def main() -> None:
    """Run config-driven example."""
    config = load_config(Path(__file__).with_name("case.yaml"))

    thermo = THERMO_REGISTRY.get("nasa7").from_dict(THERMO)
    kinetics = KINETICS_REGISTRY.get("mass_action").from_dict(KINETICS, thermo)

    reactor, traj = run_case(config, thermo, kinetics, mole_fractions=[1.0, 0.0])

    print(f"{reactor}")
    print(f"run_id={traj.run_id} success={traj.success}")
    print(f"T: {traj.temperatures[0]:.1f} K -> {traj.temperatures[-1]:.1f} K")
    print(f"Final B: {traj.species(reactor, 'B')[-1]:.4e} kmol/m^3")


if __name__ == "__main__":
    main()
