"""Tests for state reconstruction and the temperature/pressure closure."""

from __future__ import annotations

import numpy as np
import pytest

from adiabatic_batch.closure import reconstruct_state, solve_closure
from adiabatic_batch.exceptions import DegenerateStateError, ValidationError
from adiabatic_batch.thermo import NasaThermodynamicMap
from adiabatic_batch.utils.constants import R_J_KMOL


# ---------------------------------------------------------------------------
# State reconstruction
# ---------------------------------------------------------------------------


class TestReconstructState:
    def test_mole_fractions_sum_to_one(self, air_thermo, rng):
        for _ in range(50):
            c = rng.uniform(0.0, 10.0, size=2) * 10.0 ** rng.uniform(-6, 2)
            state = reconstruct_state(air_thermo, c)
            assert abs(state.mole_fractions.sum() - 1.0) < 1e-12

    def test_negative_values_clipped(self, air_thermo):
        state = reconstruct_state(air_thermo, np.array([-1e-12, 0.04]))
        np.testing.assert_array_equal(state.concentrations, [0.0, 0.04])
        assert state.total_concentration == pytest.approx(0.04)
        np.testing.assert_allclose(state.mole_fractions, [0.0, 1.0])

    def test_input_not_modified(self, air_thermo):
        c = np.array([-1e-10, 0.04])
        reconstruct_state(air_thermo, c)
        assert c[0] == -1e-10

    def test_molecular_weight(self, air_thermo):
        state = reconstruct_state(air_thermo, np.array([0.21, 0.79]))
        assert state.molecular_weight == pytest.approx(0.21 * 31.998 + 0.79 * 28.014)

    def test_all_zero_is_degenerate(self, air_thermo):
        with pytest.raises(DegenerateStateError, match="zero"):
            reconstruct_state(air_thermo, np.zeros(2))

    def test_all_negative_is_degenerate(self, air_thermo):
        with pytest.raises(DegenerateStateError):
            reconstruct_state(air_thermo, np.array([-1e-9, -2e-9]))

    def test_degenerate_is_validation_error(self, air_thermo):
        with pytest.raises(ValidationError):
            reconstruct_state(air_thermo, np.zeros(2))

    def test_wrong_shape(self, air_thermo):
        with pytest.raises(ValidationError, match="shape"):
            reconstruct_state(air_thermo, np.ones(3))

    def test_non_finite(self, air_thermo):
        with pytest.raises(ValidationError, match="finite"):
            reconstruct_state(air_thermo, np.array([np.nan, 1.0]))


# ---------------------------------------------------------------------------
# Closure
# ---------------------------------------------------------------------------


class TestSolveClosure:
    def test_inert_single_species_converges_in_one_iteration(self, water_thermo):
        T0, P0 = 1200.0, 5.0e5
        x = np.array([1.0])
        c = np.array([P0 / (R_J_KMOL * T0)])
        U = water_thermo.mixture_internal_energy_mass(T0, x)

        result = solve_closure(
            water_thermo, reconstruct_state(water_thermo, c), U, T0, P0
        )

        assert result.converged
        assert result.iterations == 1
        assert result.temperature == pytest.approx(T0, rel=1e-4)
        assert result.pressure == pytest.approx(P0, rel=1e-4)

    def test_recovers_state_from_poor_seeds(self, air_thermo):
        T_true, P_true = 1500.0, 3.0e5
        x = np.array([0.21, 0.79])
        c = x * P_true / (R_J_KMOL * T_true)
        U = air_thermo.mixture_internal_energy_mass(T_true, x)

        result = solve_closure(
            air_thermo, reconstruct_state(air_thermo, c), U, 300.0, 101325.0,
            max_iterations=50, tolerance=1e-10,
        )

        assert result.converged
        assert result.iterations > 1
        assert result.temperature == pytest.approx(T_true, rel=1e-7)
        assert result.pressure == pytest.approx(P_true, rel=1e-7)

    def test_budget_exhausted_returns_last_iterate(self, air_thermo):
        T_true, P_true = 1500.0, 3.0e5
        x = np.array([0.21, 0.79])
        c = x * P_true / (R_J_KMOL * T_true)
        U = air_thermo.mixture_internal_energy_mass(T_true, x)

        result = solve_closure(
            air_thermo, reconstruct_state(air_thermo, c), U, 300.0, 101325.0,
            max_iterations=2,
        )

        assert not result.converged
        assert result.iterations == 2
        assert result.residual >= 1e-4
        assert result.pressure == pytest.approx(c.sum() * R_J_KMOL * result.temperature)

    def test_pressure_follows_ideal_gas_law(self, air_thermo):
        x = np.array([0.21, 0.79])
        c = 0.05 * x
        U = air_thermo.mixture_internal_energy_mass(900.0, x)
        result = solve_closure(air_thermo, reconstruct_state(air_thermo, c), U, 900.0, 101325.0)
        assert result.pressure == pytest.approx(0.05 * R_J_KMOL * result.temperature)

    def test_scaling_concentrations_keeps_temperature(self, air_thermo):
        x = np.array([0.3, 0.7])
        U = air_thermo.mixture_internal_energy_mass(1100.0, x)
        results = [
            solve_closure(
                air_thermo, reconstruct_state(air_thermo, k * 0.02 * x), U, 1000.0, 1.0e5,
                max_iterations=50, tolerance=1e-10,
            )
            for k in (1.0, 3.0, 0.1)
        ]
        for res, k in zip(results, (1.0, 3.0, 0.1)):
            assert res.temperature == pytest.approx(1100.0, rel=1e-7)
            assert res.pressure / k == pytest.approx(results[0].pressure, rel=1e-7)

    def test_state_property(self, water_thermo):
        x = np.array([1.0])
        U = water_thermo.mixture_internal_energy_mass(1000.0, x)
        result = solve_closure(water_thermo, reconstruct_state(water_thermo, [0.01]), U, 1000.0, 1e5)
        assert result.state.temperature == result.temperature
        assert result.state.pressure == result.pressure

    def test_constant_cp_closed_form(self, constant_cp):
        """For cp = 3.5 R and equal molecular weights, u = 2.5 R T / W."""
        thermo = NasaThermodynamicMap("cp", [constant_cp("X", molecular_weight=20.0)])
        U = 2.5 * R_J_KMOL * 750.0 / 20.0
        result = solve_closure(
            thermo, reconstruct_state(thermo, [0.02]), U, 300.0, 1e5,
            max_iterations=100, tolerance=1e-10,
        )
        assert result.temperature == pytest.approx(750.0, rel=1e-7)
