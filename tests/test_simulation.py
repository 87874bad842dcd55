"""Tests for the integration driver."""

from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pytest

from adiabatic_batch.exceptions import ConfigurationError, SolverError, ValidationError
from adiabatic_batch.simulation import BatchTrajectory, run_case, simulate
from adiabatic_batch.utils.config import CaseConfig, LoggingConfig, ReactorConfig, SimulationConfig
from adiabatic_batch.utils.constants import R_J_KMOL


@pytest.fixture
def c0_exo():
    return np.array([101325.0 / (R_J_KMOL * 1000.0), 0.0])


def _failed_result(y0):
    return SimpleNamespace(
        t=np.array([0.0]),
        y=np.asarray(y0, dtype=float)[:, None],
        success=False,
        message="Required step size is less than spacing between numbers.",
        nfev=3,
    )


# ---------------------------------------------------------------------------
# simulate
# ---------------------------------------------------------------------------


class TestSimulate:
    def test_full_conversion_reaches_adiabatic_temperature(self, exothermic_reactor, c0_exo):
        traj = simulate(exothermic_reactor, (0.0, 0.5), c0_exo, n_points=50)
        assert isinstance(traj, BatchTrajectory)
        assert traj.success
        assert traj.times.shape == (50,)
        assert traj.concentrations.shape == (50, 2)
        assert traj.temperatures[0] == pytest.approx(1000.0, rel=1e-6)
        # 2.5 T_end = 2.5 * 1000 + 1000
        assert traj.temperatures[-1] == pytest.approx(1400.0, abs=1.0)
        assert traj.species(exothermic_reactor, "A")[-1] < 1e-6 * c0_exo[0]

    def test_invariants_along_trajectory(self, exothermic_reactor, exothermic_thermo, c0_exo):
        traj = simulate(exothermic_reactor, (0.0, 0.2), c0_exo, n_points=40)
        u0 = exothermic_reactor.internal_energy

        np.testing.assert_allclose(traj.concentrations.sum(axis=1), c0_exo.sum(), rtol=1e-6)
        np.testing.assert_allclose(traj.mole_fractions.sum(axis=1), 1.0, rtol=1e-12)
        np.testing.assert_allclose(
            traj.pressures / traj.temperatures, traj.concentrations.sum(axis=1) * R_J_KMOL, rtol=1e-10
        )
        for T, x in zip(traj.temperatures, traj.mole_fractions):
            assert exothermic_thermo.mixture_internal_energy_mass(T, x) == pytest.approx(u0, rel=5e-4)
        assert np.all(np.diff(traj.temperatures) > -0.1)

    def test_custom_output_times(self, exothermic_reactor, c0_exo):
        t_eval = np.array([0.0, 0.01, 0.05])
        traj = simulate(exothermic_reactor, (0.0, 0.05), c0_exo, t_eval=t_eval, method="Radau")
        np.testing.assert_allclose(traj.times, t_eval)

    def test_run_id_propagated(self, exothermic_reactor, c0_exo):
        traj = simulate(exothermic_reactor, (0.0, 0.01), c0_exo, n_points=5, run_id="case-17")
        assert traj.run_id == "case-17"

    def test_generated_run_id(self, exothermic_reactor, c0_exo):
        traj = simulate(exothermic_reactor, (0.0, 0.01), c0_exo, n_points=5)
        assert len(traj.run_id) == 12

    def test_wrong_initial_shape(self, exothermic_reactor):
        with pytest.raises(ValidationError, match="c0"):
            simulate(exothermic_reactor, (0.0, 1.0), np.ones(3))

    def test_implicit_method_receives_jacobian(self, exothermic_reactor, c0_exo, monkeypatch):
        captured = {}

        def fake_integrate(func, t_span, y0, t_eval=None, method="BDF", **kwargs):
            captured.update(kwargs, method=method)
            return SimpleNamespace(t=np.array([0.0]), y=y0[:, None], success=True, message="ok", nfev=1)

        monkeypatch.setattr("adiabatic_batch.simulation.integrate_ode", fake_integrate)
        simulate(exothermic_reactor, (0.0, 1.0), c0_exo, method="BDF")
        assert captured["jac"] == exothermic_reactor.jac

        captured.clear()
        simulate(exothermic_reactor, (0.0, 1.0), c0_exo, method="RK45")
        assert captured["method"] == "RK45"
        assert "jac" not in captured

    def test_failure_reported(self, exothermic_reactor, c0_exo, monkeypatch):
        monkeypatch.setattr(
            "adiabatic_batch.simulation.integrate_ode",
            lambda func, t_span, y0, **kwargs: _failed_result(y0),
        )
        traj = simulate(exothermic_reactor, (0.0, 1.0), c0_exo)
        assert not traj.success
        assert "step size" in traj.message
        assert traj.temperatures.shape == (1,)

    def test_failure_raises_in_strict_mode(self, exothermic_reactor, c0_exo, monkeypatch):
        monkeypatch.setattr(
            "adiabatic_batch.simulation.integrate_ode",
            lambda func, t_span, y0, **kwargs: _failed_result(y0),
        )
        with pytest.raises(SolverError, match="failed"):
            simulate(exothermic_reactor, (0.0, 1.0), c0_exo, strict=True)


# ---------------------------------------------------------------------------
# run_case
# ---------------------------------------------------------------------------


class TestRunCase:
    def test_derives_internal_energy(self, exothermic_thermo, exothermic_kinetics, restore_package_logger):
        config = CaseConfig(
            reactor=ReactorConfig(initial_temperature=1000.0, initial_pressure=101325.0),
            simulation=SimulationConfig(t_end=0.5, n_points=10),
            logging=LoggingConfig(level="WARNING"),
        )
        reactor, traj = run_case(config, exothermic_thermo, exothermic_kinetics, [1.0, 0.0])
        assert reactor.internal_energy == pytest.approx(2.5 * R_J_KMOL * 1000.0 / 28.0)
        assert traj.times.shape == (10,)
        assert traj.temperatures[-1] == pytest.approx(1400.0, abs=1.0)

    def test_uses_given_internal_energy(self, exothermic_thermo, exothermic_kinetics, restore_package_logger):
        # internal energy of pure A at 1100 K, seeded at 1000 K
        u = 2.5 * R_J_KMOL * 1100.0 / 28.0
        config = CaseConfig(
            reactor=ReactorConfig(
                initial_temperature=1000.0, initial_pressure=101325.0, internal_energy=u
            ),
            simulation=SimulationConfig(t_end=1e-4, n_points=2),
            logging=LoggingConfig(level="WARNING"),
        )
        reactor, traj = run_case(config, exothermic_thermo, exothermic_kinetics, [1.0, 0.0])
        assert reactor.internal_energy == u
        assert traj.temperatures[0] == pytest.approx(1100.0, rel=5e-4)

    def test_missing_simulation_section(self, exothermic_thermo, exothermic_kinetics):
        config = CaseConfig(
            reactor=ReactorConfig(initial_temperature=1000.0, initial_pressure=101325.0)
        )
        with pytest.raises(ConfigurationError, match="simulation"):
            run_case(config, exothermic_thermo, exothermic_kinetics, [1.0, 0.0])
