"""Numerical utilities for reactor ODE systems."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt
from scipy.integrate import solve_ivp

if TYPE_CHECKING:
    from scipy.integrate._ivp.ivp import OdeResult

    from adiabatic_batch.reactors.base import AbstractODESystem

logger = logging.getLogger(__name__)


def integrate_ode(
    func: Callable[..., Any],
    t_span: tuple[float, float],
    y0: npt.NDArray[Any],
    t_eval: npt.NDArray[Any] | None = None,
    method: str = "BDF",
    **kwargs: Any,
) -> OdeResult:
    """Integrate ODE using scipy backend.

    Args:
        func: Right-hand side function dy/dt = func(t, y)
        t_span: Integration interval (t_start, t_end)
        y0: Initial condition, shape (n_states,)
        t_eval: Time points for solution output
        method: Integration method (RK45, Radau, BDF, LSODA, etc.)
        **kwargs: Additional arguments for solve_ivp (jac, rtol, atol, ...)

    Returns:
        scipy OdeResult; ``sol.y`` has shape (n_states, n_steps)
    """
    sol = solve_ivp(func, t_span, y0, method=method, t_eval=t_eval, **kwargs)
    if not sol.success:
        logger.warning(f"ODE integration warning: {sol.message}")
    return sol


def finite_difference_jacobian(
    func: Callable[[npt.NDArray[Any]], npt.NDArray[Any]],
    x: npt.NDArray[Any],
    epsilon: float = 1e-7,
    scheme: str = "forward",
) -> npt.NDArray[Any]:
    """Compute Jacobian via finite differences.

    The step for input j is ``epsilon * max(|x_j|, 1)``. Forward differences
    never step below x, which keeps non-negative states non-negative.

    Args:
        func: Function to differentiate, signature (x) -> y
        x: Input point, shape (n_inputs,)
        epsilon: Relative step size
        scheme: "forward" or "central"

    Returns:
        Jacobian matrix, shape (n_outputs, n_inputs)
    """
    if scheme not in ("forward", "central"):
        raise ValueError(f"Unknown finite difference scheme: {scheme}")

    x = np.asarray(x, dtype=float)
    n = x.shape[0]
    f0 = np.asarray(func(x), dtype=float)
    jac = np.empty((f0.shape[0], n))

    for i in range(n):
        step = epsilon * max(abs(x[i]), 1.0)
        e_i = np.zeros_like(x)
        e_i[i] = step
        f_plus = np.asarray(func(x + e_i), dtype=float)
        if scheme == "central":
            f_minus = np.asarray(func(x - e_i), dtype=float)
            jac[:, i] = (f_plus - f_minus) / (2.0 * step)
        else:
            jac[:, i] = (f_plus - f0) / step

    return jac


def check_jacobian(
    system: AbstractODESystem,
    y: npt.NDArray[Any],
    t: float = 0.0,
    epsilon: float = 1e-7,
) -> float:
    """Compare an ODE system's analytic Jacobian with finite differences.

    Args:
        system: ODE system providing ``derivatives`` and ``jacobian``.
        y: State at which to compare.
        t: Time passed to the system.
        epsilon: Relative finite difference step.

    Returns:
        max|J_analytic - J_fd| / max(max|J_analytic|, 1e-30)
    """
    _, analytic = system.jacobian(t, y)
    numeric = finite_difference_jacobian(lambda z: system.derivatives(t, z), y, epsilon=epsilon)
    scale = max(float(np.max(np.abs(analytic))), 1e-30)
    deviation = float(np.max(np.abs(analytic - numeric))) / scale
    logger.debug(f"Jacobian check for {system.name}: relative deviation {deviation:.3e}")
    return deviation


def detect_stiffness(
    eigenvalues: npt.NDArray[Any],
) -> tuple[bool, float]:
    """Detect stiffness from Jacobian eigenvalues.

    Args:
        eigenvalues: Eigenvalues of Jacobian matrix, shape (n_states,)

    Returns:
        Tuple of (is_stiff, stiffness_ratio)
            - is_stiff: True if stiffness ratio > 1000
            - stiffness_ratio: max(|lambda|) / min(|lambda|)
    """
    magnitudes = np.abs(eigenvalues)
    max_mag = float(np.max(magnitudes))
    min_mag = float(np.min(magnitudes))

    if min_mag < 1e-15:
        ratio = float("inf")
    else:
        ratio = max_mag / min_mag

    return ratio > 1000.0, ratio


__all__ = [
    "integrate_ode",
    "finite_difference_jacobian",
    "check_jacobian",
    "detect_stiffness",
]
