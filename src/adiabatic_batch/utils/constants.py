"""Physical constants used across adiabatic-batch."""

from __future__ import annotations

# Universal gas constant (J/(kmol*K))
R_J_KMOL: float = 8314.46261815324

# Standard-state pressure (Pa)
P_ATM: float = 101325.0

__all__ = ["R_J_KMOL", "P_ATM"]
