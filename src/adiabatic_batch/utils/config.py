"""Configuration management for adiabatic-batch."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Literal, cast

import yaml
from pydantic import BaseModel, Field

from adiabatic_batch.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ReactorConfig(BaseModel):
    """Configuration for the adiabatic batch reactor ODE system."""

    initial_temperature: float = Field(..., gt=0.0, description="Initial temperature (K)")
    initial_pressure: float = Field(..., gt=0.0, description="Initial pressure (Pa)")
    internal_energy: float | None = Field(
        None, description="Mass internal energy (J/kg); derived from the initial state if None"
    )
    max_closure_iterations: int = Field(
        default=10, ge=1, description="Maximum successive substitutions for T/P closure"
    )
    closure_tolerance: float = Field(
        default=1e-4, gt=0.0, description="Relative pressure change for closure convergence"
    )
    on_non_convergence: Literal["warn", "ignore", "raise"] = Field(
        default="warn", description="Policy when the closure budget is exhausted"
    )


class SimulationConfig(BaseModel):
    """Configuration for the integration driver."""

    t_end: float = Field(..., gt=0.0, description="End time (s)")
    n_points: int = Field(default=100, ge=2, description="Number of output times")
    method: str = Field(default="BDF", description="solve_ivp method")
    rtol: float = Field(default=1e-6, gt=0.0, description="Relative tolerance")
    atol: float = Field(default=1e-12, gt=0.0, description="Absolute tolerance")


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format ('text' or 'json')")
    log_file: str | None = Field(None, description="Log file path")
    module_levels: dict[str, str] = Field(
        default_factory=dict,
        description="Per-module log levels",
    )


class CaseConfig(BaseModel):
    """Top-level case configuration."""

    reactor: ReactorConfig
    simulation: SimulationConfig | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR:default} patterns with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(3)
        value = os.environ.get(var_name)
        if value is not None:
            return value
        if default is not None:
            return cast(str, default)
        return match.group(0)

    return re.sub(r"\$\{(\w+)(:([^}]*))?\}", _replace, text)


def load_config(path: str | Path) -> CaseConfig:
    """Load configuration from YAML file with env var interpolation.

    Supports ``${VAR}`` and ``${VAR:default}`` syntax for environment
    variable substitution in string values.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw_text = path.read_text()
        interpolated = _interpolate_env_vars(raw_text)
        data = yaml.safe_load(interpolated)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")

    try:
        config = CaseConfig(**data)
    except Exception as exc:
        raise ConfigurationError(f"Invalid config structure: {exc}") from exc

    logger.info(f"Loaded config from {path}")
    return config


def save_config(config: CaseConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration object.
        path: Output path.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        data = config.model_dump()
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    except Exception as exc:
        raise ConfigurationError(f"Failed to save config to {path}: {exc}") from exc

    logger.info(f"Saved config to {path}")


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    For nested dicts, recursively merges rather than replacing.
    For all other types, the override value wins.

    Args:
        base: Base configuration.
        override: Override values (takes precedence).

    Returns:
        New merged configuration dictionary.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "ReactorConfig",
    "SimulationConfig",
    "LoggingConfig",
    "CaseConfig",
    "load_config",
    "save_config",
    "merge_configs",
]
