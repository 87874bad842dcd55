"""Plugin registry system for thermodynamic maps, kinetics maps and reactors.

Lets users register their own map implementations (for example a wrapper
around an external thermochemistry library) and look them up by name from a
case configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from adiabatic_batch.exceptions import RegistryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry:
    """Registry for plugin components.

    Example:
        >>> THERMO_REGISTRY = Registry("thermo")
        >>> @THERMO_REGISTRY.register("my_thermo")
        ... class MyThermo(AbstractThermodynamicMap):
        ...     pass
        >>> thermo_cls = THERMO_REGISTRY.get("my_thermo")
    """

    def __init__(self, name: str):
        """Initialize registry.

        Args:
            name: Registry name for error messages.
        """
        self.name = name
        self._registry: dict[str, type[Any]] = {}
        logger.debug(f"Initialized {name} registry")

    def register(self, key: str) -> Callable[[type[T]], type[T]]:
        """Decorator to register a class.

        Args:
            key: Unique identifier for this component.

        Returns:
            Decorator function.
        """

        def decorator(cls: type[T]) -> type[T]:
            if key in self._registry:
                logger.warning(f"Overwriting existing {self.name} registry entry: {key}")
            self._registry[key] = cls
            logger.debug(f"Registered {self.name}: {key} -> {cls.__name__}")
            return cls

        return decorator

    def get(self, key: str) -> type[Any]:
        """Retrieve a registered class.

        Args:
            key: Component identifier.

        Returns:
            Registered class.

        Raises:
            RegistryError: If key not found in registry.
        """
        if key not in self._registry:
            available = ", ".join(self._registry.keys())
            raise RegistryError(
                f"'{key}' not found in {self.name} registry. Available: {available}"
            )
        return self._registry[key]

    def list_keys(self) -> list[str]:
        """List all registered keys.

        Returns:
            Sorted list of registered keys.
        """
        return sorted(self._registry.keys())

    def __contains__(self, key: str) -> bool:
        """Check if key is registered."""
        return key in self._registry

    def __repr__(self) -> str:
        """String representation."""
        keys = ", ".join(self.list_keys())
        return f"Registry('{self.name}', keys=[{keys}])"


# Global registries
THERMO_REGISTRY = Registry("thermo")
KINETICS_REGISTRY = Registry("kinetics")
REACTOR_REGISTRY = Registry("reactors")


__all__ = [
    "Registry",
    "THERMO_REGISTRY",
    "KINETICS_REGISTRY",
    "REACTOR_REGISTRY",
]
