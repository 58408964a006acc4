from __future__ import annotations


class FlockError(Exception):
    """Base class for flocksim errors."""


class ConfigError(FlockError, ValueError):
    """Raised at startup when a configuration is rejected."""


class SimulationError(FlockError, RuntimeError):
    """Raised when a tick produces state that should be impossible."""
