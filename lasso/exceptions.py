"""Lasso exception hierarchy.

Centralised base classes so failures are narrow and easy to diagnose.
Recoverable gameplay conditions never raise; these are for contract
violations and bad configuration.
"""


class LassoError(Exception):
    """Root of all lasso domain exceptions."""


class SimulationError(LassoError):
    """Errors during simulation execution (engine, systems, entities)."""


class StateTransitionError(SimulationError):
    """A path or capture session was driven through an impossible transition."""


class ConfigurationError(LassoError):
    """Invalid or missing configuration."""
