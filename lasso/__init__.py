"""Capture and fusion engine for the lasso arcade game.

This package contains the pure game logic with no UI dependencies. A pen
draws a trail through a field of moving shapes; when the trail crosses
itself the enclosed loop is evaluated and the shapes inside are fused or
scattered. Key modules include:

- geometry: segment intersection and polygon containment
- paths / path_lifecycle: trail recording, closure and the live-path registry
- containment / fusion: which shapes were caught and what they become
- capture_animation: the per-capture animation state machine
- simulation: the fixed-step engine (lasso.simulation.engine)

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from submodules for internal helpers.
"""

from . import kinds as kinds
from . import simulation as simulation

# Public API of the lasso package. Keep this list intentionally small.
__all__ = [
    "kinds",
    "simulation",
]
