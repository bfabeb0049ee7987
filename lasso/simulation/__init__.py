"""Fixed-step simulation engine and render snapshots."""

from lasso.simulation.engine import CaptureEngine
from lasso.simulation.snapshot import PathView, PenView, RenderSnapshot, ShapeView

__all__ = [
    "CaptureEngine",
    "PathView",
    "PenView",
    "RenderSnapshot",
    "ShapeView",
]
