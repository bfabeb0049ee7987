"""Pytest configuration and fixtures for lasso tests."""

import random

import pytest


# Square trail around the origin whose last segment crosses the first one,
# closing a loop that contains (0, 0).
SQUARE_STROKE = [(-50.0, -50.0), (50.0, -50.0), (50.0, 50.0), (-50.0, 50.0), (-40.0, -70.0)]

# Long lead-in along the x axis, then a small loop that crosses it at (-90, 0).
# The stitched remainder is longer than the loop, so it is kept.
LEAD_IN_STROKE = [(-300.0 + 20.0 * k, 0.0) for k in range(11)] + [
    (-80.0, 0.0),
    (-80.0, 20.0),
    (-90.0, 20.0),
    (-90.0, -10.0),
]


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def empty_engine():
    """Engine with no initial wave, so tests place every shape themselves."""
    from lasso.config.simulation_config import SimulationConfig
    from lasso.simulation import CaptureEngine

    engine = CaptureEngine(SimulationConfig(spawn_initial_wave=False), seed=42)
    engine.setup()
    return engine


@pytest.fixture
def simulation_engine():
    """Setup a capture engine for testing with deterministic seed."""
    from lasso.simulation import CaptureEngine

    engine = CaptureEngine(seed=42)
    engine.setup()
    return engine


@pytest.fixture
def drive_pen():
    """Return a helper that feeds one input sample per tick and steps the engine."""
    from lasso.math_utils import Vector2

    def drive(engine, pen, points, drawing=True):
        for x, y in points:
            engine.set_pen_input(pen.pen_id, Vector2(x, y), drawing)
            engine.update()

    return drive


@pytest.fixture
def square_stroke():
    return list(SQUARE_STROKE)


@pytest.fixture
def lead_in_stroke():
    return list(LEAD_IN_STROKE)


@pytest.fixture
def recorded_events():
    """Return a helper that records every event of the given types on a bus."""

    def record(event_bus, *event_types):
        received = []
        for event_type in event_types:
            event_bus.subscribe(event_type, received.append)
        return received

    return record
