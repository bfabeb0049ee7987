"""Lightweight simulation configuration helpers."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from lasso.config.capture import (
    CONVERGE_RADIUS,
    CONVERGE_RATE,
    CONVERGE_TIMEOUT,
    DEPLETION_THRESHOLD,
    EJECT_SPEED,
    MAX_LIVE_PATHS,
)
from lasso.config.display import FRAME_RATE, SCREEN_HEIGHT, SCREEN_WIDTH
from lasso.config.spawning import (
    LARGE_WAVE_SIZE,
    MAX_SPAWN_VELOCITY,
    RESTITUTION,
    SHAPE_RADIUS,
    SMALL_WAVE_SIZE,
    SPAWN_MARGIN_PIXELS,
)
from lasso.exceptions import ConfigurationError


@dataclass
class DisplayConfig:
    """Arena size and step rate."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    frame_rate: int = FRAME_RATE

    @property
    def half_extents(self) -> tuple:
        return (self.screen_width / 2.0, self.screen_height / 2.0)


@dataclass
class CaptureConfig:
    """Path cap and capture animation tuning."""

    max_live_paths: int = MAX_LIVE_PATHS
    converge_rate: float = CONVERGE_RATE
    converge_timeout: float = CONVERGE_TIMEOUT
    converge_radius: float = CONVERGE_RADIUS
    eject_speed: float = EJECT_SPEED
    depletion_threshold: int = DEPLETION_THRESHOLD


@dataclass
class SpawnConfig:
    """Wave spawning and shape physics."""

    small_wave_size: int = SMALL_WAVE_SIZE
    large_wave_size: int = LARGE_WAVE_SIZE
    max_spawn_velocity: float = MAX_SPAWN_VELOCITY
    spawn_margin: float = SPAWN_MARGIN_PIXELS
    shape_radius: float = SHAPE_RADIUS
    restitution: float = RESTITUTION


@dataclass
class SimulationConfig:
    """Configuration toggles for simulation runtime behavior.

    Attributes:
        headless: Whether to run without UI dependencies.
        spawn_initial_wave: Request a wave when the engine is set up.
    """

    headless: bool = True
    spawn_initial_wave: bool = True
    display: DisplayConfig = field(default_factory=DisplayConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    spawning: SpawnConfig = field(default_factory=SpawnConfig)

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with top-level fields replaced."""
        return replace(self, **overrides)

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range."""
        problems = []
        if self.display.screen_width <= 0 or self.display.screen_height <= 0:
            problems.append("arena dimensions must be positive")
        if self.display.frame_rate <= 0:
            problems.append("frame_rate must be positive")
        if self.capture.max_live_paths < 1:
            problems.append("max_live_paths must be at least 1")
        if self.capture.converge_rate <= 0:
            problems.append("converge_rate must be positive")
        if self.capture.converge_timeout < 0:
            problems.append("converge_timeout must not be negative")
        if self.spawning.small_wave_size < 0 or self.spawning.large_wave_size < 0:
            problems.append("wave sizes must not be negative")
        if not 0.0 <= self.spawning.restitution <= 1.0:
            problems.append("restitution must be within [0, 1]")
        margin = self.spawning.spawn_margin
        if margin * 2 >= min(self.display.screen_width, self.display.screen_height):
            problems.append("spawn_margin leaves no room to spawn")
        if problems:
            raise ConfigurationError("Invalid simulation config: " + "; ".join(problems))


def default_config(headless: bool = True, overrides: Optional[dict] = None) -> SimulationConfig:
    """Build the default configuration, optionally overriding top-level fields."""
    config = SimulationConfig(headless=headless)
    if overrides:
        config = config.with_overrides(**overrides)
    return config
