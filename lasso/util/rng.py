"""RNG utilities for deterministic simulation.

Every random choice in the game draws from the engine's seeded
``random.Random``. Helpers here fail loudly when an RNG was not passed in,
rather than silently creating an unseeded fallback.
"""

import random
from typing import Generic, List, Optional, Sequence, TypeVar

from lasso.exceptions import SimulationError

T = TypeVar("T")


class MissingRNGError(SimulationError):
    """Raised when an RNG is required but not available.

    This indicates a bug in the simulation setup: all random choices should
    use the engine's RNG.
    """


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Raises:
        MissingRNGError: If rng is None
    """
    if rng is None:
        raise MissingRNGError(f"RNG required: {context}. Pass the engine RNG explicitly.")
    return rng


class ShuffleBag(Generic[T]):
    """Draws items in shuffled cycles so each appears once per cycle.

    Spreads kinds evenly across a wave instead of allowing long runs of the
    same item that independent draws produce.

    Example:
        bag = ShuffleBag([ShapeKind.RED, ShapeKind.GREEN, ShapeKind.BLUE], rng)
        kinds = [bag.draw() for _ in range(6)]  # each primary exactly twice
    """

    def __init__(self, items: Sequence[T], rng: Optional[random.Random]) -> None:
        if not items:
            raise ValueError("ShuffleBag needs at least one item")
        self._items: List[T] = list(items)
        self._rng = require_rng_param(rng, "ShuffleBag.__init__")
        self._remaining: List[T] = []

    def draw(self) -> T:
        if not self._remaining:
            self._remaining = list(self._items)
            self._rng.shuffle(self._remaining)
        return self._remaining.pop()

    def __len__(self) -> int:
        """Items left before the next reshuffle."""
        return len(self._remaining)
