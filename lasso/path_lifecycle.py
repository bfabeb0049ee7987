"""Path lifecycle: creation, destruction, age ordering and eviction.

``LivePaths`` is the single source of truth for path age order. It is only
written through the explicit ``on_path_created`` / ``on_path_destroyed``
pair, which ``PathLifecycleManager`` calls from its create and destroy
operations. No other component touches it.

``PathLifecycleManager`` owns every ``Path`` for the session. It keeps the
entity registry's kinematic obstacles in step with each path's segments and
evicts the oldest path once more than ``max_live_paths`` exist.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional

from lasso.entities import Pen
from lasso.events import EventBus, PathDestroyedEvent
from lasso.geometry import Point
from lasso.paths import Path
from lasso.protocols import EntityRegistry

logger = logging.getLogger(__name__)


class LivePaths:
    """Insertion-ordered registry of existing path IDs (oldest first)."""

    def __init__(self, cap: int) -> None:
        self.cap = cap
        self._order: List[int] = []

    def on_path_created(self, path_id: int) -> List[int]:
        """Record a new path.

        Returns:
            IDs that must be evicted to get back under the cap, oldest first
        """
        self._order.append(path_id)
        overflow = len(self._order) - self.cap
        return list(self._order[:overflow]) if overflow > 0 else []

    def on_path_destroyed(self, path_id: int) -> bool:
        if path_id in self._order:
            self._order.remove(path_id)
            return True
        return False

    def age_rank(self, path_id: int) -> Optional[int]:
        """0 for the newest path, increasing with age; None if unknown."""
        if path_id not in self._order:
            return None
        return len(self._order) - 1 - self._order.index(path_id)

    def opacity(self, path_id: int) -> float:
        """Fade factor for rendering: 1.0 for the newest, minus 1/cap per rank."""
        rank = self.age_rank(path_id)
        if rank is None:
            return 0.0
        return max(0.0, 1.0 - rank / self.cap)

    def oldest_first(self) -> List[int]:
        return list(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, path_id: object) -> bool:
        return path_id in self._order


class PathLifecycleManager:
    """Creates, closes, restores and destroys paths for one game session."""

    def __init__(
        self,
        registry: EntityRegistry,
        *,
        max_live_paths: int,
        event_bus: Optional[EventBus] = None,
        frame_source: Optional[Callable[[], int]] = None,
    ) -> None:
        self._registry = registry
        self._event_bus = event_bus
        self._frame_source = frame_source or (lambda: 0)
        self._paths: Dict[int, Path] = {}
        self._pens: Dict[int, Pen] = {}
        self._next_id = 1
        self.live = LivePaths(max_live_paths)

    def bind_pen(self, pen: Pen) -> None:
        """Let destruction clear this pen's reference to a destroyed path."""
        self._pens[pen.pen_id] = pen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, path_id: Optional[int]) -> Optional[Path]:
        if path_id is None:
            return None
        return self._paths.get(path_id)

    def __contains__(self, path_id: object) -> bool:
        return path_id in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def all_paths(self) -> List[Path]:
        """Existing paths, oldest first."""
        return [self._paths[path_id] for path_id in self.live.oldest_first()]

    def open_paths(self) -> Iterator[Path]:
        return (path for path in self.all_paths() if not path.closed)

    def changed_loops(self) -> Iterator[Path]:
        """Closed paths whose containment must be (re)evaluated."""
        return (path for path in self.all_paths() if path.closed and path.changed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_path(self, pen: Pen, start: Point) -> Path:
        """Create a path seeded with ``start`` and attach it to ``pen``."""
        path = Path(path_id=self._next_id, pen_id=pen.pen_id, points=[start])
        self._next_id += 1
        self._paths[path.path_id] = path
        pen.path_id = path.path_id
        logger.debug("Pen #%d started path #%d at %s", pen.pen_id, path.path_id, start)

        for evicted in self.live.on_path_created(path.path_id):
            logger.debug("Evicting path #%d (cap %d)", evicted, self.live.cap)
            self.destroy_path(evicted, reason="evicted")
        return path

    def append_point(self, path: Path, point: Point) -> bool:
        """Append to an open path, registering the new segment as an obstacle."""
        previous = path.last_point
        if not path.append(point):
            return False
        if previous is not None:
            self._registry.add_obstacle(path.path_id, previous, point)
        return True

    def mark_closed(self, path: Path) -> None:
        """Replace a just-closed path's obstacles with the loop's edges."""
        self._register_segments(path, closed_ring=True)

    def restore_remainder(self, path: Path) -> bool:
        """Reopen ``path`` from its saved remainder.

        Returns:
            False if the path had no remainder
        """
        if not path.reopen_from_remainder():
            return False
        self._register_segments(path, closed_ring=False)
        logger.debug("Path #%d reopened from remainder (%d points)", path.path_id, len(path.points))
        return True

    def destroy_path(self, path_id: int, reason: str) -> bool:
        """Destroy a path. Returns False if it no longer exists."""
        path = self._paths.pop(path_id, None)
        if path is None:
            return False
        self.live.on_path_destroyed(path_id)
        self._registry.remove_obstacles(path_id)

        pen = self._pens.get(path.pen_id)
        if pen is not None and pen.path_id == path_id:
            pen.path_id = None

        logger.debug("Path #%d destroyed (%s)", path_id, reason)
        if self._event_bus is not None:
            self._event_bus.emit(
                PathDestroyedEvent(path_id=path_id, reason=reason, frame=self._frame_source())
            )
        return True

    def clear_all(self, reason: str) -> int:
        """Destroy every existing path; returns how many were removed."""
        removed = 0
        for path_id in self.live.oldest_first():
            if self.destroy_path(path_id, reason):
                removed += 1
        return removed

    def _register_segments(self, path: Path, closed_ring: bool) -> None:
        self._registry.remove_obstacles(path.path_id)
        points = path.points
        for start, end in zip(points, points[1:]):
            self._registry.add_obstacle(path.path_id, start, end)
        if closed_ring and len(points) > 2:
            self._registry.add_obstacle(path.path_id, points[-1], points[0])
