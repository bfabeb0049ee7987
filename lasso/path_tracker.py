"""Records a pen's position into its path once per tick."""

import logging

from lasso.entities import Pen
from lasso.path_lifecycle import PathLifecycleManager

logger = logging.getLogger(__name__)


def record_point(pen: Pen, paths: PathLifecycleManager) -> bool:
    """Append the pen's current position to its path.

    - Inactive pen: nothing happens.
    - Active pen without a usable path: a new path is created, seeded with
      the current position. A reference to a path that no longer exists, or
      to one that has already closed, counts as no path.
    - Active pen with an open path: the position is appended only if it
      differs from the last recorded point, and the new segment becomes a
      kinematic obstacle.

    Returns:
        True if a point was recorded (including the seed of a new path)
    """
    if not pen.active:
        return False

    point = pen.position.as_tuple()
    path = paths.get(pen.path_id)
    if path is None or path.closed:
        if pen.path_id is not None:
            logger.debug("Pen #%d lost path #%s; starting a new one", pen.pen_id, pen.path_id)
        paths.create_path(pen, point)
        return True

    return paths.append_point(path, point)
