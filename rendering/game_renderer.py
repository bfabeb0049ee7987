"""Pygame rendering for the lasso capture game.

The renderer only reads ``RenderSnapshot`` objects; it never touches engine
state. World coordinates are centred on the origin with y pointing up, so
every point is flipped into screen space before drawing.
"""

import math
from typing import List, Optional, Tuple

import pygame

from lasso.config.display import (
    ACTIVE_PATH_COLOR,
    BACKGROUND_COLOR,
    KIND_COLORS,
    KIND_OUTLINES,
    PATH_COLOR,
    PATH_LINE_WIDTH,
    PEN_COLOR,
)
from lasso.geometry import Point
from lasso.simulation.snapshot import PathView, PenView, RenderSnapshot, ShapeView


def outline_points(
    sides: int, center: Tuple[float, float], size: float
) -> List[Tuple[float, float]]:
    """Vertices of a regular polygon with one vertex pointing up (screen space)."""
    cx, cy = center
    return [
        (
            cx + size * math.cos(-math.pi / 2 + 2 * math.pi * index / sides),
            cy + size * math.sin(-math.pi / 2 + 2 * math.pi * index / sides),
        )
        for index in range(sides)
    ]


class GameRenderer:
    """Draws shapes, trails and pens onto a pygame surface.

    Attributes:
        screen: Pygame surface to render to
        font: Font for the HUD, or None to skip it
    """

    def __init__(self, screen: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        self.screen = screen
        self.font = font
        self._overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)

    def to_screen(self, point: Point) -> Tuple[int, int]:
        width, height = self.screen.get_size()
        return (int(round(point[0] + width / 2)), int(round(height / 2 - point[1])))

    def draw(self, snapshot: RenderSnapshot, hud_lines: Optional[List[str]] = None) -> None:
        """Render one frame. Does not flip the display."""
        self.screen.fill(BACKGROUND_COLOR)

        # Trails fade with age, so they go through a per-pixel alpha layer
        self._overlay.fill((0, 0, 0, 0))
        for path in snapshot.paths:
            self.draw_path(path)
        self.screen.blit(self._overlay, (0, 0))

        for shape in snapshot.shapes:
            self.draw_shape(shape)
        for pen in snapshot.pens:
            self.draw_pen(pen)

        if hud_lines and self.font is not None:
            self.draw_hud(hud_lines)

    def draw_path(self, path: PathView) -> None:
        if len(path.points) < 2:
            return
        color = ACTIVE_PATH_COLOR if path.active else PATH_COLOR
        alpha = int(round(255 * max(0.0, min(1.0, path.opacity))))
        if alpha == 0:
            return
        points = [self.to_screen(point) for point in path.points]
        pygame.draw.lines(self._overlay, (*color, alpha), path.closed, points, PATH_LINE_WIDTH)

    def draw_shape(self, shape: ShapeView) -> None:
        color = KIND_COLORS.get(shape.kind, PATH_COLOR)
        sides, scale = KIND_OUTLINES.get(shape.kind, (0, 1.0))
        center = self.to_screen(shape.position)
        size = shape.radius * scale
        if sides == 0:
            pygame.draw.circle(self.screen, color, center, int(round(size)))
        else:
            pygame.draw.polygon(self.screen, color, outline_points(sides, center, size))
        if shape.held:
            # Held shapes get a ring while the capture animation owns them
            pygame.draw.circle(self.screen, PEN_COLOR, center, int(round(size)) + 3, 1)

    def draw_pen(self, pen: PenView) -> None:
        center = self.to_screen(pen.position)
        pygame.draw.circle(self.screen, PEN_COLOR, center, 4 if pen.active else 3, 0 if pen.active else 1)

    def draw_hud(self, lines: List[str]) -> None:
        y_offset = 10
        for line in lines:
            text_surface = self.font.render(line, True, (220, 220, 220))
            self.screen.blit(text_surface, (10, y_offset))
            y_offset += text_surface.get_height() + 2
