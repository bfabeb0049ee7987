"""Main entry point for the lasso capture game.

This module provides command-line options to run the game:
- Interactive mode (default): pygame window, draw loops with the mouse
- Headless mode: a scripted pen draws loops, stats only, faster than realtime
"""

import argparse
import logging
import math
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)


def log_final_score(engine) -> None:
    from lasso.config.display import SEPARATOR_WIDTH

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("FINAL SCORE (shapes left on the field)")
    logger.info("=" * SEPARATOR_WIDTH)
    for kind, count in engine.final_score().items():
        logger.info("  %-8s %d", kind.value, count)
    summary = engine.score.summary()
    logger.info("Captures: %d, shapes ejected: %d", summary["captures"], summary["shapes_ejected"])
    logger.info("Fusions: %s", summary["fusions"] or "none")
    logger.info("=" * SEPARATOR_WIDTH)


def run_interactive(seed=None):
    """Run the game in a pygame window."""
    from lasso.config.display import SEPARATOR_WIDTH
    from lasso.config.simulation_config import default_config
    from lasso.math_utils import Vector2
    from lasso.simulation import CaptureEngine

    try:
        import pygame

        from rendering.game_renderer import GameRenderer
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)

    config = default_config(headless=False)
    engine = CaptureEngine(config, seed=seed)
    engine.setup()
    pen = engine.add_pen()

    pygame.init()
    try:
        width, height = config.display.screen_width, config.display.screen_height
        try:
            screen = pygame.display.set_mode((width, height))
            pygame.display.set_caption("Lasso - Capture & Fusion")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return

        renderer = GameRenderer(screen, pygame.font.Font(None, 22))
        clock = pygame.time.Clock()

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("LASSO - CAPTURE & FUSION")
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("Controls:")
        logger.info("  Hold mouse button - draw a trail, cross it to close a loop")
        logger.info("  P     - Pause/Resume")
        logger.info("  R     - Restart")
        logger.info("  ESC   - Quit")
        logger.info("=" * SEPARATOR_WIDTH)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_p:
                        engine.paused = not engine.paused
                    elif event.key == pygame.K_r:
                        log_final_score(engine)
                        engine.reset()
                        engine.setup()

            mouse_x, mouse_y = pygame.mouse.get_pos()
            drawing = pygame.mouse.get_pressed()[0]
            engine.set_pen_input(
                pen.pen_id, Vector2(mouse_x - width / 2.0, height / 2.0 - mouse_y), drawing
            )
            engine.update()

            counts = engine.final_score()
            hud = [
                "  ".join(f"{kind.value}:{count}" for kind, count in counts.items() if count),
                f"Captures: {engine.score.captures}" + ("  [PAUSED]" if engine.paused else ""),
            ]
            renderer.draw(engine.render_state(), hud)
            pygame.display.flip()
            clock.tick(config.display.frame_rate)

        log_final_score(engine)
    finally:
        pygame.quit()


def run_headless(max_frames: int, stats_interval: int, seed=None):
    """Run the game without a window, driving one pen along looping strokes.

    Each stroke follows a trochoid (a circle whose centre drifts sideways),
    which crosses itself once per revolution, so the engine sees a steady
    stream of closed loops. A new stroke starts every ``stroke_frames``.

    Args:
        max_frames: Number of frames to simulate
        stats_interval: Log stats every N frames
        seed: Optional random seed for deterministic behavior
    """
    from lasso.config.simulation_config import default_config
    from lasso.math_utils import Vector2
    from lasso.simulation import CaptureEngine

    config = default_config(headless=True)
    engine = CaptureEngine(config, seed=seed)
    engine.setup()
    pen = engine.add_pen()

    half_w, half_h = config.display.half_extents
    stroke_frames = 240
    radius = min(half_w, half_h) * 0.4
    angle_step = 2.0 * math.pi / 90.0
    drift = 1.5

    start = None
    for frame in range(max_frames):
        stroke_step = frame % stroke_frames
        if stroke_step == 0:
            start = Vector2(
                engine.rng.uniform(-half_w + radius, 0.0),
                engine.rng.uniform(-half_h + radius, half_h - radius),
            )
        # Lift the pen for one frame between strokes
        drawing = stroke_step != stroke_frames - 1
        angle = stroke_step * angle_step
        position = Vector2(
            start.x + drift * stroke_step + radius * math.cos(angle),
            start.y + radius * math.sin(angle),
        )
        engine.set_pen_input(pen.pen_id, position, drawing)
        engine.update()

        if stats_interval > 0 and engine.frame_count % stats_interval == 0:
            info = engine.get_debug_info()
            logger.info(
                "Frame %d: %d shapes, %d paths, score %s",
                info["frame"],
                info["shapes"],
                info["paths"],
                info["score"],
            )

    log_final_score(engine)
    return engine


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Lasso - enclosure capture & fusion arcade game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play in a window (default)
  python main.py

  # Run headless with a scripted pen
  python main.py --headless --max-frames 5000 --stats-interval 500

  # Reproducible headless run
  python main.py --headless --max-frames 2000 --seed 42
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no window, stats only)"
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=3600,
        help="Frames to simulate in headless mode (default: 3600)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=300,
        help="Log stats every N frames in headless mode (default: 300)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.headless:
        logger.info("Starting headless run...")
        logger.info(
            "Configuration: %d frames, stats every %d frames", args.max_frames, args.stats_interval
        )
        run_headless(args.max_frames, args.stats_interval, seed=args.seed)
    else:
        run_interactive(seed=args.seed)


if __name__ == "__main__":
    main()
