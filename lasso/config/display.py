"""Display and UI configuration constants."""

# Arena dimensions in pixels. World coordinates are centred on the origin.
SCREEN_WIDTH = 1088
SCREEN_HEIGHT = 612

# Fixed simulation step rate, in steps per second
FRAME_RATE = 60

BACKGROUND_COLOR = (17, 24, 39)
PATH_COLOR = (255, 255, 255)
ACTIVE_PATH_COLOR = (250, 204, 21)
PEN_COLOR = (255, 255, 255)
PATH_LINE_WIDTH = 2

# Shape fill colours keyed by ShapeKind value (tailwind 500 palette)
KIND_COLORS = {
    "red": (239, 68, 68),
    "green": (34, 197, 94),
    "blue": (59, 130, 246),
    "purple": (168, 85, 247),
    "yellow": (234, 179, 8),
    "cyan": (6, 182, 212),
    "white": (243, 244, 246),
}

# Headless mode
SEPARATOR_WIDTH = 60

# Outline per kind: (polygon sides, size scale). Zero sides draws a circle.
# Secondaries reuse their primary's outline at double size.
KIND_OUTLINES = {
    "red": (3, 1.0),
    "green": (6, 1.0),
    "blue": (4, 1.0),
    "purple": (6, 2.0),
    "yellow": (4, 2.0),
    "cyan": (3, 2.0),
    "white": (0, 1.5),
}
