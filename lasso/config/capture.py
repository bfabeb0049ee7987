"""Path, capture and capture-animation constants."""

# Maximum number of paths that may exist at once; the oldest is evicted
MAX_LIVE_PATHS = 4

# Exponential convergence rate towards the capture centre (per second)
CONVERGE_RATE = 10.0

# Seconds spent converging before the ejection phase starts
CONVERGE_TIMEOUT = 0.5

# Radius of the circle the captured shapes gather on
CONVERGE_RADIUS = 12.0

# Speed given to ejected shapes (pixels per second)
EJECT_SPEED = 450.0

# Fewer live shapes than this after a capture triggers a fresh wave
DEPLETION_THRESHOLD = 3
