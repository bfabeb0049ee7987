"""Shape spawning and physics constants."""

# Wave sizes: a small wave when the field is nearly empty, otherwise large
SMALL_WAVE_SIZE = 3
LARGE_WAVE_SIZE = 6

# Spawned shapes get velocity components uniform in +/- this value
MAX_SPAWN_VELOCITY = 100.0

# Keep spawned shapes this far from the arena walls
SPAWN_MARGIN_PIXELS = 20.0

# Collision radius of every shape
SHAPE_RADIUS = 10.0

# Fraction of speed kept when bouncing off a wall or a trail segment
RESTITUTION = 0.8
