# constants.py
"""
Application-level constants.

These values are static and do not change between render runs. They
provide the defaults used when config.json leaves a parameter out, plus
the preview window settings.
"""

# --- Flow Defaults ---
# Pixels per flow field cell.
DEFAULT_SCALE = 5
# Noise-space distance between neighbouring cells. Smaller is smoother.
DEFAULT_NOISE_STEP = 0.01
DEFAULT_ITERATIONS = 100
DEFAULT_MAX_SPEED = 2.0
DEFAULT_PARTICLE_COUNT = 10000
# Velocity gained per step from the local flow vector.
DEFAULT_ACCEL = 0.02

# --- Surface Defaults ---
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
BACKGROUND_COLOR = (0, 0, 0)  # Black

# --- Brush ---
# Brightness of the first and last frames. Later frames are drawn
# brighter so older trails read as darker.
BRUSH_MIN_VALUE = 0
BRUSH_MAX_VALUE = 255

# Visualization settings
FPS = 30
WINDOW_CAPTION = "Flow Field"
