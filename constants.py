# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They hold the
default particle network parameters, rendering properties and default
window settings. Anything listed under the "network" section of
config.json overrides the matching default here.
"""

# Visualization settings
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
FPS = 60
BACKGROUND_COLOR = (5, 10, 20) # Near-black navy

# --- Particle Network Defaults ---
PARTICLE_COUNT = 80
# Maximum inter-particle distance at which an edge is drawn.
CONNECTION_DISTANCE = 180.0
# Maximum distance at which the pointer repels a particle.
POINTER_RADIUS = 150.0
POINTER_FORCE = 0.02
# Speed above which damping is applied each tick (units per tick).
SPEED_CAP = 1.0
DAMPING = 0.99

# --- Particle Initialization Ranges ---
INITIAL_SPEED_SPREAD = 0.5
RADIUS_MIN = 0.5
RADIUS_SPREAD = 2.0
OPACITY_MIN = 0.2
OPACITY_SPREAD = 0.5
# Probability thresholds used when picking a color class.
ACCENT_THRESHOLD = 0.7
PRIMARY_THRESHOLD = 0.5

# --- Edge Rendering ---
EDGE_MAX_ALPHA = 0.15
EDGE_WIDTH = 0.5

# Default palette, indexed by ColorClass: accent, primary, dim.
NETWORK_COLORS = [
    (0, 240, 255),   # Accent cyan (#00f0ff)
    (0, 102, 255),   # Primary blue (#0066ff)
    (26, 58, 92)     # Dim navy (#1a3a5c)
]
