"""Core simulation constants.

These defaults are shared across headless and interactive runs.
"""

WIDTH, HEIGHT = 800, 800  # Canvas size in pixels
BALL_SIZE = 30            # Ball edge length in pixels
GRAVITY = 98              # Downward gravity (pixels/s^2)
MASS = 1.0                # Ball mass, normalized
DT = 1 / 60               # Fixed physics timestep
FPS = 60                  # Frame-rate cap for the interactive window
MAX_STEPS_PER_FRAME = 10  # Catch-up ticks allowed per frame before time is dropped

RESTITUTION = 0.3         # Velocity fraction kept on a wall hit (0 = dead stop)
DAMPING = 1.0             # Per-tick velocity multiplier (1 = undamped)

KP, KI, KD = 80.0, 0.0, 0.0
INTEGRAL_LIMIT = 1000.0   # Anti-windup bound on the integral accumulator
KP_STEP = 5.0
KI_STEP = 0.1
KD_STEP = 5.0
RESET_INTEGRAL_ON_RETARGET = False

HISTORY_LEN = 600         # Tick records kept for diagnostics

CAPTION = "PID Control Simulator"
FONT_NAMES = "arial,freesans"
FONT_SIZE = 24
BACKGROUND = (240, 240, 240)
TARGET_COLOR = (0, 200, 0)
BALL_COLOR = (200, 0, 0)
TEXT_COLOR = (0, 0, 0)
