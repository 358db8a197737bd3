"""
Project-wide parameters for the spin wheel.

These values define the default rules of a spin and the bounds the
settings layer accepts. The core algorithms never read the bounds.
"""

# Persisted state format version
STATE_VERSION = 1

# Default state file (relative to the working directory)
DEFAULT_STATE_FILE = "wheel_state.json"

# Wheel settings defaults
DEFAULT_BASE_SLOT_COUNT = 1
DEFAULT_SPIN_DURATION_MS = 2800
DEFAULT_BOOST_MULTIPLIER = 3

# Accepted ranges (inclusive)
BASE_SLOT_COUNT_RANGE = (1, 5)
SPIN_DURATION_MS_RANGE = (2000, 4000)
BOOST_MULTIPLIER_RANGE = (2, 10)

# A spin always makes at least this many full turns before stopping
MIN_FULL_TURNS = 3

# Frame interval for the terminal animation (~60 fps)
DEFAULT_FRAME_MS = 16

FULL_CIRCLE = 360.0
