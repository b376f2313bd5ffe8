"""
Unit conversions and fixed game constants for sonar table calculations.

Distances are carried in feet and sound speeds in feet per second
throughout the package.
"""

# Unit conversions
FEET_PER_METER = 3.28084
FEET_PER_YARD = 3.0
YARDS_PER_KILOYARD = 1000.0

# One game range unit expressed in feet
FEET_PER_RANGE_UNIT = 6000.0

# Die used for sonar rolls
DIE_SIDES = 6
DICE_PER_ROLL = 2

# Speed categories and their order in the passive table
PASSIVE_SPEEDS = ("creep", "slow", "fast", "flank")

# Reflecting object categories and their order in the active table
ACTIVE_SOURCES = ("sub", "surf")

# (detector, emitter) depth class pairs, in table order
DEPTH_CLASS_PAIRS = (
    ("shallow", "shallow"),
    ("shallow", "deep"),
    ("deep", "shallow"),
    ("deep", "deep"),
)

# Passive line array used when neither DI nor geometry is given
DEFAULT_LINE_ELEMENTS = 100
DEFAULT_LINE_SPACING = 0.5 / 12
DEFAULT_LINE_DI_BONUS = 40.0

# Active piston transducer used when neither DI nor diameter is given
DEFAULT_PISTON_DIAMETER = 18.0
