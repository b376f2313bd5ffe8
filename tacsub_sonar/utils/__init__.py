"""
Utility functions and constants.

Constants
---------
FEET_PER_METER : float
    Feet in one meter
FEET_PER_RANGE_UNIT : float
    Feet in one game range unit

Output
------
OutputFormatter
    Save tables as CSV or JSON
read_table
    Read a saved table back
"""

from tacsub_sonar.utils.constants import (
    FEET_PER_METER,
    FEET_PER_YARD,
    FEET_PER_RANGE_UNIT,
    PASSIVE_SPEEDS,
    ACTIVE_SOURCES,
    DEPTH_CLASS_PAIRS,
)
from tacsub_sonar.utils.output import OutputFormatter, read_table

__all__ = [
    "FEET_PER_METER",
    "FEET_PER_YARD",
    "FEET_PER_RANGE_UNIT",
    "PASSIVE_SPEEDS",
    "ACTIVE_SOURCES",
    "DEPTH_CLASS_PAIRS",
    "OutputFormatter",
    "read_table",
]
