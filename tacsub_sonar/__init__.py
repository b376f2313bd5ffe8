"""
tacsub-sonar: Sonar detection tables for a tactical submarine game.

Turns sonar-equation parameters into the detection probabilities and dice
modifiers used at the game table, and computes the chance that a ship is
alerted under the two-dice roll model.

Modules
-------
detection
    Dice model, sonar equation, detection tables, alert probability
acoustics
    Acoustics providers (wavelength, directivity, transmission loss)
config
    Table configuration, directivity options, sound velocity profiles
utils
    Unit constants and table output
"""

__version__ = "0.1.0"
__author__ = "tacsub-sonar Contributors"

from tacsub_sonar.detection import (
    DiceSumDistribution,
    alert_probability,
    build_detection_table,
    build_detection_tables,
)
from tacsub_sonar.config import SonarTableConfig, ConfigurationManager

__all__ = [
    "__version__",
    "DiceSumDistribution",
    "alert_probability",
    "build_detection_table",
    "build_detection_tables",
    "SonarTableConfig",
    "ConfigurationManager",
]
