"""Detection probability, dice modifiers and alert probability."""

from tacsub_sonar.detection.dice import (
    DiceSumDistribution,
    TWO_D6,
    mean_2d6,
    sd_2d6,
)

from tacsub_sonar.detection.sonar_equation import (
    DetectionThresholds,
    signal_excess_passive,
    signal_excess_active,
    sonar_threshold,
    detection_prob,
    modifier_scale,
    raw_modifier,
)

from tacsub_sonar.detection.tables import (
    DetectionTables,
    build_tl_table,
    build_detection_table,
    build_detection_tables,
)

from tacsub_sonar.detection.alert import (
    AlertModel,
    alert_probability,
    parse_modifiers,
)

__all__ = [
    # Dice
    'DiceSumDistribution',
    'TWO_D6',
    'mean_2d6',
    'sd_2d6',
    # Sonar equation
    'DetectionThresholds',
    'signal_excess_passive',
    'signal_excess_active',
    'sonar_threshold',
    'detection_prob',
    'modifier_scale',
    'raw_modifier',
    # Tables
    'DetectionTables',
    'build_tl_table',
    'build_detection_table',
    'build_detection_tables',
    # Alert
    'AlertModel',
    'alert_probability',
    'parse_modifiers',
]
