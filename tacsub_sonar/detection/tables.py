"""
Detection Tables
================

Builds the passive and active detection tables used by the game.

Each table is a full cross-join of the target categories (speeds for
passive sonar, reflecting objects for active sonar) with every
(detector depth, emitter depth, range) combination. For each row the
sonar equation gives a signal excess, which is turned into a break-even
noise level, a detection probability and a dice modifier. The modifiers
of both tables are then centered on a shared zero point so the two scales
can be compared directly.
"""

from dataclasses import dataclass
from typing import Mapping, Optional
import logging

import numpy as np
import pandas as pd

from tacsub_sonar.acoustics.provider import AcousticsProvider
from tacsub_sonar.config.settings import CommonConfig
from tacsub_sonar.detection.sonar_equation import (
    DetectionThresholds,
    signal_excess_active,
    signal_excess_passive,
    sonar_threshold,
    detection_prob,
    raw_modifier,
)
from tacsub_sonar.utils.constants import DEPTH_CLASS_PAIRS

logger = logging.getLogger(__name__)

TL_COLUMNS = ["detector", "emitter", "range", "tl"]
DERIVED_COLUMNS = ["se", "se_threshold", "detection_prob", "raw_modifier"]


def build_tl_table(provider: AcousticsProvider, common: CommonConfig) -> pd.DataFrame:
    """
    Transmission loss for every detector/emitter depth class and range.

    Parameters
    ----------
    provider : AcousticsProvider
        Source of transmission loss values
    common : CommonConfig
        Depths and ranges to tabulate

    Returns
    -------
    tl : pd.DataFrame
        Columns ``detector, emitter, range, tl``; range in feet
    """
    ranges = common.ranges_ft
    frames = []
    for detector, emitter in DEPTH_CLASS_PAIRS:
        tl = provider.transmission_loss(
            ranges,
            common.detector_depth(detector),
            common.emitter_depth(emitter),
        )
        frames.append(pd.DataFrame({
            "detector": detector,
            "emitter": emitter,
            "range": ranges,
            "tl": np.asarray(tl, dtype=float),
        }))
    return pd.concat(frames, ignore_index=True)[TL_COLUMNS]


def build_detection_table(
    rows: pd.DataFrame,
    noise_mean: float,
    noise_sd: float,
    source_levels_by_category: Mapping[str, float],
    directivity_index: float,
    detection_threshold: float,
    target_strengths_by_category: Optional[Mapping[str, float]] = None,
    category_column: Optional[str] = None,
) -> pd.DataFrame:
    """
    Detection table for one sonar class.

    Passing ``target_strengths_by_category`` makes the table active:
    transmission loss counts twice and the category's target strength is
    added.

    Parameters
    ----------
    rows : pd.DataFrame
        Transmission loss table with ``detector, emitter, range, tl``
    noise_mean : float
        Mean noise level (dB)
    noise_sd : float
        Noise level standard deviation (dB)
    source_levels_by_category : mapping
        Source level for each category (dB)
    directivity_index : float
        Receiver directivity index (dB)
    detection_threshold : float
        Detection threshold (dB)
    target_strengths_by_category : mapping, optional
        Target strength for each category (dB); active tables only
    category_column : str, optional
        Name of the category column; ``speed`` for passive and ``source``
        for active tables by default

    Returns
    -------
    table : pd.DataFrame
        Columns ``category, detector, emitter, range, tl, se,
        se_threshold, detection_prob, raw_modifier``

    Raises
    ------
    ValueError
        If the active categories have no matching target strengths
    """
    active = target_strengths_by_category is not None
    if category_column is None:
        category_column = "source" if active else "speed"

    categories = list(source_levels_by_category)
    if active:
        missing = set(categories) - set(target_strengths_by_category)
        if missing:
            raise ValueError(
                f"No target strength for categories: {', '.join(sorted(missing))}"
            )

    missing_columns = set(TL_COLUMNS) - set(rows.columns)
    if missing_columns:
        raise ValueError(f"Rows lack columns: {', '.join(sorted(missing_columns))}")

    table = pd.DataFrame({category_column: categories}).merge(
        rows[TL_COLUMNS], how="cross"
    )

    source_level = table[category_column].map(source_levels_by_category).astype(float)
    if active:
        target_strength = table[category_column].map(target_strengths_by_category).astype(float)
        se = signal_excess_active(source_level, table["tl"], target_strength,
                                  noise_mean, directivity_index, detection_threshold)
    else:
        se = signal_excess_passive(source_level, table["tl"],
                                   noise_mean, directivity_index, detection_threshold)

    table["se"] = se
    table["se_threshold"] = sonar_threshold(table["se"], noise_mean)
    table["detection_prob"] = detection_prob(table["se"], noise_mean, noise_sd)
    table["raw_modifier"] = raw_modifier(table["se_threshold"], noise_mean, noise_sd)

    if table.duplicated([category_column, "detector", "emitter", "range"]).any():
        raise ValueError("Detection table has duplicate rows")

    return table[[category_column] + TL_COLUMNS + DERIVED_COLUMNS].copy()


@dataclass
class DetectionTables:
    """
    Passive and active detection tables with centered modifiers.

    Attributes
    ----------
    passive : pd.DataFrame
        Passive table, one row per speed, depth classes and range
    active : pd.DataFrame
        Active table, one row per reflecting object, depth classes and range
    thresholds : DetectionThresholds
        Class thresholds on the dice scale used for centering
    """
    passive: pd.DataFrame
    active: pd.DataFrame
    thresholds: DetectionThresholds

    @property
    def threshold_table(self) -> pd.DataFrame:
        """The two-row class threshold table."""
        return pd.DataFrame(self.thresholds.as_records())


def build_detection_tables(loaded) -> DetectionTables:
    """
    Build both detection tables from a loaded configuration.

    Parameters
    ----------
    loaded : LoadedConfiguration
        Resolved configuration from ``ConfigurationManager.load_config``

    Returns
    -------
    tables : DetectionTables
        Passive and active tables including the ``modifier`` column
    """
    config = loaded.config
    common = config.common

    tl = build_tl_table(loaded.provider, common)
    logger.info(f"Computed transmission loss for {len(tl)} depth/range combinations")

    passive = build_detection_table(
        tl,
        noise_mean=common.noise_mean,
        noise_sd=common.noise_sd,
        source_levels_by_category=config.passive.source_levels,
        directivity_index=loaded.passive_di,
        detection_threshold=config.passive.detection_threshold,
    )

    strengths = config.active.target_strengths
    active = build_detection_table(
        tl,
        noise_mean=common.noise_mean,
        noise_sd=common.noise_sd,
        source_levels_by_category={k: config.active.source_level for k in strengths},
        directivity_index=loaded.active_di,
        detection_threshold=config.active.detection_threshold,
        target_strengths_by_category=strengths,
    )

    thresholds = DetectionThresholds.from_decibels(
        config.passive.detection_threshold,
        config.active.detection_threshold,
        common.noise_sd,
    )
    adjust = thresholds.adjust
    passive["modifier"] = passive["raw_modifier"] - adjust["passive"]
    active["modifier"] = active["raw_modifier"] - adjust["active"]

    logger.debug(
        f"Class thresholds passive={thresholds.passive:.3f} "
        f"active={thresholds.active:.3f} overall={thresholds.overall:.3f}"
    )
    return DetectionTables(passive=passive, active=active, thresholds=thresholds)
