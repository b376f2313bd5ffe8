"""
Sonar Equation and Game Modifiers
=================================

Converts sonar-equation terms into the probabilities and dice modifiers
used by the tactical submarine game.

Signal excess follows the classic form

    SE = SL - TL [- TL] [+ TS] - (NL - DI) - DT

with the second transmission loss and the target strength applied only
for active (echo) sonar. The noise level NL is treated as Gaussian with
mean ``noise_mean`` and standard deviation ``noise_sd``; ``se`` uses the
mean noise level.

The modifier scale maps one noise standard deviation onto one standard
deviation of the 2d6 roll, so a sonar whose break-even noise level sits
one noise sd above the mean gets roughly +2.4 on the dice.

References:
- Urick, R.J. (1983). Principles of Underwater Sound
"""

from dataclasses import dataclass
from typing import Dict

import numpy as np
from scipy import stats

from tacsub_sonar.detection.dice import mean_2d6, sd_2d6


def signal_excess_passive(
    source_level: float,
    transmission_loss: float,
    noise_mean: float,
    directivity_index: float,
    detection_threshold: float,
) -> float:
    """
    Passive signal excess with one-way propagation.

    Parameters
    ----------
    source_level : float
        Radiated noise of the target (dB)
    transmission_loss : float
        One-way transmission loss (dB)
    noise_mean : float
        Mean ambient noise level (dB)
    directivity_index : float
        Receiver directivity index (dB)
    detection_threshold : float
        Detection threshold (dB)

    Returns
    -------
    se : float
        Signal excess (dB)
    """
    return (source_level - transmission_loss - noise_mean
            + directivity_index - detection_threshold)


def signal_excess_active(
    source_level: float,
    transmission_loss: float,
    target_strength: float,
    noise_mean: float,
    directivity_index: float,
    detection_threshold: float,
) -> float:
    """
    Active signal excess with round-trip propagation.

    Transmission loss is applied twice (out and back) and the target
    strength of the reflecting object is added.
    """
    return (source_level - 2.0 * transmission_loss + target_strength
            - noise_mean + directivity_index - detection_threshold)


def sonar_threshold(se, noise_mean: float):
    """
    Noise level at which the signal excess breaks even.

    Detection succeeds whenever the sampled noise level falls below this
    value. Works element-wise on arrays.
    """
    return se + noise_mean


def detection_prob(se, noise_mean: float, noise_sd: float):
    """
    Probability of detection for a given signal excess.

    ``P(NL < sonar_threshold(se))`` with NL ~ Normal(noise_mean, noise_sd).
    Monotone non-decreasing in ``se``, 0 at -inf and 1 at +inf.
    """
    if noise_sd <= 0:
        raise ValueError("noise_sd must be positive")
    threshold = sonar_threshold(se, noise_mean)
    prob = stats.norm.cdf(threshold, loc=noise_mean, scale=noise_sd)
    return prob if np.ndim(prob) else float(prob)


def modifier_scale(noise_sd: float) -> float:
    """Dice units per dB of noise."""
    return sd_2d6 / noise_sd


def raw_modifier(se_threshold, noise_mean: float, noise_sd: float):
    """
    Rescale a break-even noise level into 2d6 units.

    ``(sd_2d6 / noise_sd) * (se_threshold - noise_mean)``
    """
    return modifier_scale(noise_sd) * (se_threshold - noise_mean)


@dataclass(frozen=True)
class DetectionThresholds:
    """
    Detection thresholds of both sonar classes on the dice scale.

    Attributes
    ----------
    passive : float
        Passive threshold, ``(sd_2d6/noise_sd) * dt_passive + mean_2d6``
    active : float
        Active threshold, ``(sd_2d6/noise_sd) * dt_active + mean_2d6``
    """
    passive: float
    active: float

    @classmethod
    def from_decibels(
        cls,
        dt_passive: float,
        dt_active: float,
        noise_sd: float,
    ) -> "DetectionThresholds":
        scale = modifier_scale(noise_sd)
        return cls(
            passive=scale * dt_passive + mean_2d6,
            active=scale * dt_active + mean_2d6,
        )

    @property
    def overall(self) -> float:
        """Mean of the two class thresholds."""
        return float(np.mean([self.passive, self.active]))

    @property
    def adjust(self) -> Dict[str, float]:
        """Offset of each class from the shared zero point."""
        overall = self.overall
        return {
            "passive": self.passive - overall,
            "active": self.active - overall,
        }

    def as_records(self) -> list:
        """Rows of the two-row class threshold table."""
        return [
            {"class": "passive", "threshold": self.passive},
            {"class": "active", "threshold": self.active},
        ]
