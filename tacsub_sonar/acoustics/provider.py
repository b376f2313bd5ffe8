"""
Acoustics Providers
===================

Boundary between the game table builder and acoustic propagation physics.

The table builder only needs four things from a provider: the acoustic
wavelength, the directivity index of a line array, the directivity index
of a piston transducer, and the transmission loss between an emitter and
a detector. Providers may trace rays through a sound velocity profile;
the built-in provider uses geometric spreading plus seawater absorption.

References:
- Urick, R.J. (1983). Principles of Underwater Sound
- Thorp, W.H. (1967). Analytic description of the low-frequency
  attenuation coefficient
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

import numpy as np

from tacsub_sonar.utils.constants import FEET_PER_YARD, YARDS_PER_KILOYARD

logger = logging.getLogger(__name__)


def freq_to_wavelength(frequency: float, sound_speed: float) -> float:
    """
    Acoustic wavelength.

    Parameters
    ----------
    frequency : float
        Frequency in Hz
    sound_speed : float
        Sound speed in ft/s

    Returns
    -------
    wavelength : float
        Wavelength in ft
    """
    if frequency <= 0:
        raise ValueError("Frequency must be positive")
    return sound_speed / frequency


def thorp_absorption(frequency: float) -> float:
    """
    Seawater absorption coefficient by Thorp's formula.

    Parameters
    ----------
    frequency : float
        Frequency in Hz

    Returns
    -------
    alpha : float
        Absorption in dB per kiloyard
    """
    f2 = (frequency / 1000.0) ** 2
    return 0.1 * f2 / (1 + f2) + 40 * f2 / (4100 + f2) + 2.75e-4 * f2 + 0.003


class AcousticsProvider(ABC):
    """
    Abstract base class for acoustic propagation providers.

    Subclasses must implement ``transmission_loss``. The directivity
    formulas are shared textbook approximations and may be overridden.

    Parameters
    ----------
    svp : SoundVelocityProfile
        Sound speed versus depth, feet and feet per second
    frequency : float
        Frequency in Hz
    """

    def __init__(self, svp, frequency: float):
        if frequency <= 0:
            raise ValueError("Frequency must be positive")
        self.svp = svp
        self.frequency = frequency

    def sound_speed(self, depth: float) -> float:
        """Sound speed at ``depth`` from the profile [ft/s]."""
        return self.svp.velocity_at(depth)

    def wavelength(self, depth: float) -> float:
        """Wavelength of the provider's frequency at ``depth`` [ft]."""
        return freq_to_wavelength(self.frequency, self.sound_speed(depth))

    def line_di(self, elements: int, spacing: float, wavelength: float) -> float:
        """
        Directivity index of a uniform line array.

        ``DI = 10 log10(2 n d / lambda)``
        """
        if elements <= 0 or spacing <= 0:
            raise ValueError("Line array needs positive element count and spacing")
        return float(10.0 * np.log10(2.0 * elements * spacing / wavelength))

    def piston_di(self, diameter: float, wavelength: float) -> float:
        """
        Directivity index of a circular piston transducer.

        ``DI = 20 log10(pi D / lambda)``
        """
        if diameter <= 0:
            raise ValueError("Piston diameter must be positive")
        return float(20.0 * np.log10(np.pi * diameter / wavelength))

    @abstractmethod
    def transmission_loss(
        self,
        range_ft,
        detector_depth: float,
        emitter_depth: float,
    ):
        """
        One-way transmission loss from emitter to detector.

        Parameters
        ----------
        range_ft : float or array_like
            Horizontal range in feet
        detector_depth : float
            Detector depth in feet
        emitter_depth : float
            Emitter depth in feet

        Returns
        -------
        tl : float or ndarray
            Transmission loss in dB
        """
        pass


class SphericalSpreadingProvider(AcousticsProvider):
    """
    Spherical spreading with Thorp absorption along the direct path.

    The sound velocity profile is refined down to ``max_depth``; emitter
    and detector depths must fall inside that water column.

    Example:
        >>> from tacsub_sonar.config.svp import SoundVelocityProfiles
        >>> provider = SphericalSpreadingProvider(SoundVelocityProfiles.default(), 150.0)
        >>> tl = provider.transmission_loss(6000.0, 200.0, 260.0)
    """

    def __init__(
        self,
        svp,
        frequency: float,
        max_depth: Optional[float] = None,
        svp_step: float = 1.0,
    ):
        super().__init__(svp, frequency)
        if max_depth is None:
            max_depth = float(svp.depths[-1])
        self.fine_svp = svp.refine(max_depth, svp_step)
        self.alpha = thorp_absorption(frequency)
        logger.debug(
            f"Refined SVP to {self.fine_svp.num_points} points; "
            f"absorption {self.alpha:.5f} dB/kyd at {frequency} Hz"
        )

    def _check_depth(self, depth: float) -> None:
        if not (self.fine_svp.depths[0] <= depth <= self.fine_svp.depths[-1]):
            raise ValueError(
                f"Depth {depth} ft lies outside the modeled water column "
                f"({self.fine_svp.depths[0]}-{self.fine_svp.depths[-1]} ft)"
            )

    def transmission_loss(self, range_ft, detector_depth: float, emitter_depth: float):
        self._check_depth(detector_depth)
        self._check_depth(emitter_depth)

        slant_yd = np.hypot(np.asarray(range_ft, dtype=float),
                            detector_depth - emitter_depth) / FEET_PER_YARD
        spreading = 20.0 * np.log10(np.maximum(slant_yd, 1.0))
        absorption = self.alpha * slant_yd / YARDS_PER_KILOYARD
        tl = spreading + absorption
        return tl if np.ndim(tl) else float(tl)
