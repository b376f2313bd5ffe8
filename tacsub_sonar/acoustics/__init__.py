"""Acoustic propagation providers."""

from tacsub_sonar.acoustics.provider import (
    AcousticsProvider,
    SphericalSpreadingProvider,
    freq_to_wavelength,
    thorp_absorption,
)

__all__ = [
    "AcousticsProvider",
    "SphericalSpreadingProvider",
    "freq_to_wavelength",
    "thorp_absorption",
]
