"""
Directivity index options for passive and active sonar.

A sonar's directivity index is given either directly, or by the geometry
of its array, or falls back to a default array. The choice is made once
when the configuration is built; ``resolve`` turns it into a number once
the acoustic wavelength is known.
"""

from dataclasses import dataclass
from typing import Optional, Union

from tacsub_sonar.utils.constants import (
    DEFAULT_LINE_ELEMENTS,
    DEFAULT_LINE_SPACING,
    DEFAULT_LINE_DI_BONUS,
    DEFAULT_PISTON_DIAMETER,
)


class ConfigurationError(ValueError):
    """Raised for contradictory or incomplete sonar configurations."""
    pass


@dataclass(frozen=True)
class ExplicitDI:
    """Directivity index given directly [dB]."""
    value: float

    def resolve(self, provider, wavelength: float) -> float:
        return float(self.value)


@dataclass(frozen=True)
class LineArrayGeometry:
    """Line array with ``elements`` hydrophones ``spacing`` feet apart."""
    elements: int
    spacing: float

    def resolve(self, provider, wavelength: float) -> float:
        return provider.line_di(self.elements, self.spacing, wavelength)


@dataclass(frozen=True)
class DefaultLineArray:
    """Built-in towed line array plus a fixed processing gain bonus."""
    elements: int = DEFAULT_LINE_ELEMENTS
    spacing: float = DEFAULT_LINE_SPACING
    bonus: float = DEFAULT_LINE_DI_BONUS

    def resolve(self, provider, wavelength: float) -> float:
        return provider.line_di(self.elements, self.spacing, wavelength) + self.bonus


@dataclass(frozen=True)
class PistonGeometry:
    """Circular piston transducer of the given diameter [ft]."""
    diameter: float = DEFAULT_PISTON_DIAMETER

    def resolve(self, provider, wavelength: float) -> float:
        return provider.piston_di(self.diameter, wavelength)


PassiveDirectivity = Union[ExplicitDI, LineArrayGeometry, DefaultLineArray]
ActiveDirectivity = Union[ExplicitDI, PistonGeometry]


def passive_directivity(
    di: Optional[float] = None,
    elements: Optional[int] = None,
    spacing: Optional[float] = None,
) -> PassiveDirectivity:
    """
    Choose the passive directivity option.

    An explicit DI wins. Otherwise both ``elements`` and ``spacing`` give a
    line array and neither gives the default array.

    Raises:
        ConfigurationError: If only one of ``elements`` and ``spacing`` is
            given without an explicit DI
    """
    if di is not None:
        return ExplicitDI(float(di))
    if elements is not None and spacing is not None:
        return LineArrayGeometry(int(elements), float(spacing))
    if elements is None and spacing is None:
        return DefaultLineArray()
    raise ConfigurationError(
        "invalid configuration: must supply both elements and spacing, or neither"
    )


def active_directivity(
    di: Optional[float] = None,
    piston_diameter: Optional[float] = None,
) -> ActiveDirectivity:
    """Choose the active directivity option; explicit DI wins over diameter."""
    if di is not None:
        return ExplicitDI(float(di))
    if piston_diameter is not None:
        return PistonGeometry(float(piston_diameter))
    return PistonGeometry()
