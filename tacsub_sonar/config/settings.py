"""
Sonar table configuration data structures.

The table builder takes three groups of parameters: common propagation
and noise parameters, passive sonar parameters and active sonar
parameters. Each group is an immutable dataclass; ``SonarTableConfig``
bundles them and handles dict/JSON/YAML loading.
"""

from dataclasses import dataclass, field, fields, replace, asdict
from typing import Dict, Optional, Any
import json
import math

import numpy as np
import yaml

from tacsub_sonar.config.directivity import (
    ConfigurationError,
    PassiveDirectivity,
    ActiveDirectivity,
    passive_directivity,
    active_directivity,
)
from tacsub_sonar.utils.constants import (
    FEET_PER_RANGE_UNIT,
    PASSIVE_SPEEDS,
    ACTIVE_SOURCES,
)


@dataclass(frozen=True)
class CommonConfig:
    """Parameters shared by passive and active tables.

    Attributes:
        noise_mean: Mean ambient noise level [dB]
        noise_sd: Noise level standard deviation [dB]
        max_range: Largest range tabulated [game range units]
        range_increment: Range step [game range units]
        detector_depth_shallow: Detector depth when shallow [ft]
        detector_depth_deep: Detector depth when deep [ft]
        min_angle: Lowest ray launch angle [deg]
        max_angle: Highest ray launch angle [deg]
        angle_step: Ray launch angle step [deg]
        emitter_depth_shallow: Emitter depth when shallow [ft]
        emitter_depth_deep: Emitter depth when deep [ft]
        max_depth: Bottom of the modeled water column [ft]
        frequency: Frequency of the sound considered [Hz]
        svp_step: Depth step of the refined sound velocity profile [ft]
        svp_csv: Measured sound velocity profile; default profile if None
    """
    noise_mean: float = 72.0
    noise_sd: float = 10.0
    max_range: float = 30.0
    range_increment: float = 4.0
    detector_depth_shallow: float = 200.0
    detector_depth_deep: float = 1200.0
    min_angle: float = -10.0
    max_angle: float = 10.0
    angle_step: float = 0.5
    emitter_depth_shallow: float = 260.0
    emitter_depth_deep: float = 1210.0
    max_depth: float = 18000.0
    frequency: float = 150.0
    svp_step: float = 1.0
    svp_csv: Optional[str] = None

    @property
    def ranges(self) -> np.ndarray:
        """Tabulated ranges ``0, inc, 2*inc, ... <= max_range`` [game units]."""
        steps = math.floor(self.max_range / self.range_increment + 1e-9)
        return np.arange(steps + 1) * self.range_increment

    @property
    def ranges_ft(self) -> np.ndarray:
        """Tabulated ranges in feet."""
        return self.ranges * FEET_PER_RANGE_UNIT

    @property
    def max_range_ft(self) -> float:
        return self.max_range * FEET_PER_RANGE_UNIT

    def detector_depth(self, depth_class: str) -> float:
        """Detector depth for ``'shallow'`` or ``'deep'``."""
        return {"shallow": self.detector_depth_shallow,
                "deep": self.detector_depth_deep}[depth_class]

    def emitter_depth(self, depth_class: str) -> float:
        """Emitter depth for ``'shallow'`` or ``'deep'``."""
        return {"shallow": self.emitter_depth_shallow,
                "deep": self.emitter_depth_deep}[depth_class]


@dataclass(frozen=True)
class PassiveConfig:
    """Passive sonar parameters.

    Attributes:
        detection_threshold: Passive detection threshold [dB]
        di: Directivity index [dB]; derived from the array if None
        elements: Line array element count
        spacing: Line array element spacing [ft]
        sl_creep: Radiated source level at creep speed [dB]
        sl_slow: Radiated source level at slow speed [dB]
        sl_fast: Radiated source level at fast speed [dB]
        sl_flank: Radiated source level at flank speed [dB]
    """
    detection_threshold: float = 15.0
    di: Optional[float] = None
    elements: Optional[int] = None
    spacing: Optional[float] = None
    sl_creep: float = 110.0
    sl_slow: float = 120.0
    sl_fast: float = 130.0
    sl_flank: float = 140.0

    @property
    def source_levels(self) -> Dict[str, float]:
        """Source level keyed by speed, in table order."""
        return dict(zip(PASSIVE_SPEEDS,
                        (self.sl_creep, self.sl_slow, self.sl_fast, self.sl_flank)))

    @property
    def directivity(self) -> PassiveDirectivity:
        return passive_directivity(self.di, self.elements, self.spacing)


@dataclass(frozen=True)
class ActiveConfig:
    """Active sonar parameters.

    Attributes:
        source_level: Active sonar source level [dB]
        detection_threshold: Active detection threshold [dB]
        ts_sub: Target strength of a submarine [dB]
        ts_surf: Target strength of a surface ship [dB]
        piston_diameter: Transducer diameter [ft]; overridden by ``di``
        di: Directivity index [dB]; piston formula if None
    """
    source_level: float = 210.0
    detection_threshold: float = 50.0
    ts_sub: float = 15.0
    ts_surf: float = 25.0
    piston_diameter: Optional[float] = None
    di: Optional[float] = None

    @property
    def target_strengths(self) -> Dict[str, float]:
        """Target strength keyed by reflecting object, in table order."""
        return dict(zip(ACTIVE_SOURCES, (self.ts_sub, self.ts_surf)))

    @property
    def directivity(self) -> ActiveDirectivity:
        return active_directivity(self.di, self.piston_diameter)


def _section(cls, values: Dict[str, Any]):
    """Build a config section, rejecting unknown keys."""
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}"
        )
    return cls(**values)


@dataclass(frozen=True)
class SonarTableConfig:
    """Complete configuration of a detection table run.

    Example YAML input:
        common:
          noise_mean: 72.0
          noise_sd: 10.0
          svp_csv: ./data/svp.csv
        passive:
          detection_threshold: 15.0
          elements: 100
          spacing: 0.0417
        active:
          source_level: 210.0
    """
    common: CommonConfig = field(default_factory=CommonConfig)
    passive: PassiveConfig = field(default_factory=PassiveConfig)
    active: ActiveConfig = field(default_factory=ActiveConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SonarTableConfig":
        """Create SonarTableConfig from a nested dictionary.

        Missing sections and keys take their defaults.

        Args:
            config_dict: Dictionary with optional ``common``, ``passive``
                and ``active`` sections

        Returns:
            SonarTableConfig instance
        """
        config_dict = config_dict or {}
        unknown = set(config_dict) - {"common", "passive", "active"}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration sections: {', '.join(sorted(unknown))}"
            )
        return cls(
            common=_section(CommonConfig, config_dict.get("common") or {}),
            passive=_section(PassiveConfig, config_dict.get("passive") or {}),
            active=_section(ActiveConfig, config_dict.get("active") or {}),
        )

    @classmethod
    def from_json(cls, json_path: str) -> "SonarTableConfig":
        """Load configuration from a JSON file."""
        with open(json_path, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "SonarTableConfig":
        """Load configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f)
        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a nested dictionary."""
        return {
            "common": asdict(self.common),
            "passive": asdict(self.passive),
            "active": asdict(self.active),
        }

    def to_json(self, json_path: str, indent: int = 2) -> None:
        """Save configuration to JSON file."""
        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

    def with_overrides(self, overrides: Dict[str, Dict[str, Any]]) -> "SonarTableConfig":
        """Copy with the given per-section values replaced.

        ``None`` values are ignored, so unset command-line flags leave the
        loaded values alone.
        """
        sections = {}
        for name in ("common", "passive", "active"):
            current = getattr(self, name)
            values = {k: v for k, v in (overrides.get(name) or {}).items()
                      if v is not None}
            sections[name] = replace(current, **values) if values else current
        return SonarTableConfig(**sections)

    def validate(self) -> list:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        common = self.common

        if common.noise_sd <= 0:
            errors.append("noise standard deviation must be positive")
        if common.range_increment <= 0:
            errors.append("range increment must be positive")
        if common.max_range < 0:
            errors.append("maximum range must be non-negative")
        if common.frequency <= 0:
            errors.append("frequency must be positive")
        if common.svp_step <= 0:
            errors.append("SVP step must be positive")
        if common.angle_step <= 0:
            errors.append("angle step must be positive")
        if common.min_angle > common.max_angle:
            errors.append("minimum angle must not exceed maximum angle")

        for name in ("detector_depth_shallow", "detector_depth_deep",
                     "emitter_depth_shallow", "emitter_depth_deep"):
            depth = getattr(common, name)
            if depth < 0 or depth > common.max_depth:
                errors.append(f"{name} must lie between 0 and max_depth")

        if self.passive.elements is not None and self.passive.elements <= 0:
            errors.append("line array element count must be positive")
        if self.passive.spacing is not None and self.passive.spacing <= 0:
            errors.append("line array spacing must be positive")
        if self.active.piston_diameter is not None and self.active.piston_diameter <= 0:
            errors.append("piston diameter must be positive")

        try:
            self.passive.directivity
        except ConfigurationError as e:
            errors.append(str(e))

        return errors
