"""
Configuration management for sonar table runs.

This module provides:
- SonarTableConfig: Common, passive and active parameter groups
- ConfigurationManager: Loading, validation and resolution
- Directivity options and sound velocity profiles
"""

from tacsub_sonar.config.directivity import (
    ConfigurationError,
    ExplicitDI,
    LineArrayGeometry,
    DefaultLineArray,
    PistonGeometry,
    passive_directivity,
    active_directivity,
)
from tacsub_sonar.config.settings import (
    CommonConfig,
    PassiveConfig,
    ActiveConfig,
    SonarTableConfig,
)
from tacsub_sonar.config.svp import SoundVelocityProfile, SoundVelocityProfiles
from tacsub_sonar.config.manager import ConfigurationManager, LoadedConfiguration

__all__ = [
    "ConfigurationError",
    "ExplicitDI",
    "LineArrayGeometry",
    "DefaultLineArray",
    "PistonGeometry",
    "passive_directivity",
    "active_directivity",
    "CommonConfig",
    "PassiveConfig",
    "ActiveConfig",
    "SonarTableConfig",
    "SoundVelocityProfile",
    "SoundVelocityProfiles",
    "ConfigurationManager",
    "LoadedConfiguration",
]
