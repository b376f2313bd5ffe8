"""
Configuration Manager for sonar table runs.

Handles loading and validation of configurations, loading the sound
velocity profile, building the acoustics provider and resolving the
directivity indices, all once, before any table is computed.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Callable, Union
from dataclasses import dataclass

from tacsub_sonar.acoustics.provider import AcousticsProvider, SphericalSpreadingProvider
from tacsub_sonar.config.directivity import ConfigurationError
from tacsub_sonar.config.settings import SonarTableConfig
from tacsub_sonar.config.svp import SoundVelocityProfile, SoundVelocityProfiles

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[SoundVelocityProfile, SonarTableConfig], AcousticsProvider]


def default_provider(svp: SoundVelocityProfile, config: SonarTableConfig) -> AcousticsProvider:
    """Built-in spherical spreading provider for ``config``."""
    return SphericalSpreadingProvider(
        svp,
        frequency=config.common.frequency,
        max_depth=config.common.max_depth,
        svp_step=config.common.svp_step,
    )


@dataclass
class LoadedConfiguration:
    """Container for a fully loaded and resolved configuration.

    Attributes:
        config: The sonar table configuration
        svp: Loaded sound velocity profile
        provider: Acoustics provider built from the profile
        wavelength: Wavelength at the shallow detector depth [ft]
        passive_di: Resolved passive directivity index [dB]
        active_di: Resolved active directivity index [dB]
    """
    config: SonarTableConfig
    svp: SoundVelocityProfile
    provider: AcousticsProvider
    wavelength: float
    passive_di: float
    active_di: float


class ConfigurationManager:
    """Loads sonar table configurations.

    Example:
        >>> manager = ConfigurationManager()
        >>> loaded = manager.load_config({"common": {"noise_mean": 70.0}})
        >>> round(loaded.passive_di, 1)
        34.0
    """

    def __init__(
        self,
        base_path: Optional[str] = None,
        provider_factory: ProviderFactory = default_provider,
    ):
        """Initialize the configuration manager.

        Args:
            base_path: Base path for relative file references.
                      Defaults to current working directory.
            provider_factory: Builds the acoustics provider from the
                      loaded profile and configuration
        """
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.provider_factory = provider_factory

    def parse_config(
        self,
        config_source: Union[SonarTableConfig, Dict[str, Any], str],
    ) -> SonarTableConfig:
        """Turn a dict, JSON/YAML path or config object into a SonarTableConfig."""
        if isinstance(config_source, SonarTableConfig):
            return config_source
        if isinstance(config_source, dict):
            return SonarTableConfig.from_dict(config_source)
        if isinstance(config_source, (str, Path)):
            path = self.resolve_path(str(config_source))
            if not path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_source}")
            if path.suffix.lower() == '.json':
                config = SonarTableConfig.from_json(str(path))
            elif path.suffix.lower() in ('.yaml', '.yml'):
                config = SonarTableConfig.from_yaml(str(path))
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")
            return self._anchor_svp_path(config, path.parent)
        raise TypeError(f"Invalid config source type: {type(config_source)}")

    @staticmethod
    def _anchor_svp_path(config: SonarTableConfig, config_dir: Path) -> SonarTableConfig:
        """Make a relative ``svp_csv`` from a config file relative to that file."""
        svp_csv = config.common.svp_csv
        if not svp_csv or Path(svp_csv).is_absolute():
            return config
        anchored = str((config_dir / svp_csv).resolve())
        logger.debug(f"Resolved svp_csv {svp_csv} against {config_dir}: {anchored}")
        return config.with_overrides({"common": {"svp_csv": anchored}})

    def load_config(
        self,
        config_source: Union[SonarTableConfig, Dict[str, Any], str],
    ) -> LoadedConfiguration:
        """Load, validate and resolve a complete configuration.

        Args:
            config_source: SonarTableConfig, configuration dictionary,
                JSON path, or YAML path

        Returns:
            LoadedConfiguration with profile, provider and resolved DIs

        Raises:
            ConfigurationError: If the configuration is invalid
            FileNotFoundError: If a referenced file is missing
        """
        config = self.parse_config(config_source)

        validation_errors = config.validate()
        if validation_errors:
            for error in validation_errors:
                logger.warning(f"Configuration validation error: {error}")
            raise ConfigurationError("; ".join(validation_errors))

        svp = self._load_svp(config)
        provider = self.provider_factory(svp, config)

        wavelength = provider.wavelength(config.common.detector_depth_shallow)
        passive_di = config.passive.directivity.resolve(provider, wavelength)
        active_di = config.active.directivity.resolve(provider, wavelength)
        logger.debug(
            f"Wavelength {wavelength:.3f} ft; passive DI {passive_di:.2f} dB "
            f"({type(config.passive.directivity).__name__}); active DI "
            f"{active_di:.2f} dB ({type(config.active.directivity).__name__})"
        )

        return LoadedConfiguration(
            config=config,
            svp=svp,
            provider=provider,
            wavelength=wavelength,
            passive_di=passive_di,
            active_di=active_di,
        )

    def _load_svp(self, config: SonarTableConfig) -> SoundVelocityProfile:
        """Load the measured profile if configured, else the default one."""
        if config.common.svp_csv:
            svp_path = self.resolve_path(config.common.svp_csv)
            logger.info(f"Loading sound velocity profile from {svp_path}")
            return SoundVelocityProfiles.load_csv(str(svp_path))

        logger.info("Using default sound velocity profile")
        return SoundVelocityProfiles.default()

    def resolve_path(self, path: str) -> Path:
        """Resolve a path relative to base_path.

        Args:
            path: Relative or absolute path string

        Returns:
            Resolved absolute Path
        """
        p = Path(path)
        if p.is_absolute():
            return p
        return (self.base_path / p).resolve()
