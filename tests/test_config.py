"""Tests for sonar table configuration."""

import json

import numpy as np
import pytest
import yaml

from tacsub_sonar.config import (
    ConfigurationError,
    ConfigurationManager,
    CommonConfig,
    PassiveConfig,
    ActiveConfig,
    SonarTableConfig,
    ExplicitDI,
    LineArrayGeometry,
    DefaultLineArray,
    PistonGeometry,
    passive_directivity,
    active_directivity,
)


class TestCommonConfig:
    """Tests for CommonConfig."""

    def test_defaults(self):
        common = CommonConfig()
        assert common.noise_mean == 72.0
        assert common.noise_sd == 10.0
        assert common.frequency == 150.0
        assert common.svp_csv is None

    def test_default_ranges(self):
        """0:4:30 stops at 28."""
        assert np.allclose(CommonConfig().ranges, [0, 4, 8, 12, 16, 20, 24, 28])

    def test_ranges_inclusive(self):
        common = CommonConfig(max_range=8.0, range_increment=4.0)
        assert np.allclose(common.ranges, [0, 4, 8])

    def test_fractional_ranges(self):
        common = CommonConfig(max_range=0.3, range_increment=0.1)
        assert len(common.ranges) == 4

    def test_ranges_in_feet(self):
        common = CommonConfig(max_range=8.0, range_increment=4.0)
        assert np.allclose(common.ranges_ft, [0, 24000, 48000])
        assert common.max_range_ft == 48000.0

    def test_depth_lookup(self):
        common = CommonConfig()
        assert common.detector_depth("shallow") == 200.0
        assert common.detector_depth("deep") == 1200.0
        assert common.emitter_depth("shallow") == 260.0
        assert common.emitter_depth("deep") == 1210.0

    def test_immutable(self):
        with pytest.raises(AttributeError):
            CommonConfig().noise_mean = 60.0


class TestDirectivityOptions:
    """Tests for directivity selection."""

    def test_explicit_wins(self):
        assert passive_directivity(di=20.0, elements=10) == ExplicitDI(20.0)
        assert active_directivity(di=12.0, piston_diameter=3.0) == ExplicitDI(12.0)

    def test_line_array(self):
        assert passive_directivity(elements=64, spacing=0.5) == LineArrayGeometry(64, 0.5)

    def test_default_line_array(self):
        option = passive_directivity()
        assert option == DefaultLineArray()
        assert option.elements == 100
        assert np.isclose(option.spacing, 0.5 / 12)
        assert option.bonus == 40.0

    @pytest.mark.parametrize("elements,spacing", [(100, None), (None, 0.5)])
    def test_half_geometry_rejected(self, elements, spacing):
        with pytest.raises(ConfigurationError, match="both elements and spacing"):
            passive_directivity(elements=elements, spacing=spacing)

    def test_piston(self):
        assert active_directivity(piston_diameter=3.0) == PistonGeometry(3.0)
        assert active_directivity() == PistonGeometry(18.0)

    def test_category_maps(self):
        assert list(PassiveConfig().source_levels) == ["creep", "slow", "fast", "flank"]
        assert PassiveConfig().source_levels["flank"] == 140.0
        assert ActiveConfig().target_strengths == {"sub": 15.0, "surf": 25.0}


class TestSonarTableConfig:
    """Tests for loading and validating SonarTableConfig."""

    def test_from_dict_partial(self):
        config = SonarTableConfig.from_dict({
            "common": {"noise_mean": 65.0},
            "active": {"di": 10.0},
        })
        assert config.common.noise_mean == 65.0
        assert config.common.noise_sd == 10.0
        assert config.active.di == 10.0
        assert config.passive == PassiveConfig()

    def test_from_empty(self):
        assert SonarTableConfig.from_dict({}) == SonarTableConfig()
        assert SonarTableConfig.from_dict(None) == SonarTableConfig()

    def test_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="Unknown CommonConfig keys"):
            SonarTableConfig.from_dict({"common": {"noise": 1.0}})
        with pytest.raises(ConfigurationError, match="sections"):
            SonarTableConfig.from_dict({"sonar": {}})

    def test_dict_round_trip(self):
        config = SonarTableConfig(passive=PassiveConfig(elements=50, spacing=1.0))
        assert SonarTableConfig.from_dict(config.to_dict()) == config

    def test_json_round_trip(self, tmp_path):
        config = SonarTableConfig(common=CommonConfig(noise_sd=8.0))
        path = tmp_path / "config.json"
        config.to_json(str(path))
        assert SonarTableConfig.from_json(str(path)) == config
        assert json.loads(path.read_text())["common"]["noise_sd"] == 8.0

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "common": {"frequency": 300.0},
            "passive": {"elements": 64, "spacing": 0.25},
        }))
        config = SonarTableConfig.from_yaml(str(path))
        assert config.common.frequency == 300.0
        assert config.passive.directivity == LineArrayGeometry(64, 0.25)

    def test_overrides(self):
        config = SonarTableConfig().with_overrides({
            "common": {"noise_mean": 60.0, "noise_sd": None},
            "active": {"source_level": 220.0},
        })
        assert config.common.noise_mean == 60.0
        assert config.common.noise_sd == 10.0
        assert config.active.source_level == 220.0
        assert config.passive == PassiveConfig()

    def test_validate_default(self):
        assert SonarTableConfig().validate() == []

    def test_validate_errors(self):
        config = SonarTableConfig(
            common=CommonConfig(noise_sd=0.0, range_increment=-1.0, min_angle=20.0),
            passive=PassiveConfig(elements=10),
        )
        errors = config.validate()
        assert any("standard deviation" in e for e in errors)
        assert any("range increment" in e for e in errors)
        assert any("angle" in e for e in errors)
        assert any("both elements and spacing" in e for e in errors)

    def test_validate_depths(self):
        config = SonarTableConfig(common=CommonConfig(detector_depth_deep=20000.0))
        assert any("detector_depth_deep" in e for e in config.validate())


class TestConfigurationManager:
    """Tests for ConfigurationManager."""

    @pytest.fixture
    def manager(self, tmp_path):
        return ConfigurationManager(base_path=str(tmp_path))

    def test_default_resolution(self, manager):
        loaded = manager.load_config({})
        expected_wavelength = loaded.svp.velocity_at(200.0) / 150.0
        assert np.isclose(loaded.wavelength, expected_wavelength)
        assert np.isclose(
            loaded.passive_di,
            loaded.provider.line_di(100, 0.5 / 12, loaded.wavelength) + 40.0,
        )
        assert np.isclose(
            loaded.active_di,
            loaded.provider.piston_di(18.0, loaded.wavelength),
        )
        assert np.isclose(loaded.passive_di, 34.0, atol=0.05)

    def test_explicit_di(self, manager):
        loaded = manager.load_config({"passive": {"di": 25.0}, "active": {"di": 7.5}})
        assert loaded.passive_di == 25.0
        assert loaded.active_di == 7.5

    def test_invalid_raises(self, manager):
        with pytest.raises(ConfigurationError, match="both elements and spacing"):
            manager.load_config({"passive": {"spacing": 0.5}})

    def test_svp_relative_to_base(self, manager, tmp_path):
        (tmp_path / "svp.csv").write_text("depth,velocity\n0,4800\n20000,4900\n")
        loaded = manager.load_config({"common": {"svp_csv": "svp.csv", "svp_step": 100.0}})
        assert loaded.svp.name == "SVP_svp"
        assert np.isclose(loaded.wavelength, (4800 + 100 * 200 / 20000) / 150.0)

    def test_missing_svp(self, manager):
        with pytest.raises(FileNotFoundError):
            manager.load_config({"common": {"svp_csv": "missing.csv"}})

    def test_config_files(self, manager, tmp_path):
        (tmp_path / "sonar.yaml").write_text("common:\n  noise_mean: 70.0\n")
        assert manager.parse_config("sonar.yaml").common.noise_mean == 70.0
        with pytest.raises(FileNotFoundError):
            manager.parse_config("missing.yaml")
        (tmp_path / "sonar.txt").write_text("")
        with pytest.raises(ValueError, match="Unsupported"):
            manager.parse_config("sonar.txt")
        with pytest.raises(TypeError):
            manager.parse_config(42)

    def test_svp_relative_to_config_file(self, manager, tmp_path):
        """A relative svp_csv in a config file resolves next to that file."""
        config_dir = tmp_path / "runs"
        config_dir.mkdir()
        (config_dir / "svp.csv").write_text("depth,velocity\n0,4800\n20000,4900\n")
        (config_dir / "sonar.yaml").write_text(
            "common:\n  svp_csv: ./svp.csv\n  svp_step: 100.0\n"
        )
        config = manager.parse_config("runs/sonar.yaml")
        assert config.common.svp_csv == str((config_dir / "svp.csv").resolve())
        assert manager.load_config("runs/sonar.yaml").svp.name == "SVP_svp"

    def test_absolute_svp_in_config_file_kept(self, manager, tmp_path):
        svp = tmp_path / "elsewhere.csv"
        (tmp_path / "sonar.json").write_text(json.dumps({"common": {"svp_csv": str(svp)}}))
        assert manager.parse_config("sonar.json").common.svp_csv == str(svp)

    def test_custom_provider_factory(self, tmp_path):
        from tacsub_sonar.acoustics import AcousticsProvider

        class ConstantLoss(AcousticsProvider):
            def transmission_loss(self, range_ft, detector_depth, emitter_depth):
                return np.full_like(np.asarray(range_ft, dtype=float), 50.0)

        manager = ConfigurationManager(
            provider_factory=lambda svp, config: ConstantLoss(svp, config.common.frequency)
        )
        loaded = manager.load_config({})
        assert isinstance(loaded.provider, ConstantLoss)
