"""Tests for the configuration record."""
import pytest
from pydantic import ValidationError

from knobguard.config import DEFAULTS, TYPES, ConfigError, GuardConfig, load_config


class TestLoadConfig:

    def test_defaults(self, config):
        assert isinstance(config, GuardConfig)
        assert config.antenna_diameter == DEFAULTS["antenna_diameter"]
        assert config.arc_resolution == 96

    def test_types_cover_every_default(self):
        assert set(TYPES) == set(DEFAULTS)
        assert TYPES["arc_resolution"] == "int"
        assert TYPES["tolerance"] == "float"

    def test_partial_override(self):
        cfg = load_config({"tolerance": 0.3}, wall_thickness=2.5)
        assert cfg.tolerance == pytest.approx(0.3)
        assert cfg.wall_thickness == pytest.approx(2.5)
        assert cfg.antenna_diameter == DEFAULTS["antenna_diameter"]

    def test_decimal_comma_strings(self):
        cfg = load_config({"tolerance": "0,4", "arc_resolution": "72"})
        assert cfg.tolerance == pytest.approx(0.4)
        assert cfg.arc_resolution == 72

    def test_frozen(self, config):
        with pytest.raises(ValidationError):
            config.tolerance = 1.0

    def test_replace_returns_new_validated_copy(self, config):
        other = config.replace(plate_thickness=3.0)
        assert other.plate_thickness == 3.0
        assert config.plate_thickness == DEFAULTS["plate_thickness"]
        with pytest.raises(ConfigError):
            config.replace(plate_thickness=-1)

    def test_slope_inset_larger_than_wall_is_accepted(self):
        cfg = load_config({"channel_guard_slope_inset": 10.0})
        assert cfg.channel_guard_slope_inset == 10.0


class TestValidation:

    @pytest.mark.parametrize("field,value", [
        ("antenna_diameter", -1.0),
        ("channel_knob_diameter", 0.0),
        ("wall_thickness", 0.0),
        ("tolerance", -0.1),
        ("channel_guard_coverage_angle", 0.0),
        ("volume_guard_coverage_angle", 361.0),
        ("channel_guard_position_angle", -5.0),
        ("epsilon", 0.0),
        ("arc_resolution", 2),
        ("plate_thickness", "abc"),
        ("wall_thickness", "inf"),
        ("plate_padding", float("inf")),
        ("antenna_diameter", float("nan")),
        ("rear_notch_x_offset", "nan"),
        ("side_notch_y_offset", "-inf"),
    ])
    def test_bad_value_names_field(self, field, value):
        with pytest.raises(ConfigError) as exc:
            load_config({field: value})
        assert field in str(exc.value)

    def test_reports_every_bad_field(self):
        with pytest.raises(ConfigError) as exc:
            load_config({"antenna_diameter": -1, "tolerance": -1})
        assert "antenna_diameter" in str(exc.value)
        assert "tolerance" in str(exc.value)

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="antena"):
            load_config({"antena_diameter": 10})

    def test_overlapping_holes_rejected(self):
        with pytest.raises(ConfigError, match="overlap"):
            load_config({"antenna_to_channel": 10.0})

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestDerivedValues:

    def test_placement_scenario_a(self, scenario_a):
        p = scenario_a.placement
        assert (p.antenna_x, p.channel_x, p.volume_x) == pytest.approx((0.0, 17.7, 34.5))

    def test_centers_are_colinear_and_ordered(self, scenario_a):
        centers = [f.center for f in scenario_a.features]
        assert all(y == 0.0 for _, y in centers)
        xs = [x for x, _ in centers]
        assert xs == sorted(xs)
        assert [f.name for f in scenario_a.features] == ["antenna", "channel", "volume"]

    def test_guard_specs(self, config):
        spec = config.channel_guard
        assert spec.diameter == config.channel_knob_diameter
        assert spec.coverage_angle == config.channel_guard_coverage_angle
        assert config.volume_guard.height == config.volume_guard_height

    def test_guard_top(self, config):
        assert config.guard_top == pytest.approx(
            config.plate_thickness + max(config.channel_guard_height, config.volume_guard_height)
        )
