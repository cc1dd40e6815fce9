"""Tests for policy modes, bounds and filter configuration."""

import json

import pytest

from color_filter.exceptions import (
    InvalidBoundsForModeError,
    InvalidBoundsShapeError,
    InvalidColorError,
    InvalidConfigError,
    InvalidModeError,
    InvalidRegionError,
)
from color_filter.models import FilterConfig, PolicyMode, ThresholdBounds, parse_color, parse_mode


class TestPolicyMode:
    def test_bound_counts(self):
        assert [m.bound_count for m in PolicyMode] == [6, 6, 2, 2]

    def test_full_range_matches_bound_count(self):
        for mode in PolicyMode:
            bounds = mode.full_range()
            bounds.check_mode(mode)
            assert len(bounds.pairs) == len(mode.metric_names)

    def test_examples_fit_mode(self):
        for mode in PolicyMode:
            ThresholdBounds.parse(mode.example).check_mode(mode)

    def test_parse_mode(self):
        assert parse_mode(3) is PolicyMode.SPREAD
        with pytest.raises(InvalidModeError):
            parse_mode("2")


class TestThresholdBounds:
    def test_pairs(self):
        bounds = ThresholdBounds.parse([1, 2, 3, 4, 5, 6])
        assert bounds.pairs == [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]

    def test_parse_passthrough(self):
        bounds = ThresholdBounds.parse([0, 1])
        assert ThresholdBounds.parse(bounds) is bounds

    @pytest.mark.parametrize("values", [[], [1], [1, 2, 3], [1, 2, 3, 4], list(range(8))])
    def test_wrong_count(self, values):
        with pytest.raises(InvalidBoundsShapeError):
            ThresholdBounds.parse(values)

    def test_not_a_sequence(self):
        with pytest.raises(InvalidBoundsShapeError):
            ThresholdBounds.parse(5)

    def test_check_mode(self):
        with pytest.raises(InvalidBoundsForModeError):
            ThresholdBounds.parse([0, 1]).check_mode(PolicyMode.RATIO)


class TestParseColor:
    def test_tuple_result(self):
        assert parse_color([255, 0, 10]) == (255, 0, 10)

    @pytest.mark.parametrize("value", [None, "abc", (1, 2), (1, 2, 300), (True, 0, 0)])
    def test_invalid(self, value):
        with pytest.raises(InvalidColorError):
            parse_color(value)


class TestFilterConfig:
    def test_defaults(self):
        config = FilterConfig()
        assert config.height is None
        assert config.width is None
        assert config.color == (0, 0, 0)
        assert config.mode is PolicyMode.RAW
        assert config.blanks_to_black

    def test_json_round_trip(self):
        config = FilterConfig(height=4, width=5, color=(1, 2, 3), mode=PolicyMode.SUM)
        loaded = FilterConfig.from_json(config.to_json())
        assert loaded == config

    def test_default_json(self):
        data = json.loads(FilterConfig.default_json())
        assert data == {"height": None, "width": None, "color": [0, 0, 0], "mode": 0}

    def test_from_dict_normalizes(self):
        config = FilterConfig.from_dict({"color": [255, 0, 0], "mode": 1})
        assert config.color == (255, 0, 0)
        assert config.mode is PolicyMode.RATIO
        assert not config.blanks_to_black

    def test_from_file(self, tmp_path):
        path = tmp_path / "filter.json"
        path.write_text('{"mode": 3, "height": 2}')
        config = FilterConfig.from_file(path)
        assert config.mode is PolicyMode.SPREAD
        assert config.height == 2

    def test_unknown_key(self):
        with pytest.raises(InvalidConfigError):
            FilterConfig.from_dict({"colour": [0, 0, 0]})

    def test_bad_json(self):
        with pytest.raises(InvalidConfigError):
            FilterConfig.from_json("{mode: 1")

    def test_invalid_values(self):
        with pytest.raises(InvalidModeError):
            FilterConfig.from_dict({"mode": 9})
        with pytest.raises(InvalidColorError):
            FilterConfig.from_dict({"color": [0, 0]})

    def test_resolve_region(self):
        assert FilterConfig(height=3).resolve_region((10, 8, 3)) == (3, 8)
        with pytest.raises(InvalidRegionError):
            FilterConfig(width=9).resolve_region((10, 8, 3))
