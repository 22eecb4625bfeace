"""Tests for the range distribution builder."""

import pytest

from js_complexity.complexity_analysis.distribution import (
    FILE_COMPLEXITY_BOTTOM_LIMITS,
    FUNCTION_COMPLEXITY_BOTTOM_LIMITS,
    RangeDistributionBuilder,
)


class TestRangeDistributionBuilder:
    """Bucket classification and snapshots."""

    @pytest.fixture
    def builder(self):
        return RangeDistributionBuilder(FUNCTION_COMPLEXITY_BOTTOM_LIMITS)

    def test_values_land_in_greatest_limit_not_above_them(self, builder):
        for value in [1, 3, 7, 29, 0.5]:
            builder.add(value)

        assert builder.build().counts == {
            1: 1,
            2: 1,
            4: 0,
            6: 1,
            8: 0,
            10: 0,
            12: 0,
            20: 1,
            30: 0,
        }

    def test_value_below_smallest_limit_is_dropped(self, builder):
        builder.add(0.5)
        builder.add(0)
        builder.add(-3)

        distribution = builder.build()
        assert distribution.total == 0
        assert set(distribution.counts.values()) == {0}

    def test_limit_values_are_inclusive(self, builder):
        for limit in FUNCTION_COMPLEXITY_BOTTOM_LIMITS:
            builder.add(limit)

        assert all(count == 1 for count in builder.build().counts.values())

    def test_values_above_largest_limit_go_to_last_bucket(self, builder):
        builder.add(30).add(31).add(500)

        assert builder.build().counts[30] == 3

    def test_every_limit_reported(self, builder):
        distribution = builder.build()

        assert list(distribution.counts) == list(FUNCTION_COMPLEXITY_BOTTOM_LIMITS)
        assert distribution.bottom_limits == FUNCTION_COMPLEXITY_BOTTOM_LIMITS

    def test_build_is_idempotent_snapshot(self, builder):
        builder.add(5)
        first = builder.build()
        second = builder.build()
        assert first == second

        builder.add(5)
        assert first.counts[4] == 1
        assert builder.build().counts[4] == 2

    def test_file_limits_start_at_zero(self):
        builder = RangeDistributionBuilder(FILE_COMPLEXITY_BOTTOM_LIMITS)
        builder.add(0).add(4).add(95)

        counts = builder.build().counts
        assert counts[0] == 2
        assert counts[90] == 1

    def test_clear(self, builder):
        builder.add(3)
        builder.clear()

        assert builder.build().total == 0

    @pytest.mark.parametrize("limits", [[], [1, 1, 2], [5, 3]])
    def test_invalid_limits(self, limits):
        with pytest.raises(ValueError):
            RangeDistributionBuilder(limits)


class TestDistributionMerge:
    """Combining per-file snapshots into a project roll-up."""

    def test_merge_adds_counts(self):
        first = RangeDistributionBuilder([0, 5, 10]).add(1).add(7).build()
        second = RangeDistributionBuilder([0, 5, 10]).add(2).add(12).build()

        merged = RangeDistributionBuilder([0, 5, 10]).add_distribution(first).add_distribution(second)
        assert merged.build().counts == {0: 2, 5: 1, 10: 1}

    def test_merge_rejects_other_limits(self):
        other = RangeDistributionBuilder([0, 5]).build()

        with pytest.raises(ValueError, match="Cannot merge"):
            RangeDistributionBuilder([0, 5, 10]).add_distribution(other)


class TestDistributionRendering:
    """Serialized forms of a snapshot."""

    def test_data_string(self):
        distribution = RangeDistributionBuilder([0, 5, 10]).add(6).build()

        assert distribution.to_data_string() == "0=0;5=1;10=0"

    def test_float_limits_keep_fraction(self):
        distribution = RangeDistributionBuilder([0.5, 1.0, 2]).add(0.7).build()

        assert distribution.to_data_string() == "0.5=1;1=0;2=0"

    def test_to_dict(self):
        distribution = RangeDistributionBuilder([1, 2]).add(1).build()

        assert distribution.to_dict() == {
            "bottom_limits": [1, 2],
            "counts": {"1": 1, "2": 0},
            "data": "1=1;2=0",
        }
