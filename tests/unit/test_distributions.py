"""
Unit tests for the distribution library.

Covers range checks, weighted picks, probability gates and the fixed
proportion pattern, using both seeded numpy generators and scripted sources.
"""

from datetime import date
from decimal import Decimal

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from ops_datagen.generators.distributions import (
    bernoulli,
    bernoulli_branch,
    cycled_choice,
    month_start,
    month_starts,
    proportion_flag,
    uniform_date,
    uniform_decimal,
    uniform_int,
    weighted_choice,
)
from ops_datagen.shared.exceptions import ConfigurationError


class TestUniformInt:
    """Tests for inclusive integer sampling."""

    @given(
        lo=st.integers(min_value=-1000, max_value=1000),
        span=st.integers(min_value=0, max_value=1000),
        seed=st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_value_within_closed_range(self, lo, span, seed):
        rng = np.random.default_rng(seed)
        value = uniform_int(rng, lo, lo + span)
        assert lo <= value <= lo + span
        assert isinstance(value, int)

    def test_both_bounds_reachable(self):
        rng = np.random.default_rng(0)
        seen = {uniform_int(rng, 2, 4) for _ in range(200)}
        assert seen == {2, 3, 4}

    def test_inverted_range_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid integer range"):
            uniform_int(np.random.default_rng(0), 5, 1)


class TestUniformDecimal:
    """Tests for money sampling."""

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_two_places_within_bounds(self, seed):
        value = uniform_decimal(np.random.default_rng(seed), 5.0, 200.0)
        assert Decimal("5.00") <= value <= Decimal("200.00")
        assert value == value.quantize(Decimal("0.01"))

    def test_scripted_extremes(self, scripted_rng):
        rng = scripted_rng(randoms=[0.0, 0.999999])
        assert uniform_decimal(rng, 10.0, 20.0) == Decimal("10.00")
        assert uniform_decimal(rng, 10.0, 20.0) == Decimal("20.00")

    def test_places_parameter(self, scripted_rng):
        value = uniform_decimal(scripted_rng(randoms=[0.5]), 1.0, 2.0, places=4)
        assert value == Decimal("1.5000")


class TestUniformDate:
    """Tests for date sampling."""

    def test_single_day_period(self):
        day = date(2024, 3, 15)
        assert uniform_date(np.random.default_rng(1), day, day) == day

    @given(
        offset=st.integers(min_value=0, max_value=800),
        seed=st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_date_within_period(self, offset, seed):
        start = date(2023, 1, 1)
        end = date.fromordinal(start.toordinal() + offset)
        value = uniform_date(np.random.default_rng(seed), start, end)
        assert start <= value <= end

    def test_inverted_period_raises(self):
        with pytest.raises(ConfigurationError):
            uniform_date(np.random.default_rng(0), date(2024, 1, 2), date(2024, 1, 1))


class TestWeightedChoice:
    """Tests for weighted picks."""

    def test_cumulative_thresholds(self, scripted_rng):
        table = {"a": 1.0, "b": 3.0}
        rng = scripted_rng(randoms=[0.2, 0.5, 0.0, 0.999])
        assert weighted_choice(rng, table) == "a"
        assert weighted_choice(rng, table) == "b"
        assert weighted_choice(rng, table) == "a"
        assert weighted_choice(rng, table) == "b"

    def test_sequence_means_equal_weights(self, scripted_rng):
        rng = scripted_rng(randoms=[0.1, 0.4, 0.9])
        labels = ["x", "y", "z"]
        assert [weighted_choice(rng, labels) for _ in range(3)] == ["x", "y", "z"]

    def test_zero_weight_label_never_picked(self):
        rng = np.random.default_rng(3)
        picks = {weighted_choice(rng, {"never": 0.0, "always": 2.0}) for _ in range(100)}
        assert picks == {"always"}

    def test_tuple_labels(self, scripted_rng):
        table = {("Germany", "Europe"): 1.0, ("Japan", "Asia"): 1.0}
        assert weighted_choice(scripted_rng(randoms=[0.75]), table) == ("Japan", "Asia")

    def test_empty_table_raises(self, scripted_rng):
        with pytest.raises(ConfigurationError, match="empty"):
            weighted_choice(scripted_rng(), {})

    def test_zero_total_raises(self, scripted_rng):
        with pytest.raises(ConfigurationError, match="positive"):
            weighted_choice(scripted_rng(), {"a": 0.0, "b": 0.0})

    def test_negative_weight_raises(self, scripted_rng):
        with pytest.raises(ConfigurationError, match="non-negative"):
            weighted_choice(scripted_rng(), {"a": -1.0, "b": 2.0})


class TestGates:
    """Tests for cycled picks and probability gates."""

    def test_cycled_choice_wraps(self):
        labels = ["A", "B", "C"]
        assert [cycled_choice(i, labels) for i in range(7)] == list("ABCABCA")

    def test_cycled_choice_empty_raises(self):
        with pytest.raises(ConfigurationError):
            cycled_choice(0, [])

    def test_bernoulli_branch_calls_one_side(self, scripted_rng):
        calls = []
        rng = scripted_rng(randoms=[0.10, 0.90])

        def on_time():
            calls.append("on_time")
            return 0

        def delayed():
            calls.append("delayed")
            return 5

        assert bernoulli_branch(rng, 0.85, on_time, delayed) == 0
        assert bernoulli_branch(rng, 0.85, on_time, delayed) == 5
        assert calls == ["on_time", "delayed"]

    def test_bernoulli_extremes(self):
        rng = np.random.default_rng(11)
        assert all(bernoulli(rng, 1.0) for _ in range(50))
        assert not any(bernoulli(rng, 0.0) for _ in range(50))

    def test_bernoulli_invalid_probability(self, scripted_rng):
        with pytest.raises(ConfigurationError):
            bernoulli(scripted_rng(randoms=[0.5]), 1.5)


class TestProportionFlag:
    """Tests for the fixed proportion pattern."""

    @given(
        n=st.integers(min_value=0, max_value=500),
        thousandths=st.integers(min_value=0, max_value=1000),
    )
    def test_every_prefix_hits_ratio(self, n, thousandths):
        ratio = thousandths / 1000
        flagged = sum(proportion_flag(i, ratio) for i in range(n))
        assert flagged == (n * thousandths) // 1000

    def test_thirty_percent_pattern(self):
        flags = [proportion_flag(i, 0.30) for i in range(10)]
        assert sum(flags) == 3

    def test_invalid_ratio(self):
        with pytest.raises(ConfigurationError):
            proportion_flag(0, -0.1)


class TestMonthStarts:
    """Tests for month enumeration."""

    def test_two_years(self):
        months = month_starts(date(2023, 1, 15), date(2024, 12, 31))
        assert len(months) == 24
        assert months[0] == date(2023, 1, 1)
        assert months[-1] == date(2024, 12, 1)
        assert all(m.day == 1 for m in months)

    def test_single_day(self):
        assert month_starts(date(2024, 3, 15), date(2024, 3, 15)) == [date(2024, 3, 1)]

    def test_month_start(self):
        assert month_start(date(2024, 2, 29)) == date(2024, 2, 1)
