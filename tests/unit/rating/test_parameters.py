"""
Tests for the item parameter model.

All parameters are deterministic functions of difficulty b (and response
time T for the effective slope).
"""

import math

import pytest

from rating_service.core.exceptions import ModelDomainError
from rating_service.rating import (
    ItemParameters,
    base_slope,
    compute_item_parameters,
    effective_slope,
    guessing_floor,
    reference_time,
)


class TestBaseSlope:
    """Tests for base_slope."""

    def test_known_values(self) -> None:
        assert base_slope(0.0) == pytest.approx(6.0)
        assert base_slope(25.0) == pytest.approx(11.0)
        assert base_slope(100.0) == pytest.approx(26.0)

    def test_increases_with_difficulty(self) -> None:
        """Harder items have flatter base curves."""
        assert base_slope(80.0) > base_slope(20.0)


class TestReferenceTime:
    """Tests for reference_time."""

    def test_known_values(self) -> None:
        assert reference_time(0.0) == pytest.approx(8.55)
        assert reference_time(25.0) == pytest.approx(38.560146041987394)
        assert reference_time(100.0) == pytest.approx(899.2400193485207)

    def test_increases_with_difficulty(self) -> None:
        assert reference_time(60.0) > reference_time(30.0)


class TestGuessingFloor:
    """Tests for guessing_floor."""

    def test_known_values(self) -> None:
        assert guessing_floor(0.0) == pytest.approx(0.25)
        assert guessing_floor(25.0) == pytest.approx(0.2125)
        assert guessing_floor(100.0) == pytest.approx(0.10)

    def test_not_clamped_outside_nominal_range(self) -> None:
        """Out-of-range difficulties are passed through unclamped."""
        assert guessing_floor(200.0) == pytest.approx(-0.05)
        assert guessing_floor(-100.0) == pytest.approx(0.40)


class TestEffectiveSlope:
    """Tests for effective_slope."""

    def test_golden_value(self) -> None:
        """b=25, T=30 matches the closed-form value."""
        expected = 11.0 * (math.log(31.0) / math.log(39.560146041987394)) ** 2
        assert effective_slope(25.0, 30.0) == pytest.approx(expected)
        assert effective_slope(25.0, 30.0) == pytest.approx(9.589778381577265)

    def test_equals_base_slope_at_reference_time(self) -> None:
        """At T = T_ref(b) the log-ratio is 1."""
        b = 40.0
        t_ref = reference_time(b)
        assert effective_slope(b, t_ref) == pytest.approx(base_slope(b))

    def test_zero_time_gives_zero_slope(self) -> None:
        assert effective_slope(25.0, 0.0) == 0.0

    def test_grows_with_time(self) -> None:
        assert effective_slope(50.0, 120.0) > effective_slope(50.0, 10.0)

    def test_undefined_reference_log_raises(self) -> None:
        """Very negative difficulty drives T_ref below -1."""
        assert reference_time(-30.0) < -1.0
        with pytest.raises(ModelDomainError) as exc_info:
            effective_slope(-30.0, 10.0)
        assert exc_info.value.difficulty == -30.0
        assert exc_info.value.response_time == 10.0

    def test_zero_reference_time_raises(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """T_ref(b) == 0 makes log(T_ref + 1) zero, the slope's divisor."""
        monkeypatch.setattr(
            "rating_service.rating.parameters.reference_time", lambda b: 0.0
        )
        with pytest.raises(ModelDomainError, match="reference time is zero"):
            effective_slope(25.0, 10.0)

    def test_undefined_time_log_raises(self) -> None:
        with pytest.raises(ModelDomainError, match="response time"):
            effective_slope(25.0, -2.0)


class TestComputeItemParameters:
    """Tests for compute_item_parameters."""

    def test_returns_slope_and_floor(self) -> None:
        params = compute_item_parameters(25.0, 30.0)
        assert isinstance(params, ItemParameters)
        assert params.effective_slope == pytest.approx(9.589778381577265)
        assert params.guessing_floor == pytest.approx(0.2125)

    def test_deterministic(self) -> None:
        assert compute_item_parameters(70.0, 45.0) == compute_item_parameters(
            70.0, 45.0
        )

    def test_propagates_domain_error(self) -> None:
        with pytest.raises(ModelDomainError):
            compute_item_parameters(-50.0, 5.0)
