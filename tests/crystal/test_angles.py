from __future__ import annotations

import math

import numpy as np
import pytest

from common.errors import ConfigurationError, RenderDomainError
from crystal.angles import (
    AngleSpec,
    derive_angles,
    equal_angles,
    parse_angle_spec,
    percent_angles,
    proportional_angles,
)
from crystal.keyframes import Keyframes


@pytest.mark.parametrize("n", [1, 2, 5, 7, 12])
def test_equal_angles_are_evenly_spread(n: int) -> None:
    a = equal_angles(n)
    assert a.shape == (n,)
    assert a[0] == 0.0
    assert a[-1] < math.pi
    if n > 1:
        d = np.diff(a)
        assert np.all(d > 0.0)
        np.testing.assert_allclose(d, math.pi / n)


def test_proportional_one_one_is_half_pi_then_pi() -> None:
    np.testing.assert_allclose(proportional_angles([1, 1]), [math.pi / 2, math.pi])


def test_proportional_is_cumulative_and_bounded() -> None:
    a = proportional_angles([1, 2, 1])
    np.testing.assert_allclose(a, [math.pi / 4, 3 * math.pi / 4, math.pi])
    assert np.all(np.diff(a) >= 0.0)
    assert np.all((a >= 0.0) & (a <= math.pi + 1e-12))


def test_proportional_leading_zero_seeds_zero_angle() -> None:
    np.testing.assert_allclose(proportional_angles([0, 1, 1]), [0.0, math.pi / 2, math.pi])


def test_proportional_rejects_degenerate_weights() -> None:
    with pytest.raises(RenderDomainError):
        proportional_angles([0, 0])
    with pytest.raises(RenderDomainError):
        proportional_angles([1, -1, 2])
    with pytest.raises(RenderDomainError):
        proportional_angles([])


def test_percent_angles_are_independent() -> None:
    np.testing.assert_allclose(percent_angles([0, 25, 50, 100]), [0.0, math.pi / 4, math.pi / 2, math.pi])


@pytest.mark.parametrize("values", [[50, 10], [0, 150], [-5, 10]])
def test_percent_angles_must_stay_monotonic_within_half_turn(values) -> None:
    with pytest.raises(RenderDomainError):
        percent_angles(values)


def test_equal_angles_rejects_zero() -> None:
    with pytest.raises(RenderDomainError):
        equal_angles(0)


def test_parse_single_number_is_equal_partition() -> None:
    spec = parse_angle_spec("6")
    assert spec == AngleSpec(mode="equal", count=6)
    assert spec.wave_count == 6
    assert not spec.is_animated
    assert str(spec) == "6"


def test_parse_list_is_proportional_with_keyframes() -> None:
    spec = parse_angle_spec("1,2-4,1")
    assert spec.mode == "proportional"
    assert spec.weights == (Keyframes((1.0,)), Keyframes((2.0, 4.0)), Keyframes((1.0,)))
    assert spec.is_animated
    assert str(spec) == "1,2-4,1"


def test_parse_percent_mode_single_value_is_a_list() -> None:
    spec = parse_angle_spec("50", percent=True)
    assert spec.mode == "percent"
    np.testing.assert_allclose(derive_angles(spec), [math.pi / 2])


@pytest.mark.parametrize("text", ["", "0", "-3", "2.5", "a,b", "1,,2", "1,-2"])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_angle_spec(text)


def test_derive_angles_morphs_weights_across_frames() -> None:
    spec = parse_angle_spec("1,1-3")
    first = derive_angles(spec, 0, 10)
    last = derive_angles(spec, 9, 10)
    np.testing.assert_allclose(first, [math.pi / 2, math.pi])
    # 9/10 の位置で重みは 1 + 0.9*2 = 2.8
    np.testing.assert_allclose(last, [math.pi / 3.8, math.pi])
