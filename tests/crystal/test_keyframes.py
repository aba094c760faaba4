from __future__ import annotations

import pytest

from common.errors import ConfigurationError
from crystal.keyframes import Keyframes, parse_keyframes


def test_single_literal_is_constant() -> None:
    k = parse_keyframes("2.5")
    assert not k.is_animated
    assert [k.at(f, 10) for f in range(10)] == [2.5] * 10


def test_three_stages_over_ten_frames() -> None:
    k = parse_keyframes("0-50-100")
    assert k.at(0, 10) == 0.0
    assert k.at(5, 10) == 50.0
    assert k.at(9, 10) == pytest.approx(90.0)
    assert 90.0 <= k.at(9, 10) < 100.0
    # アニメーション範囲の端（f == F）で最後のステージ
    assert k.at(10, 10) == 100.0


def test_interpolation_is_monotone_for_increasing_stages() -> None:
    k = parse_keyframes("1-3")
    values = [k.at(f, 7) for f in range(8)]
    assert values == sorted(values)
    assert values[0] == 1.0
    assert values[-1] == 3.0


def test_segments_can_go_down_and_up() -> None:
    k = parse_keyframes("1-0-1")
    assert k.at(0, 4) == 1.0
    assert k.at(1, 4) == pytest.approx(0.5)
    assert k.at(2, 4) == 0.0
    assert k.at(3, 4) == pytest.approx(0.5)


def test_non_integer_segment_length() -> None:
    k = parse_keyframes("0-10-20-30")
    # trans = 10/3
    assert k.at(4, 10) == pytest.approx(12.0)


@pytest.mark.parametrize("text", ["", "1-", "-1", "a", "1-b", "nan", "1-inf"])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_keyframes(text)


def test_empty_keyframes_rejected() -> None:
    with pytest.raises(ConfigurationError):
        Keyframes(())


def test_str_round_trip_format() -> None:
    assert str(parse_keyframes("0-0.5-2")) == "0-0.5-2"
    assert Keyframes.constant(3).stages == (3.0,)
