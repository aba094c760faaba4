from __future__ import annotations

import math

import numpy as np
import pytest

from crystal.frame import build_frame


def test_build_frame_resolves_phase_and_angles(make_config) -> None:
    cfg = make_config(frames=10, angles="4")
    f = build_frame(cfg, 5)
    assert f.frame == 5 and f.frames == 10
    assert f.phase == pytest.approx(math.pi)
    np.testing.assert_allclose(f.angles, [0.0, math.pi / 4, math.pi / 2, 3 * math.pi / 4])
    assert (f.width, f.height, f.scale) == (cfg.width, cfg.height, cfg.scale)


def test_build_frame_interpolates_phase_speed(make_config) -> None:
    cfg = make_config(frames=10, phase_speed="0-2")
    assert build_frame(cfg, 0).phase == 0.0
    # speed(5) = 1.0 -> (2pi/10)*5*1
    assert build_frame(cfg, 5).phase == pytest.approx(math.pi)


def test_frame_angles_are_read_only(make_config) -> None:
    f = build_frame(make_config(), 0)
    with pytest.raises(ValueError):
        f.angles[0] = 1.0
