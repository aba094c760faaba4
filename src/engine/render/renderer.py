"""
どこで: `engine.render` の 1 フレーム描画。
何を: RenderFrame の全画素について波動場→shade→カラーライザを適用し、画素バッファ (H, W, C) uint8 を返す。
なぜ: 1 フレームの計算を純関数として切り出し、スケジューラ側は並列化と書き出しだけを担うため。
"""

from __future__ import annotations

import logging

import numpy as np

from crystal.colorize import Colorizer
from crystal.frame import RenderFrame
from crystal.wave import shade_field

logger = logging.getLogger(__name__)


def render_frame(
    frame: RenderFrame, colorizer: Colorizer, *, use_numba: bool | None = None
) -> np.ndarray:
    """1 フレームを画素バッファへ描画する。

    Parameters
    ----------
    frame : RenderFrame
        フレームの派生パラメータ（位相・AngleSet・ビューポート）。
    colorizer : Colorizer
        `colorizer(shade, frame, frames)` を満たすカラーライザ。
    use_numba : bool | None
        波動場カーネルの選択（None は設定に従う）。

    Returns
    -------
    np.ndarray
        (height, width, channels) の uint8 配列（C 連続）。
    """
    shades = shade_field(
        frame.angles,
        frame.phase,
        frame.width,
        frame.height,
        frame.scale,
        frame.x_offset,
        frame.y_offset,
        use_numba=use_numba,
    )
    pixels = colorizer(shades, frame.frame, frame.frames)
    logger.debug(
        "rendered frame=%d size=%dx%d waves=%d phase=%.4f",
        frame.frame,
        frame.width,
        frame.height,
        len(frame.angles),
        frame.phase,
    )
    return np.ascontiguousarray(pixels, dtype=np.uint8)


class FrameRenderer:
    """カラーライザを束ねた描画器。ワーカごとに 1 つ持つ（状態は持たない）。"""

    def __init__(self, colorizer: Colorizer, *, use_numba: bool | None = None) -> None:
        self._colorizer = colorizer
        self._use_numba = use_numba

    def render(self, frame: RenderFrame) -> np.ndarray:
        return render_frame(frame, self._colorizer, use_numba=self._use_numba)


__all__ = ["FrameRenderer", "render_frame"]
