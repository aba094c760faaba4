"""
どこで: `crystal.wave`
何を: 回転平面波の重ね合わせ（波動場）を評価し、交互折り返し規則で濃淡（shade）に変換する。
なぜ: 1 点評価（スカラ）と 1 フレーム全体の評価（配列）を同じ式で提供し、レンダラから純関数として使うため。

式:
- `wave(theta, phase, x, y) = (cos(cos(theta)*x + sin(theta)*y + phase) + 1) / 2`（[0, 1]）
- `combine`: 和 s の床付き剰余 `s - floor(s)` を取り、`floor(s)` が偶数ならそのまま、奇数なら `1 - wrapped`
- shade: [0, 1] に clamp して 255 倍（浮動小数のまま）

実装メモ:
- フレーム全体は Numba の `_shade_kernel`（nogil）で評価する。`QC_USE_NUMBA=0` で NumPy 版を使う。
- 両経路とも角度順に逐次加算するため、結果は丸め誤差の範囲で一致する。
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common import settings

SHADE_MAX: float = 255.0


def wave(theta, phase, x, y):
    """回転角 `theta`・位相 `phase` の平面波を点 (x, y) で評価する（スカラ/配列可）。"""
    inner = np.cos(theta) * x + np.sin(theta) * y + phase
    return (np.cos(inner) + 1.0) / 2.0


def combine(waves: Sequence[float] | np.ndarray):
    """波の値を合算して交互折り返し規則で [0, 1] へ畳み込む。

    配列を渡した場合は axis=0（波の軸）で合算する。和は可換なので波の順序に依存しない。
    """
    total = np.sum(np.asarray(waves, dtype=np.float64), axis=0)
    floor = np.floor(total)
    wrapped = total - floor
    out = np.where(np.mod(floor, 2.0) == 0.0, wrapped, 1.0 - wrapped)
    return float(out) if np.ndim(out) == 0 else out


def to_shade(combined):
    """合成値を [0, 1] に clamp して [0, 255] の濃淡へ。"""
    out = np.clip(combined, 0.0, 1.0) * SHADE_MAX
    return float(out) if np.ndim(out) == 0 else out


def scaled_point(scale: float, size: int, point):
    """ピクセル座標を波動場座標へ: `scale * (2*point/(size-1) - 1)`。

    `size` は max(width, height)。size == 1 は分母 0 になるため設定検証で拒否される。
    """
    return scale * ((2.0 * point / (size - 1.0)) - 1.0)


def frame_phase(frame: int, frames: int, speed: float = 1.0) -> float:
    """フレーム `frame`（全 `frames`）の位相。`speed` はアニメ全体での周回数。"""
    return ((2.0 * math.pi) / frames) * frame * speed


def axis_coords(
    width: int, height: int, scale: float, x_offset: float = 0.0, y_offset: float = 0.0
) -> tuple[np.ndarray, np.ndarray]:
    """ビューポート写像後の x 座標列 (W,) と y 座標列 (H,) を返す。"""
    max_dim = max(width, height)
    xs = scaled_point(scale, max_dim, np.arange(width, dtype=np.float64) + x_offset)
    ys = scaled_point(scale, max_dim, np.arange(height, dtype=np.float64) + y_offset)
    return xs, ys


@njit(cache=True, nogil=True)
def _shade_kernel(
    xs: np.ndarray, ys: np.ndarray, angles: np.ndarray, phase: float, out: np.ndarray
) -> None:
    n = angles.shape[0]
    cos_t = np.empty(n)
    sin_t = np.empty(n)
    for k in range(n):
        cos_t[k] = math.cos(angles[k])
        sin_t[k] = math.sin(angles[k])
    for j in range(ys.shape[0]):
        y = ys[j]
        for i in range(xs.shape[0]):
            x = xs[i]
            s = 0.0
            for k in range(n):
                s += (math.cos(cos_t[k] * x + sin_t[k] * y + phase) + 1.0) / 2.0
            fl = math.floor(s)
            wrapped = s - fl
            v = wrapped if fl % 2.0 == 0.0 else 1.0 - wrapped
            if v < 0.0:
                v = 0.0
            elif v > 1.0:
                v = 1.0
            out[j, i] = v * 255.0


def _shade_numpy(xs: np.ndarray, ys: np.ndarray, angles: np.ndarray, phase: float) -> np.ndarray:
    total = np.zeros((ys.shape[0], xs.shape[0]), dtype=np.float64)
    for theta in angles:
        total += wave(float(theta), phase, xs[None, :], ys[:, None])
    return to_shade(combine(total[None, ...]))


def shade_field(
    angles: np.ndarray,
    phase: float,
    width: int,
    height: int,
    scale: float,
    x_offset: float = 0.0,
    y_offset: float = 0.0,
    *,
    use_numba: bool | None = None,
) -> np.ndarray:
    """1 フレーム分の濃淡グリッド (height, width) float64 を返す。

    Parameters
    ----------
    angles : np.ndarray
        AngleSet（rad）。
    phase : float
        全波共通の位相。
    use_numba : bool | None
        None のときは設定 `QC_USE_NUMBA` に従う。
    """
    xs, ys = axis_coords(width, height, scale, x_offset, y_offset)
    angs = np.ascontiguousarray(angles, dtype=np.float64)
    if use_numba is None:
        use_numba = settings.get().USE_NUMBA
    if not use_numba:
        return _shade_numpy(xs, ys, angs, float(phase))
    out = np.empty((height, width), dtype=np.float64)
    _shade_kernel(xs, ys, angs, float(phase), out)
    return out


__all__ = [
    "wave",
    "combine",
    "to_shade",
    "scaled_point",
    "frame_phase",
    "axis_coords",
    "shade_field",
]
