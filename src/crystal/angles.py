"""
どこで: `crystal.angles`
何を: 波の回転角集合（AngleSet）を、等分割数/比率リスト/パーセントリストから導出する。
なぜ: 波の向きの決め方を 1 つの純関数 `derive_angles` に集約し、フレームごとに再導出できるようにするため。

規約:
- 等分割: `angle_k = k*pi/n`（k in [0, n)）。先頭は 0、末尾は pi 未満。
- 比率: `S = sum(w)` として累積 `angle_k = angle_{k-1} + w_k*pi/S`。先頭に 0 は補わない
  （[1, 1] -> [pi/2, pi]）。0 度の波が必要なら先頭に重み 0 を置く。
- パーセント: `angle_k = p_k/100*pi`（各要素独立、非累積）。値は [0, 100] かつ非減少（AngleSet は [0, pi] で単調）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from common.errors import ConfigurationError, RenderDomainError

from .keyframes import STAGE_SEPARATOR, Keyframes, parse_keyframes

AngleMode = Literal["equal", "proportional", "percent"]

LIST_SEPARATOR = ","


@dataclass(frozen=True, slots=True)
class AngleSpec:
    """角度指定。`equal` は `count`、それ以外は `weights`（各要素がキーフレーム）を使う。"""

    mode: AngleMode
    count: int = 0
    weights: tuple[Keyframes, ...] = ()

    @property
    def is_animated(self) -> bool:
        return any(w.is_animated for w in self.weights)

    @property
    def wave_count(self) -> int:
        return self.count if self.mode == "equal" else len(self.weights)

    def __str__(self) -> str:
        if self.mode == "equal":
            return str(self.count)
        return LIST_SEPARATOR.join(str(w) for w in self.weights)


def equal_angles(n: int) -> np.ndarray:
    """n 本の波を [0, pi) に等間隔で配置する。"""
    if n < 1:
        raise RenderDomainError(f"wave count must be >= 1, got {n}")
    return np.arange(n, dtype=np.float64) * (math.pi / n)


def proportional_angles(weights: Sequence[float]) -> np.ndarray:
    """重みの累積比で [0, pi] を分割する。"""
    w = np.asarray(weights, dtype=np.float64)
    if w.size == 0:
        raise RenderDomainError("proportional angles need at least one weight")
    if np.any(w < 0.0):
        raise RenderDomainError(f"angle weights must be non-negative: {w.tolist()}")
    total = float(w.sum())
    if total <= 0.0:
        raise RenderDomainError("angle weights sum to zero")
    return np.cumsum(w * (math.pi / total))


def percent_angles(percents: Sequence[float]) -> np.ndarray:
    """各値を pi に対する百分率として角度化する。"""
    p = np.asarray(percents, dtype=np.float64)
    if p.size == 0:
        raise RenderDomainError("percent angles need at least one value")
    if np.any(p < 0.0) or np.any(p > 100.0):
        raise RenderDomainError(f"angle percents must be within [0, 100]: {p.tolist()}")
    if np.any(np.diff(p) < 0.0):
        raise RenderDomainError(f"angle percents must be non-decreasing: {p.tolist()}")
    return p / 100.0 * math.pi


def derive_angles(spec: AngleSpec, frame: int = 0, frames: int = 1) -> np.ndarray:
    """AngleSpec をフレーム `frame` で解決して角度配列（rad, float64）を返す。"""
    if spec.mode == "equal":
        return equal_angles(spec.count)
    values = [w.at(frame, frames) for w in spec.weights]
    if spec.mode == "proportional":
        return proportional_angles(values)
    if spec.mode == "percent":
        return percent_angles(values)
    raise RenderDomainError(f"unknown angle mode: {spec.mode!r}")


def parse_angle_spec(text: str, *, percent: bool = False) -> AngleSpec:
    """角度指定文字列を AngleSpec へ。

    - `"6"` -> 6 本の等分割（`percent=False` のときのみ）。
    - `"1,2,1"` -> 比率（`percent=True` ならパーセント）。
    - 各要素は `"1-3"` のようにダッシュ区切りでキーフレーム化できる。
    """
    raw = str(text).strip()
    if not raw:
        raise ConfigurationError("empty angle specification")
    if not percent and LIST_SEPARATOR not in raw and STAGE_SEPARATOR not in raw:
        try:
            count = int(raw)
        except ValueError as e:
            raise ConfigurationError(f"wave count must be an integer: '{raw}'") from e
        if count < 1:
            raise ConfigurationError(f"wave count must be >= 1, got {count}")
        return AngleSpec(mode="equal", count=count)

    weights = tuple(parse_keyframes(part) for part in raw.split(LIST_SEPARATOR))
    mode: AngleMode = "percent" if percent else "proportional"
    for w in weights:
        if any(v < 0.0 for v in w.stages):
            raise ConfigurationError(f"angle values must be non-negative: '{raw}'")
    return AngleSpec(mode=mode, weights=weights)


__all__ = [
    "AngleMode",
    "AngleSpec",
    "equal_angles",
    "proportional_angles",
    "percent_angles",
    "derive_angles",
    "parse_angle_spec",
]
